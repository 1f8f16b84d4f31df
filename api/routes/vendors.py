"""Vendor profiles: creation, listing, filtering, update and removal."""

import logging

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from api.deps import ApiError, get_config, get_files, get_store, save_upload
from property_market.storage.documents import DocumentStore
from property_market.storage.files import FileStore
from property_market.vendors.filtering import VendorFilter, average_rating

logger = logging.getLogger(__name__)

router = APIRouter()

USERS = "users"
VENDORS = "vendors"
RATINGS = "ratings"


def as_list(value: list[str] | None) -> list[str] | None:
    """Drop empty form values; None when nothing was sent."""
    if not value:
        return None
    values = [v for v in value if v]
    return values or None


def save_portfolio(
    request: Request, files: FileStore, uploads: list[UploadFile] | None, limit: int
) -> list[str]:
    uploads = [u for u in uploads or [] if u.filename]
    if len(uploads) > limit:
        raise ApiError(400, f"Maksimal {limit} foto portofolio")
    return [save_upload(request, files, upload) for upload in uploads]


def with_details(store: DocumentStore, vendor: dict, avg_rating: float | None = None) -> dict:
    """Attach average rating and owner contact info to a vendor document."""
    if avg_rating is None:
        avg_rating = average_rating(store.where(RATINGS, id_vendor=vendor["id"]))
    vendor = dict(vendor)
    owner = store.get(USERS, vendor["id"])
    if owner is not None:
        vendor["pemilik_info"] = {
            "email": owner.get("email"),
            "nama": owner.get("nama"),
            "no_hp": owner.get("no_hp"),
        }
    vendor["rating"] = avg_rating
    return vendor


@router.get("/")
async def no_query():
    return {"status": "error", "message": "no query"}


@router.post("/add", status_code=201)
def add_vendor(
    request: Request,
    id: str | None = Form(None),
    tipe_layanan: list[str] | None = Form(None),
    jenis_properti: str | None = Form(None),
    jasa_kontraktor: list[str] | None = Form(None),
    lokasi_kantor: str | None = Form(None),
    deskripsi_layanan: str | None = Form(None),
    iklan_persetujuan: str | None = Form(None),
    portofolio: list[UploadFile] | None = File(None),
    store: DocumentStore = Depends(get_store),
    files: FileStore = Depends(get_files),
    config: dict = Depends(get_config),
):
    """Create the vendor profile of an existing user."""
    user = store.get(USERS, id) if id else None
    if user is None:
        raise ApiError(404, "Data user tidak ditemukan")

    urls = save_portfolio(request, files, portofolio, config["storage"]["max_portfolio_files"])
    store.set(VENDORS, id, {
        "id": id,
        "tipe_layanan": as_list(tipe_layanan) or [],
        "jenis_properti": jenis_properti,
        "jasa_kontraktor": as_list(jasa_kontraktor) or [],
        "lokasi_kantor": lokasi_kantor,
        "deskripsi_layanan": deskripsi_layanan,
        "profile": user.get("profile"),
        "portofolio": urls,
        "iklan_persetujuan": iklan_persetujuan,
    })

    logger.info(f"Added vendor {id} with {len(urls)} portfolio photo(s)")
    return {"status": "success", "message": "Data vendor berhasil ditambahkan"}


@router.get("/all")
def list_vendors(store: DocumentStore = Depends(get_store)):
    return [with_details(store, vendor) for vendor in store.all(VENDORS)]


@router.get("/filter")
def filter_vendors(
    tipe_layanan: str | None = None,
    lokasi_kantor: str | None = None,
    rating: str | None = None,
    jenis_jasa: str | None = None,
    harga_minimum: str | None = None,
    harga_maksimum: str | None = None,
    nama_vendor: str | None = None,
    store: DocumentStore = Depends(get_store),
):
    """Vendors matching every supplied criterion."""
    criteria = VendorFilter.from_params(
        tipe_layanan=tipe_layanan,
        lokasi_kantor=lokasi_kantor,
        rating=rating,
        jenis_jasa=jenis_jasa,
        harga_minimum=harga_minimum,
        harga_maksimum=harga_maksimum,
        nama_vendor=nama_vendor,
    )

    matched = []
    for vendor in store.all(VENDORS):
        avg = average_rating(store.where(RATINGS, id_vendor=vendor["id"]))
        if criteria.matches(vendor, avg):
            matched.append(with_details(store, vendor, avg))

    logger.debug(f"Vendor filter {criteria} matched {len(matched)} vendor(s)")
    return matched


@router.get("/{vendor_id}")
def get_vendor(vendor_id: str, store: DocumentStore = Depends(get_store)):
    vendor = store.get(VENDORS, vendor_id)
    if vendor is None:
        raise ApiError(404, "Data vendor tidak ditemukan")
    return with_details(store, vendor)


@router.put("/{vendor_id}")
def update_vendor(
    request: Request,
    vendor_id: str,
    userId: str | None = Form(None),
    tipe_layanan: list[str] | None = Form(None),
    jenis_properti: str | None = Form(None),
    jasa_kontraktor: list[str] | None = Form(None),
    lokasi_kantor: str | None = Form(None),
    deskripsi_layanan: str | None = Form(None),
    iklan_persetujuan: str | None = Form(None),
    portofolio: list[UploadFile] | None = File(None),
    store: DocumentStore = Depends(get_store),
    files: FileStore = Depends(get_files),
    config: dict = Depends(get_config),
):
    """Update supplied fields; new portfolio photos replace the old list."""
    vendor = store.get(VENDORS, vendor_id)
    if vendor is None:
        raise ApiError(404, "Data vendor tidak ditemukan")

    urls = save_portfolio(request, files, portofolio, config["storage"]["max_portfolio_files"])
    fields = {
        "tipe_layanan": as_list(tipe_layanan) or vendor.get("tipe_layanan"),
        "jasa_kontraktor": as_list(jasa_kontraktor) or vendor.get("jasa_kontraktor"),
        "portofolio": urls or vendor.get("portofolio"),
    }
    optional = {
        "userId": userId,
        "jenis_properti": jenis_properti,
        "lokasi_kantor": lokasi_kantor,
        "deskripsi_layanan": deskripsi_layanan,
        "iklan_persetujuan": iklan_persetujuan,
    }
    fields.update({key: value for key, value in optional.items() if value})

    store.update(VENDORS, vendor_id, fields)
    return {"status": "success", "message": "Data vendor berhasil diperbarui"}


@router.delete("/{vendor_id}")
def delete_vendor(vendor_id: str, store: DocumentStore = Depends(get_store)):
    """Delete a vendor and every rating given to it."""
    if not store.exists(VENDORS, vendor_id):
        raise ApiError(404, "Vendor tidak ditemukan")

    store.delete(VENDORS, vendor_id)
    removed = store.delete_where(RATINGS, id_vendor=vendor_id)
    logger.info(f"Deleted vendor {vendor_id} and {removed} rating(s)")
    return {"status": "success", "message": "Vendor dan rating terkait berhasil dihapus"}
