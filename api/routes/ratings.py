"""Client ratings of vendors."""

import logging

from fastapi import APIRouter, Depends

from api.deps import ApiError, form_or_json, get_store
from api.schemas import RatingCreate
from property_market.storage.documents import DocumentStore
from property_market.vendors.filtering import average_rating

logger = logging.getLogger(__name__)

router = APIRouter()

RATINGS = "ratings"


@router.post("/add", status_code=201)
def add_rating(
    rating: RatingCreate = Depends(form_or_json(RatingCreate)),
    store: DocumentStore = Depends(get_store),
):
    """Create or replace the rating a client gave a vendor."""
    if not rating.id_vendor or rating.rating is None:
        raise ApiError(400, "id_vendor dan rating diperlukan")
    if rating.id_client is None:
        raise ApiError(400, "id_client diperlukan")

    # One rating per client per vendor
    rating_id = f"{rating.id_vendor}_{rating.id_client}"
    store.set(RATINGS, rating_id, {
        "id_vendor": rating.id_vendor,
        "rating": rating.rating,
        "id_client": rating.id_client,
    })
    return {"status": "success", "message": "Rating berhasil ditambahkan"}


@router.get("/view/{id_vendor}")
def view_vendor_rating(id_vendor: str, store: DocumentStore = Depends(get_store)):
    """Average rating of a vendor, one decimal."""
    ratings = store.where(RATINGS, id_vendor=id_vendor)
    if not ratings:
        raise ApiError(404, "Tidak ada rating untuk vendor ini")
    return {"status": "success", "rating": f"{average_rating(ratings):.1f}"}


@router.get("/view_by_client")
def view_client_rating(
    id_vendor: str | None = None,
    id_client: str | None = None,
    store: DocumentStore = Depends(get_store),
):
    """The rating a given client gave a given vendor, if any."""
    if not id_vendor or not id_client:
        raise ApiError(400, "id_vendor and id_client are required")

    ratings = store.where(RATINGS, id_vendor=id_vendor, id_client=id_client)
    if not ratings:
        return {"status": "success", "message": "Tidak ada rating yang kamu berikan", "data": None}
    return {"status": "success", "message": "Terdapat rating yang kamu berikan", "data": ratings[0]}
