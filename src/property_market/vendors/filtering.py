"""Vendor rating aggregation and listing filters."""

import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


def average_rating(ratings: list[dict]) -> float:
    """Mean of the ``rating`` fields, 0 when there are none."""
    if not ratings:
        return 0.0
    return sum(r["rating"] for r in ratings) / len(ratings)


def _clean(value: str | None) -> str:
    return value.lower().strip() if value else ""


def _clean_list(value: str | None) -> list[str]:
    return _clean(value).split(",") if value else []


def _clean_number(value: str | None) -> float | None:
    if not value:
        return None
    try:
        return float(_clean(value))
    except ValueError:
        return None


@dataclass
class VendorFilter:
    """Normalized query parameters of the vendor filter endpoint.

    Text is lower-cased and trimmed, comma lists are split. Empty or zero
    values mean the criterion is not applied.
    """

    tipe_layanan: list[str] = field(default_factory=list)
    lokasi_kantor: str = ""
    rating: float | None = None
    jenis_jasa: list[str] = field(default_factory=list)
    harga_minimum: float | None = None
    harga_maksimum: float | None = None
    nama_vendor: str = ""

    @classmethod
    def from_params(
        cls,
        tipe_layanan: str | None = None,
        lokasi_kantor: str | None = None,
        rating: str | None = None,
        jenis_jasa: str | None = None,
        harga_minimum: str | None = None,
        harga_maksimum: str | None = None,
        nama_vendor: str | None = None,
    ) -> "VendorFilter":
        return cls(
            tipe_layanan=_clean_list(tipe_layanan),
            lokasi_kantor=_clean(lokasi_kantor),
            rating=_clean_number(rating),
            jenis_jasa=_clean_list(jenis_jasa),
            harga_minimum=_clean_number(harga_minimum),
            harga_maksimum=_clean_number(harga_maksimum),
            nama_vendor=_clean(nama_vendor),
        )

    def matches(self, vendor: dict, avg_rating: float) -> bool:
        if self.tipe_layanan and not _contains_all(vendor.get("tipe_layanan"), self.tipe_layanan):
            return False

        lokasi = vendor.get("lokasi_kantor")
        if self.lokasi_kantor and lokasi and lokasi.lower() != self.lokasi_kantor:
            return False

        if self.rating and avg_rating < self.rating:
            return False

        if self.jenis_jasa and not _contains_all(vendor.get("jasa_kontraktor"), self.jenis_jasa):
            return False

        nama = vendor.get("nama_vendor")
        if self.nama_vendor and nama and self.nama_vendor not in nama.lower():
            return False

        harga = _clean_number(str(vendor["harga"])) if vendor.get("harga") else None
        if self.harga_minimum and harga and harga < self.harga_minimum:
            return False
        if self.harga_maksimum and harga and harga > self.harga_maksimum:
            return False

        return True


def _contains_all(values, options: list[str]) -> bool:
    # A vendor without the list never matches a list criterion
    if not isinstance(values, list):
        return False
    lowered = [str(v).lower() for v in values]
    return all(option in lowered for option in options)
