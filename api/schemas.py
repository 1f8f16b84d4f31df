"""Request/Response schemas for the Property Marketplace API."""

from typing import Any

from pydantic import BaseModel, Field

# Any non-null value counts as supplied; non-numeric ones are scored, not rejected
FeatureValue = Any


class EstimateRequest(BaseModel):
    """Property features for price estimation. Any subset may be sent."""

    jumlah_lantai: FeatureValue = Field(None, description="Number of floors")
    kamar_tidur: FeatureValue = Field(None, description="Number of bedrooms")
    kamar_mandi: FeatureValue = Field(None, description="Number of bathrooms")
    luas_bangunan: FeatureValue = Field(None, description="Building area in square meters")
    luas_tanah: FeatureValue = Field(None, description="Land area in square meters")
    jumlah_carport: FeatureValue = Field(None, description="Number of carports")
    jumlah_garage: FeatureValue = Field(None, description="Number of garages")


class EstimateResponse(BaseModel):
    """Estimated price range."""

    status: str
    estimatedPrice: str = Field(description="Formatted price range, or 'Rp. 0'")
    neighborCount: int | None = Field(None, description="Reference rows the range was taken from")
    maxDistance: float | None = Field(None, description="Distance to the farthest of those rows")


class StatusResponse(BaseModel):
    status: str
    message: str


class Credentials(BaseModel):
    email: str | None = None
    password: str | None = None


class OrderCreate(BaseModel):
    """New order placed by a client with a vendor."""

    id_pemesan: str | None = Field(None, description="Client (orderer) user id")
    id_vendor: str | None = Field(None, description="Vendor id")
    serviceType: str | None = None
    propertyType: str | None = None
    budget: float | str | None = None
    startDate: str | None = None
    endDate: str | None = None
    projectDescription: str | None = None
    materialProvider: str | None = None


class OrderStatusUpdate(BaseModel):
    status: str | None = None


class RatingCreate(BaseModel):
    id_vendor: str | None = None
    rating: float | None = Field(None, description="Rating given by the client")
    id_client: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    corpus_loaded: bool
    corpus_rows: int | None
    corpus_source: str | None
