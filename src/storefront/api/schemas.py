"""Pydantic request/response schemas for the Storefront API.

These are external contracts (anti-corruption layer), separate from the
internal Protean commands and value objects.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Delivery fee confirmation
# ---------------------------------------------------------------------------
class DeliveryQuoteRequest(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "latitude": 19.0825,
                    "longitude": 72.8901,
                }
            ]
        }
    }


class DeliveryQuoteResponse(BaseModel):
    distance: float
    fee: int
    time: int | None = None  # Minutes
    serviceable: bool
    message: str


# ---------------------------------------------------------------------------
# Zone configuration
# ---------------------------------------------------------------------------
class FeeTierSchema(BaseModel):
    label: str | None = None
    min_km: float = Field(ge=0)
    max_km: float | None = Field(default=None, ge=0)
    base_fee: int = Field(ge=0)
    per_km_fee: int = Field(default=0, ge=0)


class ConfigureZoneRequest(BaseModel):
    name: str | None = None
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    radius_km: float = Field(gt=0)
    tiers: list[FeeTierSchema]

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Kurla West, Mumbai",
                    "latitude": 19.0728,
                    "longitude": 72.8826,
                    "radius_km": 10,
                    "tiers": [
                        {"label": "Base", "min_km": 0, "max_km": 2, "base_fee": 20},
                        {"label": "Per km", "min_km": 2, "base_fee": 20, "per_km_fee": 10},
                    ],
                }
            ]
        }
    }


class DeliveryZoneResponse(BaseModel):
    zone_id: str
    name: str | None = None
    latitude: float
    longitude: float
    radius_km: float
    tiers: list[FeeTierSchema]


class ZoneIdResponse(BaseModel):
    zone_id: str
