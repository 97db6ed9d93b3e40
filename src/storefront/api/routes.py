"""FastAPI routes for the Storefront domain — delivery fee and zone settings."""

import json

from fastapi import APIRouter
from protean.utils.globals import current_domain

from storefront.api.schemas import (
    ConfigureZoneRequest,
    DeliveryQuoteRequest,
    DeliveryQuoteResponse,
    DeliveryZoneResponse,
    ZoneIdResponse,
)
from storefront.delivery.evaluator import DeliveryZoneEvaluator
from storefront.delivery.management import ConfigureDeliveryZone, current_zone
from storefront.delivery.zone import PRIMARY_ZONE_ID, GeoPoint

delivery_router = APIRouter(prefix="/delivery", tags=["delivery"])


@delivery_router.post("/calculate", response_model=DeliveryQuoteResponse)
async def calculate_delivery(body: DeliveryQuoteRequest) -> DeliveryQuoteResponse:
    """Server-authoritative distance, fee and ETA for a delivery point."""
    evaluator = DeliveryZoneEvaluator(zone_provider=current_zone)
    evaluation = evaluator.evaluate(GeoPoint(latitude=body.latitude, longitude=body.longitude))
    return DeliveryQuoteResponse(
        distance=evaluation.distance_km,
        fee=evaluation.fee,
        time=evaluation.eta_minutes,
        serviceable=evaluation.serviceable,
        message=evaluation.message,
    )


@delivery_router.get("/zone", response_model=DeliveryZoneResponse)
async def get_delivery_zone() -> DeliveryZoneResponse:
    return DeliveryZoneResponse(**current_zone().to_config())


@delivery_router.put("/zone", response_model=ZoneIdResponse)
async def configure_delivery_zone(body: ConfigureZoneRequest) -> ZoneIdResponse:
    command = ConfigureDeliveryZone(
        zone_id=PRIMARY_ZONE_ID,
        name=body.name,
        latitude=body.latitude,
        longitude=body.longitude,
        radius_km=body.radius_km,
        tiers=json.dumps([tier.model_dump() for tier in body.tiers]),
    )
    zone_id = current_domain.process(command, asynchronous=False)
    return ZoneIdResponse(zone_id=zone_id)
