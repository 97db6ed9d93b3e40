"""Delivery zone configuration — admin command, handler and zone lookup."""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.delivery.zone import PRIMARY_ZONE_ID, DeliveryZone, GeoPoint, default_zone, tiers_from_config
from storefront.domain import logger, storefront


@storefront.command(part_of="DeliveryZone")
class ConfigureDeliveryZone:
    """Create or replace a delivery zone's center, boundary and fee tiers."""

    zone_id = Identifier()
    name = String(max_length=255)
    latitude = Float(required=True)
    longitude = Float(required=True)
    radius_km = Float(required=True)
    tiers = Text(required=True)  # JSON: list of {label, min_km, max_km, base_fee, per_km_fee}


@storefront.command_handler(part_of=DeliveryZone)
class ConfigureDeliveryZoneHandler:
    @handle(ConfigureDeliveryZone)
    def configure_delivery_zone(self, command):
        repo = current_domain.repository_for(DeliveryZone)

        rows = json.loads(command.tiers) if isinstance(command.tiers, str) else command.tiers
        center = GeoPoint(latitude=command.latitude, longitude=command.longitude)
        tiers = tiers_from_config(rows)
        zone_id = command.zone_id or PRIMARY_ZONE_ID

        try:
            zone = repo.get(zone_id)
        except ObjectNotFoundError:
            zone = DeliveryZone.define(
                zone_id=zone_id,
                name=command.name,
                center=center,
                radius_km=command.radius_km,
                tiers=tiers,
            )
        else:
            zone.reconfigure(center=center, radius_km=command.radius_km, tiers=tiers, name=command.name)

        repo.add(zone)
        logger.info("delivery.zone_configured", zone_id=str(zone_id), tiers=len(tiers))
        return str(zone.zone_id)


def current_zone(zone_id=PRIMARY_ZONE_ID):
    """Return the stored zone, or the settings-derived default when none is stored."""
    try:
        return current_domain.repository_for(DeliveryZone).get(zone_id)
    except ObjectNotFoundError:
        return default_zone()
