"""Headquarters map markers"""

import logging

from ...core.config import settings
from ...domain.enums import HeadquartersStatus
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...application.dtos.headquarters_dtos import MapDto, MapMarkerDto
from ...infrastructure.external_services.geocoding_service import GeocodingService

logger = logging.getLogger(__name__)


class HeadquartersMapUseCase:

    def __init__(self, unit_of_work: IUnitOfWork, geocoding_service: GeocodingService):
        self.unit_of_work = unit_of_work
        self.geocoding_service = geocoding_service

    async def execute(self, active_only: bool = True) -> MapDto:
        async with self.unit_of_work:
            headquarters = await self.unit_of_work.headquarters.list(
                status=HeadquartersStatus.ACTIVE.value if active_only else None
            )

        markers = []
        # One lookup at a time; Nominatim allows a single request per second
        for hq in headquarters:
            if not hq.address:
                continue
            coordinates = await self.geocoding_service.geocode(hq.address, hq.city)
            if coordinates is None:
                logger.debug("No coordinates for headquarters %s", hq.id)
                continue
            markers.append(MapMarkerDto(
                headquarters_id=hq.id.value,
                name=hq.name,
                address=hq.geocode_query,
                lat=coordinates[0],
                lng=coordinates[1],
            ))

        return MapDto(center=[settings.MAP_DEFAULT_LAT, settings.MAP_DEFAULT_LNG], markers=markers)
