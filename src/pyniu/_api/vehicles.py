"""Vehicle endpoints on the app API.

Endpoints:
  - /motoinfo/list
  - /motoinfo/currentpos
  - /motoinfo/overallTally
  - /motorota/getfirmwareversion
"""

from __future__ import annotations

import json
import logging
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from pyniu._api._common import execute, parse_data, validate_params
from pyniu._constants import (
    FIRMWARE_VERSION_PATH,
    OVERALL_TALLY_PATH,
    VEHICLE_LIST_PATH,
    VEHICLE_POSITION_PATH,
)
from pyniu._transport import Transport
from pyniu.config import NiuConfig
from pyniu.errors import ErrorDescriptor, ErrorKind, normalize_error
from pyniu.models.requests import SerialNumberRequest
from pyniu.models.vehicle import FirmwareVersion, OverallTally, Vehicle, VehiclePosition
from pyniu.session import Session

_logger = logging.getLogger(__name__)

TModel = TypeVar("TModel", bound=BaseModel)


async def fetch_vehicle_list(
    config: NiuConfig,
    session: Session,
    transport: Transport,
) -> list[Vehicle] | ErrorDescriptor:
    """Fetch all vehicles associated with the authenticated account."""
    origin = "get_vehicles"
    response = await execute(
        VEHICLE_LIST_PATH,
        payload={},
        config=config,
        session=session,
        transport=transport,
        origin=origin,
    )
    if isinstance(response, ErrorDescriptor):
        return response

    items = response.data
    if not isinstance(items, list):
        return normalize_error("Vehicle list is not an array", origin, ErrorKind.VENDOR)
    try:
        vehicles = [Vehicle.model_validate(item) for item in items]
    except ValidationError as exc:
        return normalize_error(
            {"message": "Unexpected vehicle list entry", "errors": json.loads(exc.json(include_url=False))},
            origin,
            ErrorKind.VENDOR,
        )
    _logger.debug("Vehicle list: %d vehicle(s)", len(vehicles))
    return vehicles


async def _fetch_by_serial(
    path: str,
    model_cls: type[TModel],
    origin: str,
    config: NiuConfig,
    session: Session,
    transport: Transport,
    sn: str,
) -> TModel | ErrorDescriptor:
    request = validate_params(SerialNumberRequest, origin, sn=sn)
    if isinstance(request, ErrorDescriptor):
        return request
    response = await execute(
        path,
        payload={"sn": request.sn},
        config=config,
        session=session,
        transport=transport,
        origin=origin,
    )
    if isinstance(response, ErrorDescriptor):
        return response
    return parse_data(response, model_cls, origin)


async def fetch_vehicle_position(
    config: NiuConfig,
    session: Session,
    transport: Transport,
    sn: str,
) -> VehiclePosition | ErrorDescriptor:
    """Fetch the last known position of a vehicle."""
    return await _fetch_by_serial(
        VEHICLE_POSITION_PATH, VehiclePosition, "get_vehicle_position", config, session, transport, sn
    )


async def fetch_overall_tally(
    config: NiuConfig,
    session: Session,
    transport: Transport,
    sn: str,
) -> OverallTally | ErrorDescriptor:
    """Fetch lifetime counters (total mileage) of a vehicle."""
    return await _fetch_by_serial(OVERALL_TALLY_PATH, OverallTally, "get_overall_tally", config, session, transport, sn)


async def fetch_firmware_version(
    config: NiuConfig,
    session: Session,
    transport: Transport,
    sn: str,
) -> FirmwareVersion | ErrorDescriptor:
    """Fetch the installed firmware version of a vehicle."""
    return await _fetch_by_serial(
        FIRMWARE_VERSION_PATH, FirmwareVersion, "get_firmware_version", config, session, transport, sn
    )
