"""Battery endpoints (GET, serial number in the query string).

Endpoints:
  - /v3/motor_data/battery_info
  - /v3/motor_data/battery_info/health
"""

from __future__ import annotations

import logging
from urllib.parse import urlencode

from pyniu._api._common import execute, parse_data, validate_params
from pyniu._constants import BATTERY_HEALTH_PATH, BATTERY_INFO_PATH
from pyniu._transport import Transport
from pyniu.config import NiuConfig
from pyniu.errors import ErrorDescriptor
from pyniu.models.battery import BatteryHealth, BatteryInfo
from pyniu.models.requests import SerialNumberRequest
from pyniu.session import Session

_logger = logging.getLogger(__name__)


async def fetch_battery_info(
    config: NiuConfig,
    session: Session,
    transport: Transport,
    sn: str,
) -> BatteryInfo | ErrorDescriptor:
    """Fetch charge level and range for each battery compartment.

    Parameters
    ----------
    config : NiuConfig
        Client configuration.
    session : Session
        Authenticated session.
    transport : Transport
        HTTP transport.
    sn : str
        Vehicle serial number.
    """
    origin = "get_battery_info"
    request = validate_params(SerialNumberRequest, origin, sn=sn)
    if isinstance(request, ErrorDescriptor):
        return request

    response = await execute(
        f"{BATTERY_INFO_PATH}?{urlencode({'sn': request.sn})}",
        config=config,
        session=session,
        transport=transport,
        origin=origin,
    )
    if isinstance(response, ErrorDescriptor):
        return response

    info = parse_data(response, BatteryInfo, origin)
    if isinstance(info, BatteryInfo):
        _logger.debug(
            "Battery info: compartment_a=%s compartment_b=%s",
            info.compartment_a is not None,
            info.compartment_b is not None,
        )
    return info


async def fetch_battery_health(
    config: NiuConfig,
    session: Session,
    transport: Transport,
    sn: str,
) -> BatteryHealth | ErrorDescriptor:
    """Fetch the health grade of each battery compartment."""
    origin = "get_battery_health"
    request = validate_params(SerialNumberRequest, origin, sn=sn)
    if isinstance(request, ErrorDescriptor):
        return request

    response = await execute(
        f"{BATTERY_HEALTH_PATH}?{urlencode({'sn': request.sn})}",
        config=config,
        session=session,
        transport=transport,
        origin=origin,
    )
    if isinstance(response, ErrorDescriptor):
        return response
    return parse_data(response, BatteryHealth, origin)
