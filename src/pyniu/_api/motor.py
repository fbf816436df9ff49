"""Motor info endpoint: /v3/motor_data/motor_info."""

from __future__ import annotations

from urllib.parse import urlencode

from pyniu._api._common import execute, parse_data, validate_params
from pyniu._constants import MOTOR_INFO_PATH
from pyniu._transport import Transport
from pyniu.config import NiuConfig
from pyniu.errors import ErrorDescriptor
from pyniu.models.motor import MotorInfo
from pyniu.models.requests import SerialNumberRequest
from pyniu.session import Session


async def fetch_motor_info(
    config: NiuConfig,
    session: Session,
    transport: Transport,
    sn: str,
) -> MotorInfo | ErrorDescriptor:
    """Fetch ignition, lock and speed state of a vehicle."""
    origin = "get_motor_info"
    request = validate_params(SerialNumberRequest, origin, sn=sn)
    if isinstance(request, ErrorDescriptor):
        return request

    response = await execute(
        f"{MOTOR_INFO_PATH}?{urlencode({'sn': request.sn})}",
        config=config,
        session=session,
        transport=transport,
        origin=origin,
    )
    if isinstance(response, ErrorDescriptor):
        return response
    return parse_data(response, MotorInfo, origin)
