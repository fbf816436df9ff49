"""Login endpoint.

Endpoint:
  - /appv2/login (account API, form-encoded)
"""

from __future__ import annotations

import logging

from pyniu._api._common import build_headers, parse_data, send, validate_params
from pyniu._constants import LOGIN_PATH
from pyniu._transport import Transport
from pyniu.config import NiuConfig
from pyniu.errors import ErrorDescriptor
from pyniu.models.requests import LoginRequest
from pyniu.models.token import AuthToken

_logger = logging.getLogger(__name__)

_ORIGIN = "authenticate"


async def login(
    config: NiuConfig,
    transport: Transport,
    *,
    account: str,
    password: str,
    country_code: str,
) -> AuthToken | ErrorDescriptor:
    """Exchange account credentials for a session token.

    Parameters
    ----------
    config : NiuConfig
        Client configuration (account URL and language).
    transport : Transport
        HTTP transport.
    account, password, country_code : str
        Credentials; all three must be non-empty.

    Returns
    -------
    AuthToken or ErrorDescriptor
        The token, or a validation failure (no request sent) or the
        failure reported by the request.
    """
    request = validate_params(
        LoginRequest,
        _ORIGIN,
        account=account,
        password=password,
        country_code=country_code,
    )
    if isinstance(request, ErrorDescriptor):
        return request

    response = await send(
        transport,
        "POST",
        f"{config.account_url}{LOGIN_PATH}",
        _ORIGIN,
        headers=build_headers(config),
        form={
            "account": request.account,
            "password": request.password,
            "countryCode": request.country_code,
        },
    )
    if isinstance(response, ErrorDescriptor):
        return response

    token = parse_data(response, AuthToken, _ORIGIN)
    if not isinstance(token, ErrorDescriptor):
        _logger.debug("Login succeeded for account=%s", request.account)
    return token
