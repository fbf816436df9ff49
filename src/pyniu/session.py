"""Session state management for authenticated API calls."""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict

from pyniu._api._common import validate_params
from pyniu._api.login import login
from pyniu._transport import Transport
from pyniu.config import NiuConfig
from pyniu.errors import ErrorDescriptor
from pyniu.models.requests import SessionTokenRequest

_logger = logging.getLogger(__name__)


class Session(BaseModel):
    """Session state: one opaque bearer token.

    An empty token means "unauthenticated".  Sessions are immutable; the
    :class:`SessionManager` swaps in a new one on successful login.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    token: str = ""

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)


class SessionManager:
    """Owns the current :class:`Session`.

    It is the only writer of the session; accessors read it through
    :attr:`current`.  There is no expiry tracking: a token the vendor
    rejects surfaces as a normal request failure.
    """

    def __init__(self, config: NiuConfig) -> None:
        self._config = config
        self._session = Session()

    @property
    def current(self) -> Session:
        return self._session

    async def authenticate(
        self,
        transport: Transport,
        account: str,
        password: str,
        country_code: str,
    ) -> Session | ErrorDescriptor:
        """Log in and store the returned token.

        Missing credentials yield a validation failure without any request.
        On failure the current session is left unchanged.
        """
        token = await login(
            self._config,
            transport,
            account=account,
            password=password,
            country_code=country_code,
        )
        if isinstance(token, ErrorDescriptor):
            return token

        self._session = Session(token=token.token)
        _logger.info("Session token created")
        return self._session

    def set_session(self, token: str) -> Session | ErrorDescriptor:
        """Adopt a previously obtained token instead of logging in."""
        request = validate_params(SessionTokenRequest, "set_session", token=token)
        if isinstance(request, ErrorDescriptor):
            return request
        self._session = Session(token=request.token)
        return self._session

    def invalidate(self) -> None:
        """Drop the current token (subsequent calls fail with "No valid session")."""
        self._session = Session()
