"""Client configuration for pyniu."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyniu._constants import ACCOUNT_URL, APP_URL, DEFAULT_LANGUAGE
from pyniu.exceptions import NiuConfigError

DEFAULT_PORT = 8080


@dataclasses.dataclass(frozen=True)
class NiuConfig:
    """Client configuration.

    Parameters
    ----------
    account : str
        NIU account e-mail or phone number.
    password : str
        NIU account password.
    country_code : str
        Telephone country code of the account (e.g. ``"49"``).
    api_key : str
        Shared key protecting the local responder.  Only its SHA-256
        digest is ever compared.
    port : int
        Port the local responder listens on.
    host : str
        Interface the local responder binds to.
    language : str
        Value of the ``Accept-Language`` header sent to the vendor.
    time_zone : str
        IANA time zone used to render track timestamps.
    account_url : str
        Base URL of the vendor's account (login) API.
    app_url : str
        Base URL of the vendor's application data API.
    """

    account: str
    password: str
    country_code: str
    api_key: str = ""
    port: int = DEFAULT_PORT
    host: str = "0.0.0.0"  # noqa: S104
    language: str = DEFAULT_LANGUAGE
    time_zone: str = "UTC"
    account_url: str = ACCOUNT_URL
    app_url: str = APP_URL

    @classmethod
    def from_env(cls, **overrides: Any) -> NiuConfig:
        """Create configuration from environment variables.

        Reads ``NIU_ACCOUNT``, ``NIU_PASSWORD``, ``NIU_COUNTRY_CODE``,
        ``NIU_API_KEY``, ``NIU_PORT`` and the optional ``NIU_*``
        variables below.  Missing credentials become empty strings so the
        session layer can report them.  Explicit keyword arguments
        override environment values.

        Raises
        ------
        NiuConfigError
            If ``NIU_PORT`` is not an integer.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "NIU_ACCOUNT": "account",
            "NIU_PASSWORD": "password",
            "NIU_COUNTRY_CODE": "country_code",
            "NIU_API_KEY": "api_key",
            "NIU_HOST": "host",
            "NIU_LANGUAGE": "language",
            "NIU_TIME_ZONE": "time_zone",
            "NIU_ACCOUNT_URL": "account_url",
            "NIU_APP_URL": "app_url",
        }
        config_kwargs: dict[str, Any] = {"account": "", "password": "", "country_code": ""}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # port is numeric, handle separately
        port_env = env.get("NIU_PORT")
        if port_env is not None and "port" not in overrides:
            try:
                config_kwargs["port"] = int(port_env)
            except ValueError as exc:
                raise NiuConfigError(f"NIU_PORT must be an integer, got {port_env!r}") from exc

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
