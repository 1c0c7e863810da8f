"""Configuration helpers for the verifier runtime."""

from __future__ import annotations

import os
from dataclasses import dataclass

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"
DEFAULT_INSTITUTION = "UMich"


def env_bool(name: str, *, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    return default


def env_int(name: str, *, default: int | None = None) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True, slots=True)
class EnvironmentConfig:
    discord_token: str
    google_client_id: str
    google_client_secret: str
    google_redirect_uri: str
    server_id: int
    verified_role_id: int
    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    institution_name: str = DEFAULT_INSTITUTION
    google_hosted_domain: str | None = None
    admin_log_channel_id: int | None = None
    register_globally: bool = False

    @classmethod
    def load(cls) -> "EnvironmentConfig":
        missing: list[str] = []

        def need(name: str) -> str:
            value = os.getenv(name)
            if not value:
                missing.append(name)
                return ""
            return value

        def need_int(name: str) -> int:
            value = env_int(name)
            if value is None:
                missing.append(name)
                return 0
            return value

        discord_token = need("DISCORD_TOKEN")
        google_client_id = need("GOOGLE_CLIENT_ID")
        google_client_secret = need("GOOGLE_CLIENT_SECRET")
        google_redirect_uri = need("GOOGLE_REDIRECT_URI")
        server_id = need_int("SERVER_ID")
        verified_role_id = need_int("VERIFIED_ROLE_ID")

        if missing:
            raise RuntimeError("Missing env vars: " + ", ".join(sorted(set(missing))))

        return cls(
            discord_token=discord_token,
            google_client_id=google_client_id,
            google_client_secret=google_client_secret,
            google_redirect_uri=google_redirect_uri,
            server_id=server_id,
            verified_role_id=verified_role_id,
            port=env_int("PORT", default=DEFAULT_PORT),
            host=os.getenv("HOST") or DEFAULT_HOST,
            institution_name=os.getenv("INSTITUTION_NAME") or DEFAULT_INSTITUTION,
            google_hosted_domain=os.getenv("GOOGLE_HOSTED_DOMAIN") or None,
            admin_log_channel_id=env_int("ADMIN_LOG_CHANNEL_ID"),
            register_globally=env_bool("REGISTER_GLOBALLY"),
        )
