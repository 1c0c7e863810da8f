from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from bots.config import EnvironmentConfig
from bots.context import VerifierContext
from verifier_bot.google_oauth import GoogleOAuth
from verifier_bot.store import VerificationStore

SERVER_ID = 111111111111111111
ROLE_ID = 222222222222222222
AUTH_URL = "https://accounts.google.com/o/oauth2/auth?state=test"


@pytest.fixture
def config() -> EnvironmentConfig:
    return EnvironmentConfig(
        discord_token="test_token",
        google_client_id="client-id.apps.googleusercontent.com",
        google_client_secret="client-secret",
        google_redirect_uri="https://verify.example.edu/auth/google/callback",
        server_id=SERVER_ID,
        verified_role_id=ROLE_ID,
    )


@pytest.fixture
def oauth() -> MagicMock:
    mock_oauth = MagicMock(spec=GoogleOAuth)
    mock_oauth.authorization_url.return_value = AUTH_URL
    mock_oauth.exchange_code = AsyncMock(return_value=MagicMock(token="access-token"))
    return mock_oauth


@pytest.fixture
def bot() -> MagicMock:
    return MagicMock()


@pytest.fixture
def ctx(config, bot, oauth) -> VerifierContext:
    return VerifierContext(config=config, bot=bot, store=VerificationStore(), oauth=oauth)
