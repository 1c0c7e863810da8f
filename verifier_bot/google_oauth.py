"""Google sign-in used to prove ownership of an institutional account."""

from __future__ import annotations

import asyncio
import logging
from typing import Final, Sequence

from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow

log = logging.getLogger("email-verifier")

AUTH_URI: Final[str] = "https://accounts.google.com/o/oauth2/auth"
TOKEN_URI: Final[str] = "https://oauth2.googleapis.com/token"
DEFAULT_SCOPES: Final[tuple[str, ...]] = ("openid",)


class GoogleOAuth:
    """Builds consent URLs and trades authorization codes for credentials.

    A fresh ``Flow`` is created for every call so no user's credentials are
    ever stored on an object shared between requests. Which accounts may sign
    in at all is decided by the Google Cloud consent screen configuration.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        *,
        scopes: Sequence[str] = DEFAULT_SCOPES,
        hosted_domain: str | None = None,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.scopes = list(scopes)
        self.hosted_domain = hosted_domain

    def _flow(self) -> Flow:
        return Flow.from_client_config(
            {
                "web": {
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "auth_uri": AUTH_URI,
                    "token_uri": TOKEN_URI,
                    "redirect_uris": [self.redirect_uri],
                }
            },
            scopes=self.scopes,
            redirect_uri=self.redirect_uri,
            # The callback builds a new Flow, so a PKCE verifier would be lost.
            autogenerate_code_verifier=False,
        )

    def authorization_url(self, state: str) -> str:
        params = {"access_type": "offline", "state": state}
        if self.hosted_domain:
            params["hd"] = self.hosted_domain
        url, _ = self._flow().authorization_url(**params)
        return url

    async def exchange_code(self, code: str) -> Credentials:
        """Exchange an authorization code; raises whatever the token endpoint raises."""
        flow = self._flow()
        # fetch_token is a blocking requests call
        await asyncio.to_thread(flow.fetch_token, code=code)
        log.debug("Exchanged Google authorization code")
        return flow.credentials
