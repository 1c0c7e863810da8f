"""Objects shared by the command and callback handlers."""

from __future__ import annotations

from dataclasses import dataclass

import discord

from bots.config import EnvironmentConfig
from verifier_bot.google_oauth import GoogleOAuth
from verifier_bot.store import VerificationStore


@dataclass(slots=True)
class VerifierContext:
    """Built once at startup and handed to every handler."""

    config: EnvironmentConfig
    bot: discord.Client
    store: VerificationStore
    oauth: GoogleOAuth

    @classmethod
    def from_config(
        cls, config: EnvironmentConfig, bot: discord.Client
    ) -> "VerifierContext":
        oauth = GoogleOAuth(
            config.google_client_id,
            config.google_client_secret,
            config.google_redirect_uri,
            hosted_domain=config.google_hosted_domain,
        )
        return cls(config=config, bot=bot, store=VerificationStore(), oauth=oauth)
