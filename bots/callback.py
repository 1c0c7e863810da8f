"""HTTP side of the verification flow: Google redirects the user here."""

from __future__ import annotations

import logging

import discord
from fastapi import FastAPI
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from bots.context import VerifierContext
from verifier_bot.logging_utils import announce_verification

log = logging.getLogger("email-verifier")

CALLBACK_PATH = "/auth/google/callback"

SUCCESS_PAGE = """
<html>
  <body>
    <h1>Verification Successful!</h1>
    <p>You can close this window and return to Discord.</p>
  </body>
</html>
"""


async def handle_oauth_callback(
    ctx: VerifierContext, code: str | None, state: str | None
) -> Response:
    attempt = ctx.store.get(state) if state else None
    if attempt is None:
        return PlainTextResponse("Invalid verification attempt", status_code=400)

    if not code:
        # Google sends error= instead of code when consent is refused
        log.warning("Callback for %s arrived without an authorization code", state)
        return PlainTextResponse("Error during Google authentication", status_code=500)

    # Google only lets accounts from the institution's domain sign in to this
    # client, so a successful exchange is the whole proof.
    try:
        await ctx.oauth.exchange_code(code)
    except Exception as exc:  # pylint: disable=broad-except
        log.exception("Google OAuth error: %s", exc)
        return PlainTextResponse("Error during Google authentication", status_code=500)

    guild = ctx.bot.get_guild(ctx.config.server_id)
    if guild is None:
        log.error("Discord server %s not found in cache", ctx.config.server_id)
        return PlainTextResponse("Error finding Discord server", status_code=500)

    user_id = attempt.requesting_user_id
    try:
        member = await guild.fetch_member(user_id)
        await member.add_roles(
            discord.Object(id=ctx.config.verified_role_id),
            reason=f"Verified {ctx.config.institution_name} email",
        )
    except discord.Forbidden:
        log.warning(
            "Forbidden when adding role %s to %s",
            ctx.config.verified_role_id,
            user_id,
        )
        return PlainTextResponse(
            "Error assigning role. Please contact a staff member.", status_code=500
        )
    except discord.HTTPException as exc:
        log.exception("Discord role error for %s: %s", user_id, exc)
        return PlainTextResponse(
            "Error assigning role. Please contact a staff member.", status_code=500
        )
    except Exception as exc:  # pylint: disable=broad-except
        log.exception("Unexpected error assigning role to %s: %s", user_id, exc)
        return PlainTextResponse(
            "Error assigning role. Please contact a staff member.", status_code=500
        )

    # The sweeper may already have dropped this token while we were awaiting.
    ctx.store.delete(state)
    log.info("Verified %s (%s)", member, user_id)

    await announce_verification(
        ctx.bot,
        ctx.config.admin_log_channel_id,
        guild,
        member,
        ctx.config.institution_name,
    )
    return HTMLResponse(SUCCESS_PAGE)


def create_app(ctx: VerifierContext) -> FastAPI:
    app = FastAPI(docs_url=None, redoc_url=None, openapi_url=None)

    @app.get("/", response_class=PlainTextResponse)
    async def health() -> str:
        return "ok"

    @app.get(CALLBACK_PATH)
    async def google_callback(code: str | None = None, state: str | None = None) -> Response:
        return await handle_oauth_callback(ctx, code, state)

    return app
