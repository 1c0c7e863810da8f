"""The /verify slash command.

Each invocation records a fresh pending attempt and hands the user a Google
sign-in link whose ``state`` carries the attempt's request token. The role
itself is granted later by the OAuth callback (see ``bots.callback``).
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

import discord
from discord import app_commands

from bots.context import VerifierContext
from verifier_bot.store import VerificationAttempt, new_request_token

log = logging.getLogger("email-verifier")

GOOGLE_BLUE = 0x4285F4


def command_description(institution: str) -> str:
    return f"Verify your {institution} email to get access to the server."


def build_verification_embed(institution: str) -> discord.Embed:
    return discord.Embed(
        title=f"{institution} Email Verification",
        description=(
            f"Click the button below to verify your {institution} email via Google login.\n\n"
            "Your email address may be stored in Google systems and (temporary) "
            "application memory in order for the application to run properly, "
            "but it will not be shared."
        ),
        color=GOOGLE_BLUE,
    )


def build_verification_view(auth_url: str) -> discord.ui.View:
    view = discord.ui.View()
    view.add_item(
        discord.ui.Button(
            label="Verify via Google",
            style=discord.ButtonStyle.link,
            url=auth_url,
        )
    )
    return view


def start_attempt(ctx: VerifierContext, user_id: int) -> VerificationAttempt:
    """Register a new pending attempt for ``user_id`` and return it."""
    token = new_request_token()
    attempt = VerificationAttempt(
        request_token=token,
        requesting_user_id=user_id,
        created_at=datetime.now(UTC),
    )
    ctx.store.put(token, attempt)
    return attempt


async def _reply_in_place(interaction: discord.Interaction, content: str) -> None:
    try:
        await interaction.response.send_message(content, ephemeral=True)
    except discord.HTTPException as exc:
        log.warning("Failed to reply to /verify from %s: %s", interaction.user, exc)


async def handle_verify_command(
    ctx: VerifierContext, interaction: discord.Interaction
) -> None:
    if interaction.guild is None:
        await _reply_in_place(interaction, "This command can only be used in a server.")
        return

    if interaction.guild.id != ctx.config.server_id:
        await _reply_in_place(
            interaction, "This command can only be used in the verification server."
        )
        return

    try:
        await interaction.response.defer(ephemeral=True)
    except discord.HTTPException as exc:
        log.warning("Failed to acknowledge /verify from %s: %s", interaction.user, exc)

    attempt = start_attempt(ctx, interaction.user.id)
    auth_url = ctx.oauth.authorization_url(attempt.request_token)
    log.info("Started verification for %s (%s)", interaction.user, interaction.user.id)

    institution = ctx.config.institution_name
    try:
        await interaction.followup.send(
            embed=build_verification_embed(institution),
            view=build_verification_view(auth_url),
            ephemeral=True,
        )
    except discord.HTTPException as exc:
        log.warning(
            "Failed to send verification link to %s: %s", interaction.user, exc
        )


def build_verify_command(ctx: VerifierContext) -> app_commands.Command:
    @app_commands.command(
        name="verify",
        description=command_description(ctx.config.institution_name),
    )
    async def verify(interaction: discord.Interaction) -> None:
        await handle_verify_command(ctx, interaction)

    return verify
