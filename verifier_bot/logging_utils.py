from __future__ import annotations

import logging
from typing import Final

import discord

log: Final = logging.getLogger("email-verifier")


async def resolve_log_channel(
    bot: discord.Client,
    admin_log_channel_id: int | None,
    guild: discord.Guild,
) -> discord.TextChannel | None:
    """Return the admin log TextChannel for ``guild`` or None if unavailable.

    Looks in the guild cache first, then tries a REST fetch as fallback.
    """
    if not admin_log_channel_id:
        return None

    channel = guild.get_channel(admin_log_channel_id)
    if isinstance(channel, discord.TextChannel):
        return channel

    try:
        channel = await bot.fetch_channel(admin_log_channel_id)
    except discord.NotFound:
        log.warning("Channel %s not found", admin_log_channel_id)
        return None
    except discord.Forbidden:
        log.warning(
            "No access to channel %s – check bot permissions",
            admin_log_channel_id,
        )
        return None
    except discord.HTTPException as exc:
        log.warning(
            "Cannot fetch channel %s – HTTP error: %s",
            admin_log_channel_id,
            exc,
        )
        return None

    if not isinstance(channel, discord.TextChannel):
        log.warning("Channel ID %s is not a text channel", admin_log_channel_id)
        return None

    if channel.guild.id != guild.id:
        log.warning(
            "Channel %s belongs to different guild (%s) than expected (%s)",
            admin_log_channel_id,
            channel.guild.id,
            guild.id,
        )
        return None
    return channel


async def announce_verification(
    bot: discord.Client,
    admin_log_channel_id: int | None,
    guild: discord.Guild,
    member: discord.Member,
    institution: str,
) -> None:
    """Post a completed verification to the admin log channel, if one is set."""
    log_chan = await resolve_log_channel(bot, admin_log_channel_id, guild)
    if log_chan is None:
        return
    try:
        await log_chan.send(f"{member.mention} verified their {institution} email.")
    except discord.Forbidden:
        log.warning("No send permission in log channel %s", log_chan.id)
    except discord.HTTPException as exc:
        log.exception("Failed to log verification: %s", exc)
