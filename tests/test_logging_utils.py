"""Tests for admin log channel helpers."""

from unittest import mock

import discord
import pytest

from verifier_bot.logging_utils import announce_verification, resolve_log_channel

CHANNEL_ID = 555


def make_text_channel(guild_id: int = 1) -> mock.MagicMock:
    channel = mock.MagicMock(spec=discord.TextChannel)
    channel.id = CHANNEL_ID
    channel.guild = mock.MagicMock(id=guild_id)
    channel.send = mock.AsyncMock()
    return channel


def make_guild(cached=None) -> mock.MagicMock:
    guild = mock.MagicMock(id=1)
    guild.get_channel.return_value = cached
    return guild


@pytest.mark.asyncio
async def test_no_channel_configured():
    bot = mock.MagicMock()
    assert await resolve_log_channel(bot, None, make_guild()) is None
    bot.fetch_channel.assert_not_called()


@pytest.mark.asyncio
async def test_cached_channel_is_used():
    channel = make_text_channel()
    bot = mock.MagicMock()
    bot.fetch_channel = mock.AsyncMock()

    assert await resolve_log_channel(bot, CHANNEL_ID, make_guild(channel)) is channel
    bot.fetch_channel.assert_not_awaited()


@pytest.mark.asyncio
async def test_fetch_fallback():
    channel = make_text_channel()
    bot = mock.MagicMock()
    bot.fetch_channel = mock.AsyncMock(return_value=channel)

    assert await resolve_log_channel(bot, CHANNEL_ID, make_guild()) is channel


@pytest.mark.asyncio
async def test_fetch_from_other_guild_is_rejected():
    bot = mock.MagicMock()
    bot.fetch_channel = mock.AsyncMock(return_value=make_text_channel(guild_id=2))

    assert await resolve_log_channel(bot, CHANNEL_ID, make_guild()) is None


@pytest.mark.asyncio
async def test_fetch_non_text_channel():
    bot = mock.MagicMock()
    bot.fetch_channel = mock.AsyncMock(return_value=mock.MagicMock())

    assert await resolve_log_channel(bot, CHANNEL_ID, make_guild()) is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        discord.NotFound(mock.MagicMock(status=404), "Unknown Channel"),
        discord.Forbidden(mock.MagicMock(status=403), "Missing Access"),
        discord.HTTPException(mock.MagicMock(status=500), "Server Error"),
    ],
)
async def test_fetch_errors_return_none(error):
    bot = mock.MagicMock()
    bot.fetch_channel = mock.AsyncMock(side_effect=error)

    assert await resolve_log_channel(bot, CHANNEL_ID, make_guild()) is None


@pytest.mark.asyncio
async def test_announce_verification_sends_mention():
    channel = make_text_channel()
    member = mock.MagicMock(mention="<@42>")

    await announce_verification(mock.MagicMock(), CHANNEL_ID, make_guild(channel), member, "UMich")

    channel.send.assert_awaited_once_with("<@42> verified their UMich email.")


@pytest.mark.asyncio
async def test_announce_verification_swallows_send_errors():
    channel = make_text_channel()
    channel.send.side_effect = discord.Forbidden(mock.MagicMock(status=403), "Missing Access")

    await announce_verification(
        mock.MagicMock(), CHANNEL_ID, make_guild(channel), mock.MagicMock(), "UMich"
    )

    channel.send.assert_awaited_once()


@pytest.mark.asyncio
async def test_announce_without_channel_is_noop():
    bot = mock.MagicMock()
    await announce_verification(bot, None, make_guild(), mock.MagicMock(), "UMich")
    bot.fetch_channel.assert_not_called()
