"""Process wiring: Discord client, OAuth callback server and expiry sweeper."""

from __future__ import annotations

import asyncio
import logging

import discord
import uvicorn
from discord import app_commands

from bots.callback import create_app
from bots.config import EnvironmentConfig
from bots.context import VerifierContext
from bots.sweeper import build_sweeper
from bots.verification import build_verify_command

log = logging.getLogger("email-verifier")


class VerifierRuntime:
    def __init__(self, config: EnvironmentConfig) -> None:
        intents = discord.Intents.none()
        intents.guilds = True

        self.config = config
        self.bot = discord.Client(intents=intents)
        self.tree = app_commands.CommandTree(self.bot)
        self.context = VerifierContext.from_config(config, self.bot)
        self.sweeper = build_sweeper(self.context.store)
        self.app = create_app(self.context)
        self._commands_registered = False

        self.tree.add_command(build_verify_command(self.context))
        self.bot.event(self.on_ready)

    async def register_commands(self) -> None:
        try:
            if self.config.register_globally:
                await self.tree.sync()
            else:
                guild = discord.Object(id=self.config.server_id)
                self.tree.copy_global_to(guild=guild)
                await self.tree.sync(guild=guild)
        except discord.HTTPException as exc:
            log.exception("Error registering command: %s", exc)
            return
        self._commands_registered = True
        log.info("Command registered successfully")

    async def on_ready(self) -> None:
        # on_ready fires again after every reconnect
        if not self._commands_registered:
            await self.register_commands()
        if not self.sweeper.is_running():
            self.sweeper.start()
        log.info("Bot ready as %s (%s)", self.bot.user, self.bot.user.id)

    def build_http_server(self) -> uvicorn.Server:
        config = uvicorn.Config(
            self.app,
            host=self.config.host,
            port=self.config.port,
            log_config=None,
        )
        return uvicorn.Server(config)

    async def run(self) -> None:
        server = self.build_http_server()
        log.info("Server running on port %s", self.config.port)

        async with self.bot:
            http_task = asyncio.create_task(server.serve(), name="oauth-callback-server")
            bot_task = asyncio.create_task(
                self.bot.start(self.config.discord_token), name="discord-gateway"
            )
            done, pending = await asyncio.wait(
                {http_task, bot_task}, return_when=asyncio.FIRST_COMPLETED
            )

            server.should_exit = True
            if self.sweeper.is_running():
                self.sweeper.cancel()
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)
            for task in done:
                task.result()

    @classmethod
    def create(cls) -> "VerifierRuntime":
        config = EnvironmentConfig.load()
        return cls(config)


async def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    runtime = VerifierRuntime.create()
    await runtime.run()


__all__ = ["VerifierRuntime", "main"]
