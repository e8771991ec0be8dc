"""Console runner: a stdin/stdout stand-in for the chat transport.

Each line read from stdin is treated as one chat message. Replies go to
stdout, one per line; logs go to stderr. The process exits cleanly at EOF
or on SIGINT. stdin must be a pipe, terminal or socket.

Run with ``python -m pokecache``.
"""

from __future__ import annotations

import asyncio
import logging
import sys

import structlog
from pydantic import ValidationError

from pokecache.cache import LookupCache
from pokecache.commands import PokeCommandHandler
from pokecache.config import LoggingSettings, Settings
from pokecache.provider import PokeApiProvider, build_http_client
from pokecache.state import AppState

log = structlog.get_logger()


def setup_logging(settings: LoggingSettings) -> None:
    """Route structlog output to stderr so stdout carries only replies."""
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if settings.format == "json":
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, settings.level)),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


async def handle_lines(state: AppState) -> None:
    """Feed stdin lines to the command handler until EOF.

    stdin is read through the event loop rather than a worker thread, so a
    cancelled run (Ctrl-C) is not left waiting on a blocked ``readline``.
    """
    loop = asyncio.get_running_loop()
    reader = asyncio.StreamReader()
    transport, _ = await loop.connect_read_pipe(
        lambda: asyncio.StreamReaderProtocol(reader), sys.stdin
    )
    try:
        while True:
            raw = await reader.readline()
            if not raw:
                log.info("stdin_closed")
                return
            line = raw.decode("utf-8", errors="replace").rstrip("\r\n")
            reply = state.handler.handle(line)
            if reply is not None:
                sys.stdout.write(reply + "\n")
                sys.stdout.flush()
    finally:
        transport.close()


async def run(settings: Settings) -> None:
    async with build_http_client(settings.provider.request_timeout_seconds) as client:
        provider = PokeApiProvider(client, settings.provider)
        async with LookupCache(provider, settings.refresh) as cache:
            state = AppState(
                settings=settings,
                cache=cache,
                handler=PokeCommandHandler(cache, settings.commands.prefix),
            )
            log.info("pokecache_started", endpoint=settings.provider.endpoint)
            await handle_lines(state)


def main() -> None:
    try:
        settings = Settings()
    except ValidationError as exc:
        # Logging isn't configured yet; report straight to stderr.
        print(f"Invalid configuration:\n{exc}", file=sys.stderr)
        sys.exit(2)

    setup_logging(settings.logging)
    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        log.info("pokecache_interrupted")
