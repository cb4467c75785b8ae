"""Entry point for the statuspage uptime monitor."""

from __future__ import annotations

import asyncio
import logging
import sys

import uvicorn
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel

from statuspage.config import Settings
from statuspage.monitor.checker import DEFAULT_TARGETS
from statuspage.server.app import create_app
from statuspage.server.redirect import create_redirect_app

console = Console()


def build_servers(settings: Settings) -> list[uvicorn.Server]:
    """The status server, plus the port-80 redirect server in HTTPS mode."""
    log_level = settings.log_level.lower()
    tls: dict[str, str] = {}
    if settings.https:
        tls = {"ssl_certfile": settings.tls_cert_file, "ssl_keyfile": settings.tls_key_file}

    main_config = uvicorn.Config(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=log_level,
        **tls,
    )
    if not settings.https:
        return [uvicorn.Server(main_config)]

    redirect_config = uvicorn.Config(
        create_redirect_app(settings.secure_origin),
        host=settings.host,
        port=settings.redirect_port,
        log_level=log_level,
    )
    return [uvicorn.Server(main_config), uvicorn.Server(redirect_config)]


async def serve(servers: list[uvicorn.Server]) -> None:
    """Run all servers in one loop; when one exits, bring the others down."""
    tasks = [asyncio.create_task(s.serve()) for s in servers]
    await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
    for server in servers:
        server.should_exit = True
    await asyncio.gather(*tasks)


def main() -> None:
    """Read configuration, then run checkers and servers until the process exits."""
    try:
        settings = Settings()
    except ValidationError as e:
        console.print(f"[bold red]Invalid configuration:[/bold red]\n{e}")
        sys.exit(1)

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    scheme = "https" if settings.https else "http"
    redirect = f"port {settings.redirect_port} → {settings.secure_origin}" if settings.https else "off"
    targets = "\n".join(f"  {t.id:<8} {t.url}" for t in DEFAULT_TARGETS)
    console.print(
        Panel.fit(
            f"[bold]statuspage[/bold]\n"
            f"Bind:     {scheme}://{settings.host}:{settings.port}\n"
            f"Redirect: {redirect}\n"
            f"Status:   {settings.status_dir}/\n"
            f"Interval: {settings.check_interval:g}s (timeout {settings.probe_timeout:g}s)\n"
            f"Targets:\n{targets}",
            title="statuspage",
            border_style="green",
        )
    )

    asyncio.run(serve(build_servers(settings)))


if __name__ == "__main__":
    main()
