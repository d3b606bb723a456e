"""Click CLI for running the relay and sending the story prompt."""

from __future__ import annotations

import asyncio
import logging

import click
import uvicorn

from storyrelay.api.app import build_dispatcher
from storyrelay.config import ConfigError, RelaySettings


def _load_settings() -> RelaySettings:
    try:
        return RelaySettings.from_env()
    except ConfigError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option(
    "--log-level",
    default="INFO",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level.",
)
def cli(log_level: str) -> None:
    """Bedtime story RCS relay."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.option("--host", default="0.0.0.0", help="Interface to bind.")
@click.option("--port", type=int, default=None, help="Port to bind (default: PORT or 3000).")
def serve(host: str, port: int | None) -> None:
    """Run the webhook server."""
    settings = _load_settings()
    bind_port = port or settings.port
    click.echo(f"App listening on port {bind_port}")
    click.echo(
        f"Access http://localhost:{bind_port}/send-story-request "
        "to send the initial prompt.",
    )
    uvicorn.run(
        "storyrelay.api.app:create_app_from_env",
        factory=True,
        host=host,
        port=bind_port,
    )


@cli.command("send-prompt")
@click.option("--to", "recipient", default=None, help="Recipient number (default: PHONE_NUMBER).")
def send_prompt(recipient: str | None) -> None:
    """Send the story card out of band."""
    settings = _load_settings()
    dispatcher = build_dispatcher(settings)
    target = recipient or settings.phone_number
    result = asyncio.run(dispatcher.trigger_initial_prompt(target))
    if not result.ok:
        raise click.ClickException(
            f"Failed to send story prompt (status={result.status_code}): {result.error}",
        )
    click.echo(f"Bedtime story prompt sent to {target} ({result.message_uuid})")
