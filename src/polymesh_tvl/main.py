"""CLI entrypoint for the Polymesh TVL adapter."""

from __future__ import annotations

import asyncio
import json
from typing import Annotated

import typer

from .logger import setup_logging
from .settings import TvlSettings

app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    add_help_option=True,
    pretty_exceptions_enable=True,
    pretty_exceptions_short=True,
    pretty_exceptions_show_locals=False,
    help="Compute the Polymesh TVL in the aggregation platform's adapter format.",
)


@app.callback(invoke_without_command=True)
def report(
    rpc_endpoint: Annotated[
        str | None,
        typer.Option(
            "--rpc-endpoint",
            help="Polymesh websocket RPC endpoint; overrides RPC_ENDPOINT.",
        ),
    ] = None,
    demo_mode: Annotated[
        bool | None,
        typer.Option(
            "--demo/--live",
            help="Return the mock breakdown without touching the network.",
        ),
    ] = None,
    silent_mode: Annotated[
        bool | None,
        typer.Option(
            "--silent/--verbose",
            help="Only log errors.",
        ),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Override logging verbosity (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL).",
        ),
    ] = None,
    show_config: Annotated[
        bool,
        typer.Option(
            "--show-config",
            help="Print effective config and exit.",
        ),
    ] = False,
):
    """Compute the current TVL and print it as JSON."""
    init_kwargs: dict[str, bool | str] = {}
    if rpc_endpoint is not None:
        init_kwargs["rpc_endpoint"] = rpc_endpoint
    if demo_mode is not None:
        init_kwargs["demo_mode"] = demo_mode
    if silent_mode is not None:
        init_kwargs["silent_mode"] = silent_mode
    if log_level is not None:
        init_kwargs["log_level"] = log_level.upper()

    settings = TvlSettings(**init_kwargs)

    if show_config:
        typer.echo(json.dumps(settings.model_dump(), indent=2))
        raise typer.Exit(code=0)

    setup_logging(settings.log_level, silent=settings.silent_mode)

    from .pipeline.run import fetch

    result = asyncio.run(fetch(settings))
    typer.echo(json.dumps(result))


def run() -> None:
    """Entrypoint used by the console script."""
    app()


if __name__ == "__main__":
    run()
