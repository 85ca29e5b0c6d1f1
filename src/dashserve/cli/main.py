from __future__ import annotations

import logging

import typer

from dashserve.config.settings import Settings
from dashserve.core.errors import ServerStartupError
from dashserve.server.bootstrap import start
from dashserve.utils.log import configure_logging

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Serve the dashboard front-end from the current directory.",
    add_completion=False,
)

_RULE = "━" * 40


def _print_banner(port: str) -> None:
    typer.echo("╔" + "═" * 38 + "╗")
    typer.echo("║" + "Profile Dashboard Server".center(38) + "║")
    typer.echo("╚" + "═" * 38 + "╝")
    typer.echo(f"\nServer starting on port {port}...")
    typer.echo("Serving files from: ./")
    typer.echo(f"Open your browser at: http://localhost:{port}\n")
    typer.echo("Press Ctrl+C to stop the server")
    typer.echo(_RULE)


@app.command()
def serve() -> None:
    """Start the server. The port comes from $PORT (default 8001)."""
    configure_logging()
    port = Settings().PORT
    _print_banner(port)
    try:
        start(port)
    except ServerStartupError as exc:
        logger.critical("Failed to start server: %s", exc)
        raise typer.Exit(code=1)


if __name__ == "__main__":  # pragma: no cover
    app()
