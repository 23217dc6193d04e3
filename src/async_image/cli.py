"""
CLI for the async image loader.

Commands:
- fetch: Load one or more images and report their final state
- info: Show configuration
"""

import asyncio
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from .config import settings
from .logging import setup_logging
from .models import CachingPolicy, Failure, LoadingState, Success

app = typer.Typer(
    name="async-image",
    help="Fetch, decode, and cache remote images",
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Async Image - fetch remote images with in-memory caching."""
    log_level = "DEBUG" if verbose else settings.log_level
    setup_logging(level=log_level, json_output=settings.log_json)
    logger.debug("CLI initialized with log level: {}", log_level)


@app.command()
def fetch(
    urls: list[str] = typer.Argument(..., help="Image URLs to fetch"),
    policy: CachingPolicy = typer.Option(
        settings.default_caching_policy,
        "--policy",
        "-p",
        help="Caching policy for every request",
    ),
    save: Path | None = typer.Option(
        None,
        "--save",
        "-s",
        help="Directory to write successfully decoded images to",
    ),
):
    """Fetch images in order within one session and show the results."""
    logger.info("Fetching {} image(s) with policy {}", len(urls), policy.value)

    async def run_fetches() -> list[LoadingState]:
        from .view_model import ImageViewModel

        states = []
        for url in urls:
            view_model = ImageViewModel()
            await view_model.fetch_image(policy, url)
            states.append(view_model.state)
        return states

    states = asyncio.run(run_fetches())

    if save is not None:
        save.mkdir(parents=True, exist_ok=True)

    table = Table(title="Fetch Results")
    table.add_column("#", style="dim")
    table.add_column("URL", style="cyan")
    table.add_column("State")
    table.add_column("Details")

    failed = 0
    for i, (url, state) in enumerate(zip(urls, states), 1):
        if isinstance(state, Success):
            image = state.image
            details = f"{image.format or '?'} {image.width}x{image.height}, {len(image.data)} bytes"
            if save is not None:
                ext = (image.format or "bin").lower()
                out_path = save / f"image_{i}.{ext}"
                out_path.write_bytes(image.data)
                logger.debug("Saved image to {}", out_path)
                details += f" -> {out_path}"
            table.add_row(str(i), url, "[green]success[/]", details)
        elif isinstance(state, Failure):
            failed += 1
            table.add_row(str(i), url, "[red]failure[/]", f"{state.error.kind.value}: {state.error}")
        else:
            table.add_row(str(i), url, "[yellow]loading[/]", "")

    console.print(table)

    if failed:
        logger.warning("{} of {} fetches failed", failed, len(urls))
        raise typer.Exit(1)


@app.command()
def info():
    """Show configuration."""
    logger.debug("Displaying configuration")
    console.print("[bold blue]Async Image Configuration[/]")

    table = Table(title="Settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Fetch Timeout", f"{settings.fetch_timeout}s")
    table.add_row("Follow Redirects", str(settings.follow_redirects))
    table.add_row("User Agent", settings.user_agent)
    table.add_row("Default Caching Policy", settings.default_caching_policy.value)
    table.add_row("Log Level", settings.log_level)
    table.add_row("JSON Logs", str(settings.log_json))

    console.print(table)


if __name__ == "__main__":
    app()
