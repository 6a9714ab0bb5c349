from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ..config import AppConfig, dump_config, load_config
from ..core import BookService
from ..errors import BookError
from ..logging import configure_logging
from ..settings import get_settings

console = Console()

app = typer.Typer(help="Build a PDF book from the Markdown files of a repository root")


def _load_config(path: Path | None) -> AppConfig:
    return load_config(path or get_settings().config_path)


@app.callback()
def main(
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level (default from env)"),
) -> None:
    configure_logging(log_level or get_settings().log_level)


@app.command()
def generate(
    repo_url: str = typer.Argument(..., help="Repository URL, e.g. https://github.com/owner/project"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Where to write the PDF"),
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
    token: str | None = typer.Option(None, "--token", help="GitHub token (overrides environment)"),
) -> None:
    cfg = _load_config(config)
    service = BookService(cfg, token=token or get_settings().github_token)
    try:
        result = service.generate(repo_url)
    except BookError as exc:
        console.print(f"[red]Generation failed[/red]: {exc.code} - {exc}")
        raise typer.Exit(1) from exc

    destination = output or Path.cwd() / result.filename
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_bytes(result.content)

    table = Table(title=f"{result.reference.slug} chapters")
    table.add_column("#", justify="right")
    table.add_column("Source")
    for index, name in enumerate(result.sources, start=1):
        table.add_row(str(index), name)
    console.print(table)
    console.print(
        f"[green]Success[/green]: wrote {destination} ({result.size_bytes} bytes) "
        f"in {result.timings.total_ms / 1000:.2f}s"
    )


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", min=1, max=65535, help="Bind port"),
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
) -> None:
    import uvicorn

    from api.app import create_app

    cfg = _load_config(config)
    application = create_app(config=cfg)
    uvicorn.run(
        application,
        host=host or cfg.api.host,
        port=port or cfg.api.port,
        log_config=None,
    )


@app.command("show-config")
def show_config(
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
) -> None:
    cfg = _load_config(config)
    console.print_json(dump_config(cfg, token=get_settings().github_token))


if __name__ == "__main__":
    app()
