import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from randomuser_offline.api import RandomUserError, User
from randomuser_offline.config import Config, DEFAULT_CONFIG_PATH, default_config, load_config
from randomuser_offline.util.logging import configure_logging

app = typer.Typer(add_completion=False)
console = Console()

_state: dict[str, Config] = {}


@app.callback()
def main(
    config: Path | None = typer.Option(None, help="Path to config.toml."),
    verbose: bool = False,
) -> None:
    """Fetch RandomUser pages with an offline disk cache."""
    configure_logging(logging.DEBUG if verbose else logging.WARNING)
    if config is not None:
        try:
            _state["cfg"] = load_config(config)
        except (FileNotFoundError, TypeError, ValueError) as exc:
            console.print(f"[red]Invalid config: {exc}[/red]")
            raise typer.Exit(code=2)
    elif DEFAULT_CONFIG_PATH.exists():
        _state["cfg"] = load_config(DEFAULT_CONFIG_PATH)
    else:
        _state["cfg"] = default_config()


def _config() -> Config:
    return _state.get("cfg") or default_config()


def _users_table(users: list[User], title: str) -> Table:
    table = Table(title=title)
    table.add_column("Name")
    table.add_column("Email")
    table.add_column("Age", justify="right")
    table.add_column("City")
    table.add_column("Country")
    for user in users:
        table.add_row(
            user.full_name,
            user.email,
            str(user.age),
            user.location.city,
            user.location.country,
        )
    return table


@app.command()
def fetch(page: int = 1, results: int = 25, seed: str | None = None) -> None:
    """Fetch one page of users (falls back to the cache when offline)."""
    cfg = _config()
    with cfg.build_transport() as transport:
        client = cfg.build_client(transport)
        try:
            response = client.fetch(page=page, results=results, seed=seed)
        except RandomUserError as exc:
            console.print(f"[red]{exc}[/red]")
            raise typer.Exit(code=1)
    console.print(_users_table(response.results, f"Page {response.info.page} (seed={response.info.seed})"))


@app.command()
def search(query: str, page: int = 1, results: int = 25, seed: str | None = None) -> None:
    """Fetch a page and filter it by name, email, city or country."""
    cfg = _config()
    with cfg.build_transport() as transport:
        client = cfg.build_client(transport)
        try:
            users = client.search_users(query, page=page, results=results, seed=seed)
        except RandomUserError as exc:
            console.print(f"[red]{exc}[/red]")
            raise typer.Exit(code=1)
    if not users:
        console.print(f"No users match {query!r}.")
        return
    console.print(_users_table(users, f"Matches for {query!r}"))


@app.command()
def cache_stats() -> None:
    """Show the number of cached pages and their total size."""
    cache = _config().build_cache()
    stats = cache.stats()
    console.print(f"Cache: {cache.directory}")
    console.print(f"entries={stats.entries} bytes={stats.total_bytes}")


@app.command()
def cache_clear() -> None:
    """Delete every cached page."""
    removed = _config().build_cache().clear()
    console.print(f"Removed {removed} cached pages.")


if __name__ == "__main__":
    app()
