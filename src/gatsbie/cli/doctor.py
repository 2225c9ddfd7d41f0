"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from gatsbie.adapters.retail.client import TargetClient
from gatsbie.adapters.solver.client import SolverClient
from gatsbie.core.config import GatsbieSettings, write_user_env_vars
from gatsbie.core.errors import GatsbieError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_health(client: SolverClient | TargetClient) -> tuple[bool, str]:
    try:
        async with client:
            health = await client.health()
        return True, health.status or "ok"
    except GatsbieError as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = GatsbieSettings()

    table = Table(title="Gatsbie Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    api_key = settings.api_key or ""
    if not api_key:
        table.add_row("API key", "MISSING", "Set GATSBIE_API_KEY or run `gatsbie doctor setup`")
    elif not api_key.startswith("gats_"):
        table.add_row("API key", "WARN", "Key does not look like `gats_*`")
    else:
        table.add_row("API key", "OK", f"{api_key[:9]}...")
    table.add_row("Solver base_url", "OK", settings.base_url)
    table.add_row("Target base_url", "OK", settings.target_base_url)

    failed = not api_key
    if api_key:
        checks = {
            "Solver health": SolverClient(settings=settings),
            "Target health": TargetClient(settings=settings),
        }
        for name, client in checks.items():
            ok, detail = asyncio.run(_check_health(client))
            failed = failed or not ok
            table.add_row(name, "OK" if ok else "FAIL", detail)
    else:
        table.add_row("Health", "SKIPPED", "No API key")

    _console.print(table)
    if failed:
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    api_key = typer.prompt("Gatsbie API key", hide_input=True, confirmation_prompt=False).strip()
    if not api_key:
        raise typer.BadParameter("api key is required")

    settings = GatsbieSettings(api_key=api_key)
    base_url = typer.prompt("Solver base URL", default=settings.base_url, show_default=True).strip()
    target_url = typer.prompt("Target base URL", default=settings.target_base_url, show_default=True).strip()

    env_path = write_user_env_vars(
        {
            "GATSBIE_API_KEY": api_key,
            "GATSBIE_BASE_URL": base_url or None,
            "GATSBIE_TARGET_BASE_URL": target_url or None,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
