"""Componentes de UI para CLI (Rich).

Separados de los comandos para reutilizar tablas/paneles entre `solve`,
`target` y `doctor`.
"""

from __future__ import annotations

from typing import Any

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from gatsbie.adapters.json_exporter import to_jsonable
from gatsbie.adapters.retail.errors import TargetAPIError
from gatsbie.adapters.solver.errors import SolverAPIError
from gatsbie.core.domain.retail import AddToCartResponse, PingResponse, Product, Store
from gatsbie.core.domain.solver import SolveResponse
from gatsbie.core.errors import APIError, GatsbieError, RequestTimeoutError, TransportError


def print_banner(console: Console) -> None:
    title = Text("Gatsbie", style="bold cyan")
    subtitle = Text("Challenge solving • Target retail", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def truncate(value: str, max_len: int = 60) -> str:
    if len(value) <= max_len:
        return value
    return value[:max_len] + "..."


def _flatten(prefix: str, value: Any, out: list[tuple[str, str]]) -> None:
    if isinstance(value, dict):
        for key, item in value.items():
            _flatten(f"{prefix}.{key}" if prefix else str(key), item, out)
        return
    out.append((prefix, "" if value is None else str(value)))


def build_solve_table(response: SolveResponse[Any], *, full: bool = False) -> Table:
    """Tabla con metadatos del envelope y los campos de la solución."""

    table = Table(title=f"Solve {response.service or ''}".strip())
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")

    table.add_row("success", str(response.success))
    table.add_row("taskId", response.task_id)
    table.add_row("cost", f"{response.cost:.4f} credits")
    table.add_row("solveTime", f"{response.solve_time:.2f} ms")

    rows: list[tuple[str, str]] = []
    _flatten("solution", to_jsonable(response.solution), rows)
    for key, value in rows:
        table.add_row(key, value if full else truncate(value))
    return table


def build_ping_panel(ping: PingResponse) -> Panel:
    body = Text(ping.message or "pong")
    if ping.quota_used > 0 or ping.quota_limit > 0:
        body.append(f"\nQuota: {ping.quota_used} / {ping.quota_limit}", style="dim")
    return Panel(body, title="Ping", border_style="green")


def build_stores_table(stores: list[Store]) -> Table:
    table = Table(title="Nearby Stores")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("City", style="white")
    table.add_column("Drive Up", style="green")
    table.add_column("Miles", style="magenta", justify="right")
    for store in stores:
        table.add_row(
            str(store.id),
            store.name,
            f"{store.city}, {store.state}",
            "yes" if store.drive_up_enabled else "no",
            f"{store.distance_miles:.2f}",
        )
    return table


def build_product_table(product: Product) -> Table:
    table = Table(title=product.title or product.tcin)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("TCIN", product.tcin)
    price = product.current_price
    if product.on_sale and product.regular_price:
        price += f" (was {product.regular_price})"
    table.add_row("Price", price)
    table.add_row("In stock", str(product.in_stock))
    table.add_row("Shipping", str(product.available_for_shipping))
    table.add_row("Pickup", str(product.available_for_pickup))
    if product.rating_average is not None:
        table.add_row("Rating", f"{product.rating_average:.1f} ({product.rating_count or 0})")
    if product.variations:
        table.add_row("Variations", ", ".join(f"{v.name}: {v.value}" for v in product.variations))
    return table


def build_cart_panel(response: AddToCartResponse) -> Panel:
    item = response.item_added
    body = Text()
    body.append(f"{item.quantity} x {item.title or item.tcin}\n", style="bold")
    body.append(f"Cart: {response.cart_id} ({response.total_items_in_cart} items)\n")
    body.append(f"Fulfillment: {response.fulfillment.type}")
    if response.fulfillment.store_name:
        body.append(f" @ {response.fulfillment.store_name}")
    body.append(f"\nTotal: {response.pricing.total:.2f}")
    style = "green" if response.success else "yellow"
    return Panel(body, title=response.message or "Added to cart", border_style=style)


def error_hint(err: GatsbieError) -> str | None:
    """Sugerencia accionable a partir de la clasificación del error."""

    if isinstance(err, TargetAPIError) and err.suggestion:
        return err.suggestion
    if isinstance(err, SolverAPIError):
        if err.is_auth_error():
            return "Check your API key"
        if err.is_insufficient_credits():
            return "Please add more credits to your account"
        if err.is_solve_failed():
            return "The challenge could not be solved, try again"
    if isinstance(err, TargetAPIError):
        if err.is_unauthorized():
            return "Check your API key"
        if err.is_inventory_unavailable():
            return "Try another fulfillment type or store"
        if err.is_not_found():
            return "Check the TCIN"
    if isinstance(err, APIError) and err.is_rate_limited():
        return "Rate limit reached, slow down"
    if isinstance(err, RequestTimeoutError):
        return "The request timed out; raise --timeout or try again"
    if isinstance(err, TransportError):
        return "Check your network connection and base URL"
    return None


def build_error_panel(err: GatsbieError) -> Panel:
    body = Text()
    if isinstance(err, APIError):
        label = err.code or f"HTTP {err.http_status}"
        body.append(f"[{label}] ", style="bold red")
        body.append(err.message)
        if err.details:
            body.append(f"\nDetails: {err.details}", style="dim")
    else:
        body.append(str(err))
    hint = error_hint(err)
    if hint:
        body.append(f"\n{hint}", style="yellow")
    return Panel(body, title=type(err).__name__, border_style="red")
