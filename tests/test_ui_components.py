"""Rendering helpers used by the CLI."""

from __future__ import annotations

from pathlib import Path

import httpx
from rich.console import Console

from gatsbie.adapters.json_exporter import export_response_json
from gatsbie.adapters.retail.errors import TargetAPIError
from gatsbie.adapters.solver.errors import SolverAPIError
from gatsbie.cli.ui_components import build_error_panel, build_solve_table, error_hint, truncate
from gatsbie.core.domain.solver import SolveResponse, TurnstileSolution
from gatsbie.core.errors import RequestTimeoutError, TransportError


def _render(renderable: object) -> str:
    console = Console(width=200, record=True)
    console.print(renderable)
    return console.export_text()


def test_truncate() -> None:
    assert truncate("short") == "short"
    assert truncate("x" * 70, max_len=10) == "x" * 10 + "..."


def test_error_hints() -> None:
    assert error_hint(SolverAPIError("x", code="AUTH_FAILED")) == "Check your API key"
    assert error_hint(SolverAPIError("x", http_status=402)) == "Please add more credits to your account"
    assert error_hint(TargetAPIError("x", http_status=424)) == "Try another fulfillment type or store"
    assert error_hint(TargetAPIError("x", http_status=424, suggestion="Use SHIP")) == "Use SHIP"
    assert error_hint(SolverAPIError("x", http_status=429)) == "Rate limit reached, slow down"
    assert "timed out" in error_hint(RequestTimeoutError("t", cause=httpx.ReadTimeout("t")))
    assert error_hint(TransportError("down")) == "Check your network connection and base URL"
    assert error_hint(SolverAPIError("x", code="UNKNOWN")) is None


def test_error_panel_shows_code_and_details() -> None:
    text = _render(build_error_panel(SolverAPIError("nope", code="SOLVE_FAILED", details="timeout")))

    assert "[SOLVE_FAILED] nope" in text
    assert "Details: timeout" in text
    assert "try again" in text


def test_solve_table_flattens_solution() -> None:
    response = SolveResponse[TurnstileSolution].model_validate(
        {"success": True, "taskId": "t-1", "solution": {"token": "abc", "ua": "UA"}, "cost": 0.5, "solveTime": 10}
    )

    text = _render(build_solve_table(response))

    assert "t-1" in text
    assert "solution.token" in text
    assert "solution.ua" in text


def test_export_response_json_uses_aliases(tmp_path: Path) -> None:
    response = SolveResponse[TurnstileSolution].model_validate(
        {"success": True, "taskId": "t-1", "solution": {"token": "abc", "ua": "UA"}}
    )

    path = export_response_json(response=response, output_path=tmp_path / "out" / "resp.json")

    content = path.read_text(encoding="utf-8")
    assert '"taskId": "t-1"' in content
    assert '"solveTime": 0.0' in content
