"""CLI (Typer + Rich) sobre los clientes del SDK."""
