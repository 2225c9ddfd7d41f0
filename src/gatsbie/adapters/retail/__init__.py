"""Servicio retail (Target)."""

from gatsbie.adapters.retail.client import TargetClient
from gatsbie.adapters.retail.errors import TargetAPIError, UnexpectedTargetResponseError

__all__ = ["TargetAPIError", "TargetClient", "UnexpectedTargetResponseError"]
