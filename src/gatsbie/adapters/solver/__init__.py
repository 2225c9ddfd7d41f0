"""Servicio de resolución de challenges (`/v1/solve/*`)."""

from gatsbie.adapters.solver.client import SolverClient
from gatsbie.adapters.solver.errors import SolverAPIError, UnexpectedSolverResponseError
from gatsbie.adapters.solver.operations import OPERATIONS, SolveOperation, get_operation

__all__ = [
    "OPERATIONS",
    "SolveOperation",
    "SolverAPIError",
    "SolverClient",
    "UnexpectedSolverResponseError",
    "get_operation",
]
