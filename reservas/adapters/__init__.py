"""
Adapters layer - In-memory storage and the HTTP client for the REST API.
"""

from .api_client import ApiClient
from .memory import InMemoryEmpleadoRepository, InMemoryReservaRepository, InMemorySalaRepository

__all__ = [
    "ApiClient",
    "InMemoryEmpleadoRepository",
    "InMemoryReservaRepository",
    "InMemorySalaRepository",
]
