"""
REST adapter - FastAPI routes over the application services.
"""

from .dependencies import Servicios
from .errors import register_exception_handlers
from .routes import parse_fecha, router

__all__ = ["Servicios", "parse_fecha", "register_exception_handlers", "router"]
