"""
Service layer helpers that orchestrate repositories and domain logic.
"""

from .disponibilidad import ConsultaDisponibilidadService
from .empleados import EmpleadoService
from .repositories import EmpleadoRepository, ReservaRepository, SalaRepository
from .reservas import ReservaService
from .salas import SalaService

__all__ = [
    "ConsultaDisponibilidadService",
    "EmpleadoService",
    "EmpleadoRepository",
    "ReservaRepository",
    "ReservaService",
    "SalaRepository",
    "SalaService",
]
