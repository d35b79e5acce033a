"""
Domain layer - Pure business logic without external dependencies.
"""

from .disponibilidad import DisponibilidadService, DisponibilidadSlot, TablaDisponibilidad
from .models import Empleado, EstadoReserva, Reserva, Sala, Slot

__all__ = [
    "DisponibilidadService",
    "DisponibilidadSlot",
    "TablaDisponibilidad",
    "Empleado",
    "EstadoReserva",
    "Reserva",
    "Sala",
    "Slot",
]
