"""
Availability queries for a calendar day.

The service loads employees and reservations from storage and delegates
every calculation to the domain-level ``DisponibilidadService``, keeping
the adapters free of business logic.
"""

from __future__ import annotations

from datetime import date
from typing import Dict, List, Tuple

from ..domain.disponibilidad import DisponibilidadService, TablaDisponibilidad
from ..domain.models import Slot
from .repositories import EmpleadoRepository, ReservaRepository


class ConsultaDisponibilidadService:
    """Day-level availability views over the stored data."""

    def __init__(
        self,
        empleado_repository: EmpleadoRepository,
        reserva_repository: ReservaRepository,
    ) -> None:
        self._empleados = empleado_repository
        self._reservas = reserva_repository

    async def tabla_del_dia(self, fecha: date) -> TablaDisponibilidad:
        """Availability grid of all active employees over the day's working slots."""
        empleados = await self._empleados.listar()
        reservas = await self._reservas.listar()
        return DisponibilidadService.generar_tabla_disponibilidad(
            empleados, Slot.day_slots(fecha), reservas
        )

    async def slots_libres(self, empleado_id: str, fecha: date) -> List[Slot]:
        reservas = await self._reservas.listar_por_empleado(empleado_id)
        return DisponibilidadService.slots_libres_empleado(
            empleado_id, Slot.day_slots(fecha), reservas
        )

    async def slots_comunes(self, fecha: date) -> List[Slot]:
        """Slots of the day where every active employee is free."""
        empleados = await self._empleados.listar()
        reservas = await self._reservas.listar()
        return DisponibilidadService.slots_con_todos_disponibles(
            empleados, Slot.day_slots(fecha), reservas
        )

    async def ocupacion(self, fecha: date) -> Dict[Slot, int]:
        reservas = await self._reservas.listar()
        return DisponibilidadService.resumen_ocupacion(Slot.day_slots(fecha), reservas)

    async def ranking(self) -> List[Tuple[str, int]]:
        """Active employees ranked by active reservations, busiest first."""
        empleados = await self._empleados.listar()
        reservas = await self._reservas.listar()
        return DisponibilidadService.empleados_mas_ocupados(empleados, reservas)
