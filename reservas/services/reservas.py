"""
Application service for booking slots.

The service checks the employee, lets the domain build and validate the
reservation, and relies on the repository's insert-if-free operation to
enforce one active reservation per employee and slot.
"""

from __future__ import annotations

import logging
import uuid
from typing import List, Optional

from ..domain.exceptions import ConflictoError, EmpleadoInactivo, NoEncontradoError
from ..domain.models import Reserva, Slot
from .repositories import EmpleadoRepository, ReservaRepository

logger = logging.getLogger(__name__)


class ReservaService:
    """Use cases around reservations."""

    def __init__(
        self,
        repository: ReservaRepository,
        empleado_repository: EmpleadoRepository,
    ) -> None:
        self._repository = repository
        self._empleados = empleado_repository

    async def crear_reserva(self, empleado_id: str, slot: Slot, descripcion: str) -> Reserva:
        """
        Book a slot for an employee.

        Raises:
            NoEncontradoError: If the employee does not exist
            EmpleadoInactivo: If the employee is deactivated
            ValidacionError: If the domain rejects the reservation
            ConflictoError: If the employee already holds the slot
        """
        empleado = await self._empleados.obtener(empleado_id)
        if empleado is None:
            raise NoEncontradoError(f"Empleado {empleado_id} no encontrado")
        if not empleado.activo:
            raise EmpleadoInactivo(f"El empleado {empleado_id} está inactivo")

        reserva = Reserva.crear(
            id=str(uuid.uuid4()),
            empleado_id=empleado_id,
            slot=slot,
            descripcion=descripcion,
        )

        if not await self._repository.guardar_si_libre(reserva):
            logger.warning("Reserva duplicada rechazada: %s en %s", empleado_id, slot)
            raise ConflictoError(
                f"El empleado {empleado_id} ya tiene una reserva en el slot {slot}"
            )

        logger.info("Reserva creada: %s para %s en %s", reserva.id, empleado_id, slot)
        return reserva

    async def obtener_reserva(self, id: str) -> Optional[Reserva]:
        return await self._repository.obtener(id)

    async def listar_reservas(self) -> List[Reserva]:
        """All reservations, cancelled ones included."""
        return await self._repository.listar()

    async def listar_reservas_empleado(self, empleado_id: str) -> List[Reserva]:
        """Active reservations of an employee."""
        return await self._repository.listar_por_empleado(empleado_id)

    async def listar_reservas_slot(self, slot: Slot) -> List[Reserva]:
        """Active reservations on a slot."""
        return await self._repository.listar_por_slot(slot)

    async def confirmar_reserva(self, id: str) -> Reserva:
        reserva = await self._require(id)
        reserva.confirmar()
        await self._repository.actualizar(reserva)
        logger.info("Reserva confirmada: %s", id)
        return reserva

    async def cancelar_reserva(self, id: str) -> Reserva:
        reserva = await self._require(id)
        reserva.cancelar()
        await self._repository.actualizar(reserva)
        logger.info("Reserva cancelada: %s", id)
        return reserva

    async def _require(self, id: str) -> Reserva:
        reserva = await self._repository.obtener(id)
        if reserva is None:
            raise NoEncontradoError(f"Reserva {id} no encontrada")
        return reserva
