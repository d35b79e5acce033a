"""
Storage protocols the application services depend on.

Any backend (the in-memory adapters today, a database later) plugs in by
providing these coroutines. Implementations own their data: they store
and hand out copies, so callers persist changes through ``actualizar``.
"""

from __future__ import annotations

from typing import List, Optional, Protocol

from ..domain.models import Empleado, Reserva, Sala, Slot


class EmpleadoRepository(Protocol):
    """Protocol describing employee storage."""

    async def guardar(self, empleado: Empleado) -> None:
        """Insert or replace an employee."""

    async def obtener(self, id: str) -> Optional[Empleado]:
        """Return the employee or None."""

    async def listar(self) -> List[Empleado]:
        """Return all employees in insertion order."""

    async def actualizar(self, empleado: Empleado) -> None:
        """Replace a stored employee. Raises NoEncontradoError if unknown."""

    async def existe(self, id: str) -> bool:
        """Check whether an employee id is stored."""


class ReservaRepository(Protocol):
    """Protocol describing reservation storage."""

    async def guardar(self, reserva: Reserva) -> None:
        """Insert or replace a reservation without any conflict check."""

    async def guardar_si_libre(self, reserva: Reserva) -> bool:
        """
        Atomically insert a reservation unless the employee already holds
        an active one for the same slot. Returns False on conflict.
        """

    async def obtener(self, id: str) -> Optional[Reserva]:
        """Return the reservation or None."""

    async def listar(self) -> List[Reserva]:
        """Return all reservations, cancelled ones included."""

    async def listar_por_empleado(self, empleado_id: str) -> List[Reserva]:
        """Return the employee's active reservations."""

    async def listar_por_slot(self, slot: Slot) -> List[Reserva]:
        """Return the active reservations for a slot."""

    async def actualizar(self, reserva: Reserva) -> None:
        """
        Replace a stored reservation.

        Raises NoEncontradoError if unknown and ConflictoError if the change
        would leave two active reservations for one employee and slot.
        """

    async def existe(self, id: str) -> bool:
        """Check whether a reservation id is stored."""

    async def existe_para_empleado_en_slot(self, empleado_id: str, slot: Slot) -> bool:
        """Check for an active reservation for the employee and slot."""


class SalaRepository(Protocol):
    """Protocol describing room storage."""

    async def guardar(self, sala: Sala) -> None:
        """Insert or replace a room."""

    async def obtener(self, id: str) -> Optional[Sala]:
        """Return the room or None."""

    async def listar(self) -> List[Sala]:
        """Return all rooms in insertion order."""

    async def actualizar(self, sala: Sala) -> None:
        """Replace a stored room. Raises NoEncontradoError if unknown."""
