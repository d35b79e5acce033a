"""
In-memory repositories.

Each collection sits behind a single ``asyncio.Lock``; entities go in and
come out as copies so no caller can mutate the stored state directly.
Data lives for the lifetime of the process only.
"""

from __future__ import annotations

import asyncio
import copy
from typing import Dict, List, Optional, Tuple

from ..domain.exceptions import ConflictoError, NoEncontradoError
from ..domain.models import Empleado, Reserva, Sala, Slot


class InMemoryEmpleadoRepository:
    """Employee storage keyed by id."""

    def __init__(self) -> None:
        self._storage: Dict[str, Empleado] = {}
        self._lock = asyncio.Lock()

    async def guardar(self, empleado: Empleado) -> None:
        async with self._lock:
            self._storage[empleado.id] = copy.copy(empleado)

    async def obtener(self, id: str) -> Optional[Empleado]:
        async with self._lock:
            empleado = self._storage.get(id)
            return copy.copy(empleado) if empleado is not None else None

    async def listar(self) -> List[Empleado]:
        async with self._lock:
            return [copy.copy(e) for e in self._storage.values()]

    async def actualizar(self, empleado: Empleado) -> None:
        async with self._lock:
            if empleado.id not in self._storage:
                raise NoEncontradoError("Empleado no encontrado")
            self._storage[empleado.id] = copy.copy(empleado)

    async def existe(self, id: str) -> bool:
        async with self._lock:
            return id in self._storage


class InMemoryReservaRepository:
    """
    Reservation storage keyed by id.

    Also keeps a unique index of active reservations by (employee, slot),
    which makes "one active reservation per employee and slot" a storage
    constraint instead of a separate read followed by a write.
    """

    def __init__(self) -> None:
        self._storage: Dict[str, Reserva] = {}
        self._activas: Dict[Tuple[str, Slot], str] = {}
        self._lock = asyncio.Lock()

    async def guardar(self, reserva: Reserva) -> None:
        async with self._lock:
            self._store(reserva)

    async def guardar_si_libre(self, reserva: Reserva) -> bool:
        async with self._lock:
            if reserva.esta_activa():
                holder = self._activas.get((reserva.empleado_id, reserva.slot))
                if holder is not None and holder != reserva.id:
                    return False
            self._store(reserva)
            return True

    async def obtener(self, id: str) -> Optional[Reserva]:
        async with self._lock:
            reserva = self._storage.get(id)
            return copy.copy(reserva) if reserva is not None else None

    async def listar(self) -> List[Reserva]:
        async with self._lock:
            return [copy.copy(r) for r in self._storage.values()]

    async def listar_por_empleado(self, empleado_id: str) -> List[Reserva]:
        async with self._lock:
            return [
                copy.copy(r) for r in self._storage.values()
                if r.empleado_id == empleado_id and r.esta_activa()
            ]

    async def listar_por_slot(self, slot: Slot) -> List[Reserva]:
        async with self._lock:
            return [
                copy.copy(r) for r in self._storage.values()
                if r.slot == slot and r.esta_activa()
            ]

    async def actualizar(self, reserva: Reserva) -> None:
        async with self._lock:
            if reserva.id not in self._storage:
                raise NoEncontradoError("Reserva no encontrada")

            if reserva.esta_activa():
                holder = self._activas.get((reserva.empleado_id, reserva.slot))
                if holder is not None and holder != reserva.id:
                    raise ConflictoError(
                        f"El empleado {reserva.empleado_id} ya tiene una reserva "
                        f"activa en el slot {reserva.slot}"
                    )

            self._store(reserva)

    async def existe(self, id: str) -> bool:
        async with self._lock:
            return id in self._storage

    async def existe_para_empleado_en_slot(self, empleado_id: str, slot: Slot) -> bool:
        async with self._lock:
            return (empleado_id, slot) in self._activas

    def _store(self, reserva: Reserva) -> None:
        """Write a reservation and keep the active index in step. Caller holds the lock."""
        previous = self._storage.get(reserva.id)
        if previous is not None:
            key = (previous.empleado_id, previous.slot)
            if self._activas.get(key) == reserva.id:
                del self._activas[key]

        self._storage[reserva.id] = copy.copy(reserva)

        if reserva.esta_activa():
            self._activas.setdefault((reserva.empleado_id, reserva.slot), reserva.id)


class InMemorySalaRepository:
    """Room storage keyed by id."""

    def __init__(self) -> None:
        self._storage: Dict[str, Sala] = {}
        self._lock = asyncio.Lock()

    async def guardar(self, sala: Sala) -> None:
        async with self._lock:
            self._storage[sala.id] = copy.copy(sala)

    async def obtener(self, id: str) -> Optional[Sala]:
        async with self._lock:
            sala = self._storage.get(id)
            return copy.copy(sala) if sala is not None else None

    async def listar(self) -> List[Sala]:
        async with self._lock:
            return [copy.copy(s) for s in self._storage.values()]

    async def actualizar(self, sala: Sala) -> None:
        async with self._lock:
            if sala.id not in self._storage:
                raise NoEncontradoError("Sala no encontrada")
            self._storage[sala.id] = copy.copy(sala)
