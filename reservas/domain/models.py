"""
Domain models for employees, rooms, time slots and reservations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional

import pendulum
from pendulum import DateTime

from .exceptions import (
    DescripcionVacia,
    SalaInvalida,
    SlotEnElPasado,
    SlotFueraDeHorarioLaboral,
)

WORKING_HOURS_START = 9
WORKING_HOURS_END = 18


@dataclass(frozen=True, order=True)
class Slot:
    """
    Represents an immutable one-hour time window.

    Invariant: start is always in UTC on an exact hour boundary.
    Equality, ordering and hashing use start alone.
    """
    start: DateTime

    def __post_init__(self):
        start = pendulum.instance(self.start, tz="UTC").in_timezone("UTC")
        object.__setattr__(self, "start", start.set(minute=0, second=0, microsecond=0))

    @classmethod
    def new(cls, instant: datetime) -> "Slot":
        """
        Create the slot enclosing an instant.

        Naive instants are taken as UTC; aware ones are converted to UTC
        before the minutes, seconds and microseconds are dropped.
        """
        return cls(start=instant)

    @classmethod
    def from_date_and_hour(cls, year: int, month: int, day: int, hour: int) -> Optional["Slot"]:
        """
        Create a slot for a civil date and hour of day in UTC.
        Returns None if the date or hour does not exist.
        """
        try:
            start = pendulum.datetime(year, month, day, hour, tz="UTC")
        except (ValueError, OverflowError, TypeError):
            return None
        return cls(start=start)

    @classmethod
    def day_slots(cls, day: date) -> List["Slot"]:
        """
        Return the working-hour slots of a day (09:00 to 17:00 starts).

        A datetime argument contributes its UTC calendar date.
        """
        if isinstance(day, datetime):
            day = pendulum.instance(day, tz="UTC").in_timezone("UTC").date()

        slots: List[Slot] = []
        for hour in range(WORKING_HOURS_START, WORKING_HOURS_END):
            slot = cls.from_date_and_hour(day.year, day.month, day.day, hour)
            if slot is not None:
                slots.append(slot)
        return slots

    def end(self) -> DateTime:
        """Return the end of the slot (one hour after start)."""
        return self.start.add(hours=1)

    def is_working_hours(self) -> bool:
        """Check if the slot starts between 09:00 and 17:00."""
        return WORKING_HOURS_START <= self.start.hour < WORKING_HOURS_END

    def next(self) -> "Slot":
        """Return the slot one hour later."""
        return Slot(start=self.start.add(hours=1))

    def __str__(self) -> str:
        return f"{self.start.format('YYYY-MM-DD HH:00')}-{self.end().format('HH:00')}"


@dataclass
class Empleado:
    """
    An employee that can hold reservations.

    Only the id identifies an employee; duplicate emails are allowed.
    """
    id: str
    nombre: str
    email: str
    activo: bool = True

    def activar(self) -> None:
        self.activo = True

    def desactivar(self) -> None:
        self.activo = False


@dataclass
class Sala:
    """
    A meeting room.

    Invariant: the name has visible text and the capacity is positive.
    Rooms are tracked on their own and are not linked to reservations.
    """
    id: str
    nombre: str
    capacidad: int
    activa: bool = True

    def __post_init__(self):
        if not self.nombre or not self.nombre.strip():
            raise SalaInvalida("El nombre no puede estar vacío")
        if self.capacidad <= 0:
            raise SalaInvalida("La capacidad debe ser mayor a 0")

    def activar(self) -> None:
        self.activa = True

    def desactivar(self) -> None:
        self.activa = False


class EstadoReserva(str, Enum):
    """Lifecycle states of a reservation."""
    PENDIENTE = "pendiente"
    CONFIRMADA = "confirmada"
    CANCELADA = "cancelada"


@dataclass
class Reserva:
    """
    Binds an employee to a slot with a description and a lifecycle state.

    Use ``Reserva.crear`` for new reservations; the plain constructor only
    rebuilds records that were already validated.
    """
    id: str
    empleado_id: str
    slot: Slot
    descripcion: str
    estado: EstadoReserva = field(default=EstadoReserva.PENDIENTE)

    @classmethod
    def crear(
        cls,
        id: str,
        empleado_id: str,
        slot: Slot,
        descripcion: str,
        ahora: Optional[datetime] = None,
    ) -> "Reserva":
        """
        Create a pending reservation after applying the booking rules.

        Checks run in this order and the first failure wins:
        1. The slot must start strictly after ``ahora`` (default: now, UTC)
        2. The slot must lie within working hours
        3. The description must contain visible text

        Raises:
            SlotEnElPasado, SlotFueraDeHorarioLaboral, DescripcionVacia
        """
        now = pendulum.instance(ahora, tz="UTC") if ahora is not None else pendulum.now("UTC")

        if slot.start <= now:
            raise SlotEnElPasado(f"El slot {slot} ya ha comenzado")

        if not slot.is_working_hours():
            raise SlotFueraDeHorarioLaboral(
                f"El slot {slot} está fuera del horario laboral "
                f"({WORKING_HOURS_START}:00-{WORKING_HOURS_END}:00)"
            )

        texto = (descripcion or "").strip()
        if not texto:
            raise DescripcionVacia("La descripción no puede estar vacía")

        return cls(id=id, empleado_id=empleado_id, slot=slot, descripcion=texto)

    def confirmar(self) -> None:
        self.estado = EstadoReserva.CONFIRMADA

    def cancelar(self) -> None:
        self.estado = EstadoReserva.CANCELADA

    def esta_activa(self) -> bool:
        """A reservation counts against availability until it is cancelled."""
        return self.estado != EstadoReserva.CANCELADA
