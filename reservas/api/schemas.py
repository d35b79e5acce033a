"""
Request and response models for the REST API.

These are the boundary between JSON and the domain; the ``from_*``
constructors map entities to their wire form. The CLI's HTTP client
parses responses with the same models.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ..domain.disponibilidad import DisponibilidadSlot, TablaDisponibilidad
from ..domain.models import Empleado, Reserva, Sala, Slot


# ============= Empleados =============

class CrearEmpleadoRequest(BaseModel):
    nombre: str = Field(examples=["Juan López"])
    email: str = Field(examples=["juan@empresa.com"])


class EmpleadoResponse(BaseModel):
    id: str
    nombre: str
    email: str
    activo: bool

    @classmethod
    def from_empleado(cls, empleado: Empleado) -> "EmpleadoResponse":
        return cls(
            id=empleado.id,
            nombre=empleado.nombre,
            email=empleado.email,
            activo=empleado.activo,
        )


# ============= Reservas =============

class CrearReservaRequest(BaseModel):
    empleado_id: str
    inicio_slot: datetime = Field(
        description="Start of the slot, ISO 8601. Minutes and seconds are dropped.",
        examples=["2025-11-25T10:00:00Z"],
    )
    descripcion: str = Field(examples=["Reunión con cliente importante"])


class ReservaResponse(BaseModel):
    id: str
    empleado_id: str
    slot_inicio: datetime
    slot_fin: datetime
    descripcion: str
    estado: str = Field(examples=["pendiente"])

    @classmethod
    def from_reserva(cls, reserva: Reserva) -> "ReservaResponse":
        return cls(
            id=reserva.id,
            empleado_id=reserva.empleado_id,
            slot_inicio=reserva.slot.start,
            slot_fin=reserva.slot.end(),
            descripcion=reserva.descripcion,
            estado=reserva.estado.value,
        )


# ============= Salas =============

class CrearSalaRequest(BaseModel):
    nombre: str = Field(examples=["Sala Norte"])
    capacidad: int = Field(examples=[8])


class SalaResponse(BaseModel):
    id: str
    nombre: str
    capacidad: int
    activa: bool

    @classmethod
    def from_sala(cls, sala: Sala) -> "SalaResponse":
        return cls(id=sala.id, nombre=sala.nombre, capacidad=sala.capacidad, activa=sala.activa)


# ============= Disponibilidad =============

class SlotInfo(BaseModel):
    inicio: datetime
    fin: datetime
    hora: int

    @classmethod
    def from_slot(cls, slot: Slot) -> "SlotInfo":
        return cls(inicio=slot.start, fin=slot.end(), hora=slot.start.hour)


class DisponibilidadEmpleadoResponse(BaseModel):
    empleado_id: str
    empleado_nombre: str
    slot_inicio: datetime
    slot_fin: datetime
    disponible: bool
    reserva_id: Optional[str] = None
    descripcion_reserva: Optional[str] = None

    @classmethod
    def from_celda(cls, celda: DisponibilidadSlot) -> "DisponibilidadEmpleadoResponse":
        return cls(
            empleado_id=celda.empleado_id,
            empleado_nombre=celda.empleado_nombre,
            slot_inicio=celda.slot.start,
            slot_fin=celda.slot.end(),
            disponible=celda.disponible,
            reserva_id=celda.reserva_id,
            descripcion_reserva=celda.descripcion_reserva,
        )


class TablaDisponibilidadResponse(BaseModel):
    fecha: str = Field(examples=["2025-11-25"])
    slots: List[SlotInfo]
    disponibilidad: List[DisponibilidadEmpleadoResponse]

    @classmethod
    def from_tabla(cls, fecha: str, tabla: TablaDisponibilidad) -> "TablaDisponibilidadResponse":
        return cls(
            fecha=fecha,
            slots=[SlotInfo.from_slot(s) for s in tabla.slots],
            disponibilidad=[DisponibilidadEmpleadoResponse.from_celda(c) for c in tabla.disponibilidad],
        )


class OcupacionSlotResponse(BaseModel):
    inicio: datetime
    fin: datetime
    hora: int
    reservas_activas: int


class RankingEntryResponse(BaseModel):
    nombre: str
    reservas_activas: int


# ============= Genéricos =============

class ErrorResponse(BaseModel):
    error: str
