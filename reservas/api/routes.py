"""REST endpoints for employees, reservations, rooms and availability.

Handlers only translate HTTP to service calls and entities to response
models. Failures surface as domain exceptions and are rendered by the
handlers in ``reservas.api.errors``.
"""

from datetime import date
from typing import Annotated, List

import pendulum
from fastapi import APIRouter, Depends, Query, status

from ..domain.exceptions import NoEncontradoError, ValidacionError
from ..domain.models import Slot
from ..services import (
    ConsultaDisponibilidadService,
    EmpleadoService,
    ReservaService,
    SalaService,
)
from .dependencies import (
    get_disponibilidad_service,
    get_empleado_service,
    get_reserva_service,
    get_sala_service,
)
from .schemas import (
    CrearEmpleadoRequest,
    CrearReservaRequest,
    CrearSalaRequest,
    EmpleadoResponse,
    ErrorResponse,
    OcupacionSlotResponse,
    RankingEntryResponse,
    ReservaResponse,
    SalaResponse,
    SlotInfo,
    TablaDisponibilidadResponse,
)

EmpleadoServiceDep = Annotated[EmpleadoService, Depends(get_empleado_service)]
ReservaServiceDep = Annotated[ReservaService, Depends(get_reserva_service)]
SalaServiceDep = Annotated[SalaService, Depends(get_sala_service)]
DisponibilidadServiceDep = Annotated[ConsultaDisponibilidadService, Depends(get_disponibilidad_service)]
FechaParam = Annotated[str, Query(description="Fecha en formato YYYY-MM-DD", examples=["2025-11-25"])]

_ERRORS = {
    400: {"model": ErrorResponse, "description": "Error de validación"},
    404: {"model": ErrorResponse, "description": "No encontrado"},
}

router = APIRouter()


def parse_fecha(fecha: str) -> date:
    """Parse a YYYY-MM-DD string. Raises ValidacionError on bad input."""
    try:
        return pendulum.from_format(fecha.strip(), "YYYY-MM-DD", tz="UTC").date()
    except ValueError as exc:
        raise ValidacionError("Formato de fecha inválido. Use YYYY-MM-DD") from exc


# ============= Empleados =============

@router.post(
    "/empleados",
    response_model=EmpleadoResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERRORS,
    tags=["Empleados"],
)
async def crear_empleado(request: CrearEmpleadoRequest, service: EmpleadoServiceDep):
    """Crear un nuevo empleado."""
    empleado = await service.crear_empleado(request.nombre, request.email)
    return EmpleadoResponse.from_empleado(empleado)


@router.get("/empleados", response_model=List[EmpleadoResponse], tags=["Empleados"])
async def listar_empleados(service: EmpleadoServiceDep):
    return [EmpleadoResponse.from_empleado(e) for e in await service.listar_empleados()]


@router.get("/empleados/{id}", response_model=EmpleadoResponse, responses=_ERRORS, tags=["Empleados"])
async def obtener_empleado(id: str, service: EmpleadoServiceDep):
    empleado = await service.obtener_empleado(id)
    if empleado is None:
        raise NoEncontradoError(f"Empleado {id} no encontrado")
    return EmpleadoResponse.from_empleado(empleado)


@router.post("/empleados/{id}/activar", response_model=EmpleadoResponse, responses=_ERRORS, tags=["Empleados"])
async def activar_empleado(id: str, service: EmpleadoServiceDep):
    return EmpleadoResponse.from_empleado(await service.activar_empleado(id))


@router.post("/empleados/{id}/desactivar", response_model=EmpleadoResponse, responses=_ERRORS, tags=["Empleados"])
async def desactivar_empleado(id: str, service: EmpleadoServiceDep):
    return EmpleadoResponse.from_empleado(await service.desactivar_empleado(id))


@router.get("/empleados/{id}/reservas", response_model=List[ReservaResponse], tags=["Reservas"])
async def listar_reservas_empleado(id: str, service: ReservaServiceDep):
    """Reservas activas de un empleado."""
    return [ReservaResponse.from_reserva(r) for r in await service.listar_reservas_empleado(id)]


# ============= Reservas =============

@router.post(
    "/reservas",
    response_model=ReservaResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**_ERRORS, 409: {"model": ErrorResponse, "description": "Slot ocupado"}},
    tags=["Reservas"],
)
async def crear_reserva(request: CrearReservaRequest, service: ReservaServiceDep):
    """Crear una reserva. El inicio se redondea al comienzo de la hora."""
    slot = Slot.new(request.inicio_slot)
    reserva = await service.crear_reserva(request.empleado_id, slot, request.descripcion)
    return ReservaResponse.from_reserva(reserva)


@router.get("/reservas", response_model=List[ReservaResponse], tags=["Reservas"])
async def listar_reservas(service: ReservaServiceDep):
    return [ReservaResponse.from_reserva(r) for r in await service.listar_reservas()]


@router.get("/reservas/{id}", response_model=ReservaResponse, responses=_ERRORS, tags=["Reservas"])
async def obtener_reserva(id: str, service: ReservaServiceDep):
    reserva = await service.obtener_reserva(id)
    if reserva is None:
        raise NoEncontradoError(f"Reserva {id} no encontrada")
    return ReservaResponse.from_reserva(reserva)


@router.post(
    "/reservas/{id}/confirmar",
    response_model=ReservaResponse,
    responses={**_ERRORS, 409: {"model": ErrorResponse, "description": "Slot ocupado"}},
    tags=["Reservas"],
)
async def confirmar_reserva(id: str, service: ReservaServiceDep):
    return ReservaResponse.from_reserva(await service.confirmar_reserva(id))


@router.post("/reservas/{id}/cancelar", response_model=ReservaResponse, responses=_ERRORS, tags=["Reservas"])
async def cancelar_reserva(id: str, service: ReservaServiceDep):
    return ReservaResponse.from_reserva(await service.cancelar_reserva(id))


# ============= Salas =============

@router.post(
    "/salas",
    response_model=SalaResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERRORS,
    tags=["Salas"],
)
async def crear_sala(request: CrearSalaRequest, service: SalaServiceDep):
    sala = await service.crear_sala(request.nombre, request.capacidad)
    return SalaResponse.from_sala(sala)


@router.get("/salas", response_model=List[SalaResponse], tags=["Salas"])
async def listar_salas(service: SalaServiceDep):
    return [SalaResponse.from_sala(s) for s in await service.listar_salas()]


@router.get("/salas/{id}", response_model=SalaResponse, responses=_ERRORS, tags=["Salas"])
async def obtener_sala(id: str, service: SalaServiceDep):
    sala = await service.obtener_sala(id)
    if sala is None:
        raise NoEncontradoError(f"Sala {id} no encontrada")
    return SalaResponse.from_sala(sala)


@router.post("/salas/{id}/activar", response_model=SalaResponse, responses=_ERRORS, tags=["Salas"])
async def activar_sala(id: str, service: SalaServiceDep):
    return SalaResponse.from_sala(await service.activar_sala(id))


@router.post("/salas/{id}/desactivar", response_model=SalaResponse, responses=_ERRORS, tags=["Salas"])
async def desactivar_sala(id: str, service: SalaServiceDep):
    return SalaResponse.from_sala(await service.desactivar_sala(id))


# ============= Disponibilidad =============

@router.get(
    "/disponibilidad",
    response_model=TablaDisponibilidadResponse,
    responses=_ERRORS,
    tags=["Disponibilidad"],
)
async def obtener_disponibilidad(fecha: FechaParam, service: DisponibilidadServiceDep):
    """Tabla de disponibilidad de los empleados activos para una fecha."""
    tabla = await service.tabla_del_dia(parse_fecha(fecha))
    return TablaDisponibilidadResponse.from_tabla(fecha.strip(), tabla)


@router.get(
    "/disponibilidad/libres",
    response_model=List[SlotInfo],
    responses=_ERRORS,
    tags=["Disponibilidad"],
)
async def slots_libres(
    fecha: FechaParam,
    empleado_id: Annotated[str, Query(description="ID del empleado")],
    service: DisponibilidadServiceDep,
):
    """Slots de la fecha en los que el empleado está libre."""
    slots = await service.slots_libres(empleado_id, parse_fecha(fecha))
    return [SlotInfo.from_slot(s) for s in slots]


@router.get(
    "/disponibilidad/comunes",
    response_model=List[SlotInfo],
    responses=_ERRORS,
    tags=["Disponibilidad"],
)
async def slots_comunes(fecha: FechaParam, service: DisponibilidadServiceDep):
    """Slots de la fecha en los que todos los empleados activos están libres."""
    slots = await service.slots_comunes(parse_fecha(fecha))
    return [SlotInfo.from_slot(s) for s in slots]


@router.get(
    "/disponibilidad/ocupacion",
    response_model=List[OcupacionSlotResponse],
    responses=_ERRORS,
    tags=["Disponibilidad"],
)
async def ocupacion(fecha: FechaParam, service: DisponibilidadServiceDep):
    """Número de reservas activas por slot de la fecha."""
    resumen = await service.ocupacion(parse_fecha(fecha))
    return [
        OcupacionSlotResponse(
            inicio=slot.start,
            fin=slot.end(),
            hora=slot.start.hour,
            reservas_activas=count,
        )
        for slot, count in sorted(resumen.items())
    ]


@router.get("/disponibilidad/ranking", response_model=List[RankingEntryResponse], tags=["Disponibilidad"])
async def ranking(service: DisponibilidadServiceDep):
    """Empleados activos ordenados por reservas activas."""
    return [
        RankingEntryResponse(nombre=nombre, reservas_activas=count)
        for nombre, count in await service.ranking()
    ]
