"""FastAPI dependencies that hand the wired services to route handlers.

The application factory stores a ``Servicios`` container on
``app.state.servicios``; both the REST and the web routers read from it.
"""

from dataclasses import dataclass

from fastapi import Request

from ..services import (
    ConsultaDisponibilidadService,
    EmpleadoService,
    ReservaService,
    SalaService,
)


@dataclass(frozen=True)
class Servicios:
    """Application services shared by every inbound adapter."""
    empleados: EmpleadoService
    reservas: ReservaService
    salas: SalaService
    disponibilidad: ConsultaDisponibilidadService


def get_servicios(request: Request) -> Servicios:
    return request.app.state.servicios


def get_empleado_service(request: Request) -> EmpleadoService:
    return get_servicios(request).empleados


def get_reserva_service(request: Request) -> ReservaService:
    return get_servicios(request).reservas


def get_sala_service(request: Request) -> SalaService:
    return get_servicios(request).salas


def get_disponibilidad_service(request: Request) -> ConsultaDisponibilidadService:
    return get_servicios(request).disponibilidad
