"""
Application factory: wires the in-memory repositories, the services and
the REST and web routers into one FastAPI app.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from . import __version__
from .adapters.memory import (
    InMemoryEmpleadoRepository,
    InMemoryReservaRepository,
    InMemorySalaRepository,
)
from .api import Servicios, register_exception_handlers
from .api import router as api_router
from .config import AppConfig
from .logs import configure_logging
from .services import (
    ConsultaDisponibilidadService,
    EmpleadoService,
    ReservaService,
    SalaService,
)
from .web import router as web_router

logger = logging.getLogger(__name__)


def build_servicios() -> Servicios:
    """Create a fresh set of services over empty in-memory storage."""
    empleados = InMemoryEmpleadoRepository()
    reservas = InMemoryReservaRepository()
    salas = InMemorySalaRepository()

    return Servicios(
        empleados=EmpleadoService(empleados),
        reservas=ReservaService(reservas, empleados),
        salas=SalaService(salas),
        disponibilidad=ConsultaDisponibilidadService(empleados, reservas),
    )


async def seed(servicios: Servicios, config: AppConfig) -> None:
    """Create the employees and rooms listed in the configuration."""
    for empleado in config.empleados:
        await servicios.empleados.crear_empleado(empleado.nombre, empleado.email)
    for sala in config.salas:
        await servicios.salas.crear_sala(sala.nombre, sala.capacidad)

    if config.empleados or config.salas:
        logger.info(
            "Seeded %d empleado(s) and %d sala(s)", len(config.empleados), len(config.salas)
        )


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Application configuration. Defaults to built-in defaults.

    Returns:
        Configured FastAPI instance; services live on ``app.state.servicios``.
    """
    config = config or AppConfig()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(config.logging.level)
        await seed(app.state.servicios, config)
        logger.info("Reservas server ready")
        yield

    app = FastAPI(
        title="Sistema de Reservas",
        description="Reserva de franjas horarias de una hora para empleados",
        version=__version__,
        docs_url="/api/docs",
        redoc_url=None,
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )
    app.state.servicios = build_servicios()

    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api")
    app.include_router(web_router)

    return app
