"""
Application service for managing employees.
"""

from __future__ import annotations

import logging
import uuid
from typing import List, Optional

from ..domain.exceptions import NoEncontradoError, ValidacionError
from ..domain.models import Empleado
from .repositories import EmpleadoRepository

logger = logging.getLogger(__name__)


class EmpleadoService:
    """Use cases around employees: registration, lookup and (de)activation."""

    def __init__(self, repository: EmpleadoRepository) -> None:
        self._repository = repository

    async def crear_empleado(self, nombre: str, email: str) -> Empleado:
        """
        Register an employee under a fresh id. Employees start active.

        Name and email are stored trimmed; a blank name is rejected.
        """
        nombre = (nombre or "").strip()
        if not nombre:
            raise ValidacionError("El nombre no puede estar vacío")
        empleado = Empleado(id=str(uuid.uuid4()), nombre=nombre, email=(email or "").strip())
        await self._repository.guardar(empleado)
        logger.info("Empleado creado: %s (%s)", empleado.nombre, empleado.id)
        return empleado

    async def obtener_empleado(self, id: str) -> Optional[Empleado]:
        return await self._repository.obtener(id)

    async def listar_empleados(self) -> List[Empleado]:
        return await self._repository.listar()

    async def activar_empleado(self, id: str) -> Empleado:
        empleado = await self._require(id)
        empleado.activar()
        await self._repository.actualizar(empleado)
        logger.info("Empleado activado: %s", id)
        return empleado

    async def desactivar_empleado(self, id: str) -> Empleado:
        empleado = await self._require(id)
        empleado.desactivar()
        await self._repository.actualizar(empleado)
        logger.info("Empleado desactivado: %s", id)
        return empleado

    async def _require(self, id: str) -> Empleado:
        empleado = await self._repository.obtener(id)
        if empleado is None:
            raise NoEncontradoError(f"Empleado {id} no encontrado")
        return empleado
