"""
Application service for managing meeting rooms.
"""

from __future__ import annotations

import logging
import uuid
from typing import List, Optional

from ..domain.exceptions import NoEncontradoError
from ..domain.models import Sala
from .repositories import SalaRepository

logger = logging.getLogger(__name__)


class SalaService:
    """Use cases around rooms. Rooms are not linked to reservations."""

    def __init__(self, repository: SalaRepository) -> None:
        self._repository = repository

    async def crear_sala(self, nombre: str, capacidad: int) -> Sala:
        """
        Register a room.

        Raises:
            SalaInvalida: If the name is blank or the capacity is not positive
        """
        sala = Sala(id=str(uuid.uuid4()), nombre=nombre, capacidad=capacidad)
        await self._repository.guardar(sala)
        logger.info("Sala creada: %s (%s)", sala.nombre, sala.id)
        return sala

    async def obtener_sala(self, id: str) -> Optional[Sala]:
        return await self._repository.obtener(id)

    async def listar_salas(self) -> List[Sala]:
        return await self._repository.listar()

    async def activar_sala(self, id: str) -> Sala:
        sala = await self._require(id)
        sala.activar()
        await self._repository.actualizar(sala)
        return sala

    async def desactivar_sala(self, id: str) -> Sala:
        sala = await self._require(id)
        sala.desactivar()
        await self._repository.actualizar(sala)
        return sala

    async def _require(self, id: str) -> Sala:
        sala = await self._repository.obtener(id)
        if sala is None:
            raise NoEncontradoError(f"Sala {id} no encontrada")
        return sala
