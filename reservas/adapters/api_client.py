"""
HTTP client for the reservations REST API, used by the CLI.
"""

from datetime import datetime
from typing import Any, List, Optional, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from ..api.schemas import (
    EmpleadoResponse,
    OcupacionSlotResponse,
    RankingEntryResponse,
    ReservaResponse,
    SalaResponse,
    TablaDisponibilidadResponse,
)
from ..domain.exceptions import ApiClientError

T = TypeVar("T", bound=BaseModel)


class ApiClient:
    """
    Thin wrapper over the REST endpoints.

    Every call returns the parsed response model. Non-2xx answers raise
    ApiClientError carrying the server's ``error`` message.
    """

    def __init__(self, base_url: str, timeout: float = 10.0, session: Optional[requests.Session] = None):
        """
        Initialize the API client.

        Args:
            base_url: API root, e.g. ``http://localhost:3000/api``
            timeout: Per-request timeout in seconds
            session: Optional requests session (tests inject a fake one)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    # ============= Empleados =============

    def crear_empleado(self, nombre: str, email: str) -> EmpleadoResponse:
        data = self._request("POST", "/empleados", json={"nombre": nombre, "email": email})
        return self._parse(EmpleadoResponse, data)

    def listar_empleados(self) -> List[EmpleadoResponse]:
        return self._parse_list(EmpleadoResponse, self._request("GET", "/empleados"))

    def obtener_empleado(self, id: str) -> EmpleadoResponse:
        return self._parse(EmpleadoResponse, self._request("GET", f"/empleados/{id}"))

    def activar_empleado(self, id: str) -> EmpleadoResponse:
        return self._parse(EmpleadoResponse, self._request("POST", f"/empleados/{id}/activar"))

    def desactivar_empleado(self, id: str) -> EmpleadoResponse:
        return self._parse(EmpleadoResponse, self._request("POST", f"/empleados/{id}/desactivar"))

    # ============= Reservas =============

    def crear_reserva(self, empleado_id: str, inicio_slot: datetime, descripcion: str) -> ReservaResponse:
        payload = {
            "empleado_id": empleado_id,
            "inicio_slot": inicio_slot.isoformat(),
            "descripcion": descripcion,
        }
        return self._parse(ReservaResponse, self._request("POST", "/reservas", json=payload))

    def listar_reservas(self) -> List[ReservaResponse]:
        return self._parse_list(ReservaResponse, self._request("GET", "/reservas"))

    def listar_reservas_empleado(self, empleado_id: str) -> List[ReservaResponse]:
        return self._parse_list(
            ReservaResponse, self._request("GET", f"/empleados/{empleado_id}/reservas")
        )

    def confirmar_reserva(self, id: str) -> ReservaResponse:
        return self._parse(ReservaResponse, self._request("POST", f"/reservas/{id}/confirmar"))

    def cancelar_reserva(self, id: str) -> ReservaResponse:
        return self._parse(ReservaResponse, self._request("POST", f"/reservas/{id}/cancelar"))

    # ============= Salas =============

    def crear_sala(self, nombre: str, capacidad: int) -> SalaResponse:
        data = self._request("POST", "/salas", json={"nombre": nombre, "capacidad": capacidad})
        return self._parse(SalaResponse, data)

    def listar_salas(self) -> List[SalaResponse]:
        return self._parse_list(SalaResponse, self._request("GET", "/salas"))

    def activar_sala(self, id: str) -> SalaResponse:
        return self._parse(SalaResponse, self._request("POST", f"/salas/{id}/activar"))

    def desactivar_sala(self, id: str) -> SalaResponse:
        return self._parse(SalaResponse, self._request("POST", f"/salas/{id}/desactivar"))

    # ============= Disponibilidad =============

    def disponibilidad(self, fecha: str) -> TablaDisponibilidadResponse:
        data = self._request("GET", "/disponibilidad", params={"fecha": fecha})
        return self._parse(TablaDisponibilidadResponse, data)

    def ocupacion(self, fecha: str) -> List[OcupacionSlotResponse]:
        data = self._request("GET", "/disponibilidad/ocupacion", params={"fecha": fecha})
        return self._parse_list(OcupacionSlotResponse, data)

    def ranking(self) -> List[RankingEntryResponse]:
        return self._parse_list(RankingEntryResponse, self._request("GET", "/disponibilidad/ranking"))

    # ============= Internals =============

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            raise ApiClientError(f"Error de conexión: {e}") from e

        if not response.ok:
            raise ApiClientError(self._error_message(response))

        try:
            return response.json()
        except ValueError as e:
            raise ApiClientError(f"Respuesta no válida del servidor: {e}") from e

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return f"HTTP {response.status_code}"

    @staticmethod
    def _parse(model: Type[T], data: Any) -> T:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise ApiClientError(f"Respuesta no válida del servidor: {e}") from e

    @classmethod
    def _parse_list(cls, model: Type[T], data: Any) -> List[T]:
        if not isinstance(data, list):
            raise ApiClientError("Respuesta no válida del servidor: se esperaba una lista")
        return [cls._parse(model, item) for item in data]
