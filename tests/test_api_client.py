"""
Tests for the requests-based API client.
"""

import pendulum
import pytest
import requests

from reservas.adapters.api_client import ApiClient
from reservas.domain.exceptions import ApiClientError

_NO_JSON = object()


class FakeResponse:
    def __init__(self, status_code, data=_NO_JSON):
        self.status_code = status_code
        self._data = data

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._data is _NO_JSON:
            raise ValueError("No JSON object could be decoded")
        return self._data


class FakeSession:
    """Captures requests and replays queued responses."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def request(self, method, url, timeout=None, **kwargs):
        self.requests.append({"method": method, "url": url, "timeout": timeout, **kwargs})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


EMPLEADO = {"id": "e1", "nombre": "Juan", "email": "juan@empresa.com", "activo": True}
RESERVA = {
    "id": "r1",
    "empleado_id": "e1",
    "slot_inicio": "2099-03-02T10:00:00Z",
    "slot_fin": "2099-03-02T11:00:00Z",
    "descripcion": "Reunión",
    "estado": "pendiente",
}


def _client(*responses) -> ApiClient:
    return ApiClient("http://localhost:3000/api/", timeout=5, session=FakeSession(*responses))


class TestApiClient:
    """Tests for request building and response handling."""

    def test_crear_empleado(self):
        client = _client(FakeResponse(201, EMPLEADO))

        empleado = client.crear_empleado("Juan", "juan@empresa.com")

        assert empleado.id == "e1"
        assert empleado.activo
        sent = client.session.requests[0]
        assert sent["method"] == "POST"
        assert sent["url"] == "http://localhost:3000/api/empleados"
        assert sent["json"] == {"nombre": "Juan", "email": "juan@empresa.com"}
        assert sent["timeout"] == 5

    def test_crear_reserva_sends_iso_start(self):
        client = _client(FakeResponse(201, RESERVA))

        reserva = client.crear_reserva("e1", pendulum.datetime(2099, 3, 2, 10, tz="UTC"), "Reunión")

        assert reserva.estado == "pendiente"
        assert reserva.slot_inicio.hour == 10
        payload = client.session.requests[0]["json"]
        assert payload["empleado_id"] == "e1"
        assert payload["inicio_slot"].startswith("2099-03-02T10:00:00")

    def test_list_and_query_params(self):
        client = _client(
            FakeResponse(200, [EMPLEADO]),
            FakeResponse(200, {"fecha": "2099-03-02", "slots": [], "disponibilidad": []}),
        )

        assert [e.nombre for e in client.listar_empleados()] == ["Juan"]
        tabla = client.disponibilidad("2099-03-02")

        assert tabla.fecha == "2099-03-02"
        sent = client.session.requests[1]
        assert sent["url"] == "http://localhost:3000/api/disponibilidad"
        assert sent["params"] == {"fecha": "2099-03-02"}

    def test_action_urls(self):
        client = _client(FakeResponse(200, RESERVA), FakeResponse(200, RESERVA))

        client.confirmar_reserva("r1")
        client.cancelar_reserva("r1")

        urls = [r["url"] for r in client.session.requests]
        assert urls == [
            "http://localhost:3000/api/reservas/r1/confirmar",
            "http://localhost:3000/api/reservas/r1/cancelar",
        ]

    def test_server_error_message_is_surfaced(self):
        client = _client(FakeResponse(409, {"error": "El empleado e1 ya tiene una reserva en el slot X"}))

        with pytest.raises(ApiClientError, match="ya tiene una reserva"):
            client.crear_reserva("e1", pendulum.datetime(2099, 3, 2, 10, tz="UTC"), "Reunión")

    def test_error_without_body(self):
        client = _client(FakeResponse(502))

        with pytest.raises(ApiClientError, match="HTTP 502"):
            client.ranking()

    def test_connection_error(self):
        client = _client(requests.exceptions.ConnectionError("connection refused"))

        with pytest.raises(ApiClientError, match="Error de conexión"):
            client.listar_salas()

    def test_unexpected_payload(self):
        client = _client(FakeResponse(200, {"id": "e1"}), FakeResponse(200, {"not": "a list"}))

        with pytest.raises(ApiClientError, match="Respuesta no válida"):
            client.obtener_empleado("e1")
        with pytest.raises(ApiClientError, match="Respuesta no válida"):
            client.listar_empleados()
