"""
Tests for the application services over in-memory storage.
"""

import asyncio
from datetime import date

import pytest

from reservas.adapters.memory import (
    InMemoryEmpleadoRepository,
    InMemoryReservaRepository,
    InMemorySalaRepository,
)
from reservas.domain.exceptions import (
    ConflictoError,
    DescripcionVacia,
    EmpleadoInactivo,
    NoEncontradoError,
    SalaInvalida,
    SlotFueraDeHorarioLaboral,
    ValidacionError,
)
from reservas.domain.models import EstadoReserva, Slot
from reservas.services import (
    ConsultaDisponibilidadService,
    EmpleadoService,
    ReservaService,
    SalaService,
)

DIA = date(2099, 3, 2)


def _slot(hour: int) -> Slot:
    return Slot.from_date_and_hour(DIA.year, DIA.month, DIA.day, hour)


class Servicios:
    """Services wired over fresh in-memory repositories."""

    def __init__(self):
        empleados = InMemoryEmpleadoRepository()
        reservas = InMemoryReservaRepository()
        self.empleados = EmpleadoService(empleados)
        self.reservas = ReservaService(reservas, empleados)
        self.salas = SalaService(InMemorySalaRepository())
        self.disponibilidad = ConsultaDisponibilidadService(empleados, reservas)


def test_booking_scenario_end_to_end():
    """Juan books 10:00, a second booking conflicts, cancelling frees the slot."""
    async def scenario():
        s = Servicios()
        juan = await s.empleados.crear_empleado("Juan", "juan@empresa.com")
        maria = await s.empleados.crear_empleado("María", "maria@empresa.com")

        reserva = await s.reservas.crear_reserva(juan.id, _slot(10), "  Reunión con cliente ")
        assert reserva.estado == EstadoReserva.PENDIENTE
        assert reserva.descripcion == "Reunión con cliente"

        with pytest.raises(ConflictoError, match="2099-03-02 10:00-11:00"):
            await s.reservas.crear_reserva(juan.id, _slot(10), "Otra reunión")

        # Another employee can take the same slot
        await s.reservas.crear_reserva(maria.id, _slot(10), "Formación")

        tabla = await s.disponibilidad.tabla_del_dia(DIA)
        assert not tabla.get_disponibilidad(juan.id, _slot(10)).disponible
        assert tabla.get_disponibilidad(juan.id, _slot(11)).disponible

        libres = await s.disponibilidad.slots_libres(juan.id, DIA)
        assert _slot(10) not in libres
        assert len(libres) == 8

        confirmada = await s.reservas.confirmar_reserva(reserva.id)
        assert confirmada.estado == EstadoReserva.CONFIRMADA

        cancelada = await s.reservas.cancelar_reserva(reserva.id)
        assert cancelada.estado == EstadoReserva.CANCELADA
        assert not cancelada.esta_activa()
        assert (await s.reservas.obtener_reserva(reserva.id)).estado == EstadoReserva.CANCELADA
        assert _slot(10) in await s.disponibilidad.slots_libres(juan.id, DIA)

        nueva = await s.reservas.crear_reserva(juan.id, _slot(10), "Reunión reprogramada")
        return nueva, await s.reservas.listar_reservas(), await s.reservas.listar_reservas_empleado(juan.id)

    nueva, todas, de_juan = asyncio.run(scenario())

    assert nueva.esta_activa()
    assert len(todas) == 3
    assert [r.id for r in de_juan] == [nueva.id]


class TestReservaService:
    """Tests for ReservaService rules."""

    def test_unknown_employee(self):
        async def scenario():
            s = Servicios()
            await s.reservas.crear_reserva("no-existe", _slot(10), "Reunión")

        with pytest.raises(NoEncontradoError):
            asyncio.run(scenario())

    def test_inactive_employee(self):
        async def scenario():
            s = Servicios()
            juan = await s.empleados.crear_empleado("Juan", "juan@empresa.com")
            await s.empleados.desactivar_empleado(juan.id)
            await s.reservas.crear_reserva(juan.id, _slot(10), "Reunión")

        with pytest.raises(EmpleadoInactivo):
            asyncio.run(scenario())

    def test_domain_validation_propagates(self):
        async def scenario(hour, descripcion):
            s = Servicios()
            juan = await s.empleados.crear_empleado("Juan", "juan@empresa.com")
            await s.reservas.crear_reserva(juan.id, _slot(hour), descripcion)

        with pytest.raises(SlotFueraDeHorarioLaboral):
            asyncio.run(scenario(19, "Reunión"))
        with pytest.raises(DescripcionVacia):
            asyncio.run(scenario(10, " "))

    def test_failed_booking_stores_nothing(self):
        async def scenario():
            s = Servicios()
            juan = await s.empleados.crear_empleado("Juan", "juan@empresa.com")
            with pytest.raises(DescripcionVacia):
                await s.reservas.crear_reserva(juan.id, _slot(10), "")
            return await s.reservas.listar_reservas()

        assert asyncio.run(scenario()) == []

    def test_confirmar(self):
        async def scenario():
            s = Servicios()
            juan = await s.empleados.crear_empleado("Juan", "juan@empresa.com")
            reserva = await s.reservas.crear_reserva(juan.id, _slot(10), "Reunión")
            await s.reservas.confirmar_reserva(reserva.id)
            return await s.reservas.obtener_reserva(reserva.id)

        assert asyncio.run(scenario()).estado == EstadoReserva.CONFIRMADA

    def test_confirmar_unknown(self):
        with pytest.raises(NoEncontradoError):
            asyncio.run(Servicios().reservas.confirmar_reserva("nope"))

    def test_reconfirming_cancelled_reservation_after_rebooking_conflicts(self):
        async def scenario():
            s = Servicios()
            juan = await s.empleados.crear_empleado("Juan", "juan@empresa.com")
            vieja = await s.reservas.crear_reserva(juan.id, _slot(10), "Reunión")
            await s.reservas.cancelar_reserva(vieja.id)
            await s.reservas.crear_reserva(juan.id, _slot(10), "Reunión nueva")
            await s.reservas.confirmar_reserva(vieja.id)

        with pytest.raises(ConflictoError):
            asyncio.run(scenario())

    def test_listar_reservas_slot(self):
        async def scenario():
            s = Servicios()
            juan = await s.empleados.crear_empleado("Juan", "juan@empresa.com")
            maria = await s.empleados.crear_empleado("María", "maria@empresa.com")
            await s.reservas.crear_reserva(juan.id, _slot(10), "A")
            r = await s.reservas.crear_reserva(maria.id, _slot(10), "B")
            await s.reservas.crear_reserva(maria.id, _slot(11), "C")
            await s.reservas.cancelar_reserva(r.id)
            return await s.reservas.listar_reservas_slot(_slot(10))

        assert [r.descripcion for r in asyncio.run(scenario())] == ["A"]

    def test_concurrent_bookings_for_same_slot(self):
        """Test that only one of several simultaneous bookings succeeds."""
        async def scenario():
            s = Servicios()
            juan = await s.empleados.crear_empleado("Juan", "juan@empresa.com")
            results = await asyncio.gather(
                *(s.reservas.crear_reserva(juan.id, _slot(10), f"Reunión {i}") for i in range(5)),
                return_exceptions=True,
            )
            return results

        results = asyncio.run(scenario())

        assert sum(1 for r in results if isinstance(r, ConflictoError)) == 4
        assert sum(1 for r in results if not isinstance(r, Exception)) == 1


class TestEmpleadoAndSalaServices:
    """Tests for employee and room management."""

    def test_empleado_lifecycle(self):
        async def scenario():
            s = Servicios()
            juan = await s.empleados.crear_empleado("Juan", "juan@empresa.com")
            otro = await s.empleados.crear_empleado("Juan", "juan@empresa.com")
            desactivado = await s.empleados.desactivar_empleado(juan.id)
            activado = await s.empleados.activar_empleado(juan.id)
            return juan, otro, desactivado, activado, await s.empleados.listar_empleados()

        juan, otro, desactivado, activado, todos = asyncio.run(scenario())

        assert juan.activo
        assert juan.id != otro.id
        assert not desactivado.activo
        assert activado.activo
        assert len(todos) == 2

    def test_empleado_name_is_trimmed_and_required(self):
        async def scenario():
            s = Servicios()
            juan = await s.empleados.crear_empleado("  Juan  ", " juan@empresa.com ")
            with pytest.raises(ValidacionError, match="nombre no puede estar vacío"):
                await s.empleados.crear_empleado("   ", "nadie@empresa.com")
            return juan, await s.empleados.listar_empleados()

        juan, todos = asyncio.run(scenario())

        assert juan.nombre == "Juan"
        assert juan.email == "juan@empresa.com"
        assert [e.nombre for e in todos] == ["Juan"]

    def test_empleado_unknown(self):
        s = Servicios()

        assert asyncio.run(s.empleados.obtener_empleado("nope")) is None
        with pytest.raises(NoEncontradoError):
            asyncio.run(s.empleados.activar_empleado("nope"))

    def test_sala_lifecycle(self):
        async def scenario():
            s = Servicios()
            sala = await s.salas.crear_sala("Sala Norte", 8)
            await s.salas.desactivar_sala(sala.id)
            return await s.salas.obtener_sala(sala.id), await s.salas.listar_salas()

        sala, todas = asyncio.run(scenario())

        assert not sala.activa
        assert len(todas) == 1

    def test_sala_invalid(self):
        with pytest.raises(SalaInvalida):
            asyncio.run(Servicios().salas.crear_sala("Sala Norte", 0))

    def test_sala_unknown(self):
        with pytest.raises(NoEncontradoError):
            asyncio.run(Servicios().salas.desactivar_sala("nope"))


class TestConsultaDisponibilidadService:
    """Tests for the day-level availability queries."""

    def test_queries(self):
        async def scenario():
            s = Servicios()
            juan = await s.empleados.crear_empleado("Juan", "juan@empresa.com")
            maria = await s.empleados.crear_empleado("María", "maria@empresa.com")
            await s.reservas.crear_reserva(juan.id, _slot(9), "A")
            await s.reservas.crear_reserva(maria.id, _slot(9), "B")
            await s.reservas.crear_reserva(maria.id, _slot(15), "C")
            return (
                await s.disponibilidad.slots_comunes(DIA),
                await s.disponibilidad.ocupacion(DIA),
                await s.disponibilidad.ranking(),
            )

        comunes, ocupacion, ranking = asyncio.run(scenario())

        assert [s.start.hour for s in comunes] == [10, 11, 12, 13, 14, 16, 17]
        assert len(ocupacion) == 9
        assert ocupacion[_slot(9)] == 2
        assert ocupacion[_slot(15)] == 1
        assert ocupacion[_slot(12)] == 0
        assert ranking == [("María", 2), ("Juan", 1)]
