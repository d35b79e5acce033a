"""
Tests for domain models.
"""

from datetime import datetime

import pendulum
import pytest

from reservas.domain.exceptions import (
    DescripcionVacia,
    SalaInvalida,
    SlotEnElPasado,
    SlotFueraDeHorarioLaboral,
    ValidacionError,
)
from reservas.domain.models import Empleado, EstadoReserva, Reserva, Sala, Slot

AHORA = pendulum.datetime(2025, 11, 24, 12, tz="UTC")


def _slot(hour: int, day: int = 25) -> Slot:
    return Slot.from_date_and_hour(2025, 11, day, hour)


class TestReservaCreation:
    """Tests for the validated Reserva constructor."""

    def test_create_valid_reserva(self):
        """Test creating a reservation in a future working-hour slot."""
        reserva = Reserva.crear("r1", "e1", _slot(10), "Reunión con cliente", ahora=AHORA)

        assert reserva.id == "r1"
        assert reserva.empleado_id == "e1"
        assert reserva.slot == _slot(10)
        assert reserva.estado == EstadoReserva.PENDIENTE
        assert reserva.esta_activa()

    def test_description_is_trimmed(self):
        reserva = Reserva.crear("r1", "e1", _slot(10), "  Reunión  ", ahora=AHORA)

        assert reserva.descripcion == "Reunión"

    def test_slot_already_started_is_rejected(self):
        """Test that a slot starting at or before now is in the past."""
        with pytest.raises(SlotEnElPasado):
            Reserva.crear("r1", "e1", _slot(10), "Reunión", ahora=pendulum.datetime(2025, 11, 25, 10, tz="UTC"))

        with pytest.raises(SlotEnElPasado):
            Reserva.crear("r1", "e1", _slot(10), "Reunión", ahora=pendulum.datetime(2025, 11, 25, 10, 30, tz="UTC"))

    def test_slot_just_ahead_is_accepted(self):
        ahora = pendulum.datetime(2025, 11, 25, 9, 59, 59, tz="UTC")

        reserva = Reserva.crear("r1", "e1", _slot(10), "Reunión", ahora=ahora)

        assert reserva.slot == _slot(10)

    def test_slot_built_from_naive_datetime(self):
        """Test that a slot given a naive start can be booked."""
        slot = Slot(start=datetime(2025, 11, 25, 10, 15))

        reserva = Reserva.crear("r1", "e1", slot, "Reunión", ahora=AHORA)

        assert reserva.slot == _slot(10)

    def test_default_now_rejects_old_slots(self):
        """Test that without a pinned clock the current time is used."""
        with pytest.raises(SlotEnElPasado):
            Reserva.crear("r1", "e1", Slot.from_date_and_hour(2000, 1, 3, 10), "Reunión")

    def test_outside_working_hours_is_rejected(self):
        with pytest.raises(SlotFueraDeHorarioLaboral):
            Reserva.crear("r1", "e1", _slot(8), "Reunión", ahora=AHORA)

        with pytest.raises(SlotFueraDeHorarioLaboral):
            Reserva.crear("r1", "e1", _slot(18), "Reunión", ahora=AHORA)

    def test_empty_description_is_rejected(self):
        with pytest.raises(DescripcionVacia):
            Reserva.crear("r1", "e1", _slot(10), "", ahora=AHORA)

        with pytest.raises(DescripcionVacia):
            Reserva.crear("r1", "e1", _slot(10), "   \t ", ahora=AHORA)

    def test_checks_run_in_order(self):
        """Test that the past check wins over hours, and hours over description."""
        past_and_late = Slot.from_date_and_hour(2025, 11, 20, 20)
        with pytest.raises(SlotEnElPasado):
            Reserva.crear("r1", "e1", past_and_late, "", ahora=AHORA)

        with pytest.raises(SlotFueraDeHorarioLaboral):
            Reserva.crear("r1", "e1", _slot(20), "", ahora=AHORA)

    def test_validation_errors_share_a_base(self):
        for error in (SlotEnElPasado, SlotFueraDeHorarioLaboral, DescripcionVacia, SalaInvalida):
            assert issubclass(error, ValidacionError)


class TestReservaTransitions:
    """Tests for the reservation lifecycle."""

    def test_confirmar(self):
        reserva = Reserva.crear("r1", "e1", _slot(10), "Reunión", ahora=AHORA)

        reserva.confirmar()

        assert reserva.estado == EstadoReserva.CONFIRMADA
        assert reserva.esta_activa()

    def test_cancelar(self):
        reserva = Reserva.crear("r1", "e1", _slot(10), "Reunión", ahora=AHORA)

        reserva.cancelar()

        assert reserva.estado == EstadoReserva.CANCELADA
        assert not reserva.esta_activa()

    def test_transitions_are_unconditional(self):
        """Test that a cancelled reservation can still be confirmed."""
        reserva = Reserva.crear("r1", "e1", _slot(10), "Reunión", ahora=AHORA)
        reserva.cancelar()
        reserva.cancelar()

        reserva.confirmar()

        assert reserva.estado == EstadoReserva.CONFIRMADA
        assert reserva.esta_activa()

    def test_estado_values(self):
        assert EstadoReserva.PENDIENTE.value == "pendiente"
        assert EstadoReserva.CONFIRMADA.value == "confirmada"
        assert EstadoReserva.CANCELADA.value == "cancelada"


class TestEmpleado:
    """Tests for Empleado."""

    def test_created_active(self):
        empleado = Empleado(id="e1", nombre="Juan", email="juan@empresa.com")

        assert empleado.activo

    def test_toggle_active(self):
        empleado = Empleado(id="e1", nombre="Juan", email="juan@empresa.com")

        empleado.desactivar()
        assert not empleado.activo

        empleado.activar()
        assert empleado.activo


class TestSala:
    """Tests for Sala."""

    def test_create_valid_sala(self):
        sala = Sala(id="s1", nombre="Sala Norte", capacidad=8)

        assert sala.activa
        assert sala.capacidad == 8

    def test_empty_name_is_rejected(self):
        with pytest.raises(SalaInvalida, match="nombre"):
            Sala(id="s1", nombre="", capacidad=8)

        with pytest.raises(SalaInvalida, match="nombre"):
            Sala(id="s1", nombre="   ", capacidad=8)

    def test_zero_capacity_is_rejected(self):
        with pytest.raises(SalaInvalida, match="capacidad"):
            Sala(id="s1", nombre="Sala Norte", capacidad=0)

    def test_toggle_active(self):
        sala = Sala(id="s1", nombre="Sala Norte", capacidad=8)

        sala.desactivar()
        assert not sala.activa

        sala.activar()
        assert sala.activa
