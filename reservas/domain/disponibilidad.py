"""
Availability queries over employees, slots and reservations.

Pure domain logic: every function works on the sequences it is given,
never touches storage and has no side effects.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .models import Empleado, Reserva, Slot


@dataclass(frozen=True)
class DisponibilidadSlot:
    """Availability of one employee in one slot."""
    empleado_id: str
    empleado_nombre: str
    slot: Slot
    disponible: bool
    reserva_id: Optional[str] = None
    descripcion_reserva: Optional[str] = None


@dataclass
class TablaDisponibilidad:
    """
    Availability grid: active employees × slots.
    """
    slots: List[Slot]
    empleados: List[Empleado]
    disponibilidad: List[DisponibilidadSlot]

    def get_disponibilidad(self, empleado_id: str, slot: Slot) -> Optional[DisponibilidadSlot]:
        """Find the cell for an employee and slot, if present."""
        for celda in self.disponibilidad:
            if celda.empleado_id == empleado_id and celda.slot == slot:
                return celda
        return None

    def formato_texto(self) -> str:
        """
        Render the grid as fixed-width text.

        Example:
        Empleado             |      10      |      11
        -------------------------------------------------
        Juan                 |      ✗       |      ✓
        """
        lines: List[str] = []

        header = f"{'Empleado':<20}"
        for slot in self.slots:
            header += f" | {slot.start.hour:^12}"
        lines.append(header)
        lines.append("-" * (20 + len(self.slots) * 15))

        for empleado in self.empleados:
            row = f"{empleado.nombre:<20}"
            for slot in self.slots:
                celda = self.get_disponibilidad(empleado.id, slot)
                if celda is None:
                    simbolo = "?"
                elif celda.disponible:
                    simbolo = "✓"
                else:
                    simbolo = "✗"
                row += f" | {simbolo:^12}"
            lines.append(row)

        return "\n".join(lines) + "\n"


class DisponibilidadService:
    """
    Stateless domain service crossing employees, slots and reservations.

    Business rule: an employee holds at most one active reservation per
    slot, so "available" means "no active reservation for that pair".
    """

    @staticmethod
    def empleado_disponible_en_slot(
        empleado_id: str,
        slot: Slot,
        reservas: Sequence[Reserva]
    ) -> bool:
        """Check that no active reservation exists for the employee and slot."""
        return not any(
            r.empleado_id == empleado_id and r.slot == slot and r.esta_activa()
            for r in reservas
        )

    @staticmethod
    def reservas_de_empleado(empleado_id: str, reservas: Sequence[Reserva]) -> List[Reserva]:
        """Return the employee's active reservations in input order."""
        return [r for r in reservas if r.empleado_id == empleado_id and r.esta_activa()]

    @staticmethod
    def generar_tabla_disponibilidad(
        empleados: Sequence[Empleado],
        slots: Sequence[Slot],
        reservas: Sequence[Reserva]
    ) -> TablaDisponibilidad:
        """
        Build the availability grid for every active employee and slot.

        Rows follow employee order, cells within a row follow slot order.
        If several active reservations share a pair, the first one wins.
        """
        ocupadas: Dict[Tuple[str, Slot], Reserva] = {}
        for reserva in reservas:
            if reserva.esta_activa():
                ocupadas.setdefault((reserva.empleado_id, reserva.slot), reserva)

        activos = [e for e in empleados if e.activo]
        disponibilidad: List[DisponibilidadSlot] = []

        for empleado in activos:
            for slot in slots:
                reserva = ocupadas.get((empleado.id, slot))
                disponibilidad.append(
                    DisponibilidadSlot(
                        empleado_id=empleado.id,
                        empleado_nombre=empleado.nombre,
                        slot=slot,
                        disponible=reserva is None,
                        reserva_id=reserva.id if reserva else None,
                        descripcion_reserva=reserva.descripcion if reserva else None,
                    )
                )

        return TablaDisponibilidad(
            slots=list(slots),
            empleados=activos,
            disponibilidad=disponibilidad,
        )

    @staticmethod
    def slots_libres_empleado(
        empleado_id: str,
        slots: Sequence[Slot],
        reservas: Sequence[Reserva]
    ) -> List[Slot]:
        """Return the slots where the employee is free, keeping input order."""
        return [
            slot for slot in slots
            if DisponibilidadService.empleado_disponible_en_slot(empleado_id, slot, reservas)
        ]

    @staticmethod
    def slots_con_todos_disponibles(
        empleados: Sequence[Empleado],
        slots: Sequence[Slot],
        reservas: Sequence[Reserva]
    ) -> List[Slot]:
        """
        Return the slots where every active employee is free.

        With no active employees every slot qualifies.
        """
        activos = [e for e in empleados if e.activo]
        return [
            slot for slot in slots
            if all(
                DisponibilidadService.empleado_disponible_en_slot(e.id, slot, reservas)
                for e in activos
            )
        ]

    @staticmethod
    def resumen_ocupacion(slots: Sequence[Slot], reservas: Sequence[Reserva]) -> Dict[Slot, int]:
        """Count active reservations per slot, with an entry for every input slot."""
        ocupacion: Dict[Slot, int] = {}
        for slot in slots:
            ocupacion[slot] = sum(1 for r in reservas if r.slot == slot and r.esta_activa())
        return ocupacion

    @staticmethod
    def empleados_mas_ocupados(
        empleados: Sequence[Empleado],
        reservas: Sequence[Reserva]
    ) -> List[Tuple[str, int]]:
        """
        Rank active employees by number of active reservations.

        Returns (name, count) pairs, busiest first; ties keep input order.
        """
        conteo: Dict[str, int] = {}
        for reserva in reservas:
            if reserva.esta_activa():
                conteo[reserva.empleado_id] = conteo.get(reserva.empleado_id, 0) + 1

        resultado = [(e.nombre, conteo.get(e.id, 0)) for e in empleados if e.activo]
        # sorted() is stable, so equal counts keep their relative order
        return sorted(resultado, key=lambda par: par[1], reverse=True)
