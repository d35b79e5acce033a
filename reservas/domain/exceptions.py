"""
Domain-specific exception hierarchy for the booking service.
"""


class ReservasError(Exception):
    """Base class for all application-level errors."""


class ValidacionError(ReservasError):
    """Raised when an entity would violate a business rule."""


class SlotEnElPasado(ValidacionError):
    """Raised when a reservation targets a slot that has already started."""


class SlotFueraDeHorarioLaboral(ValidacionError):
    """Raised when a reservation targets a slot outside 09:00-18:00."""


class DescripcionVacia(ValidacionError):
    """Raised when a reservation has no description text."""


class SalaInvalida(ValidacionError):
    """Raised when a room has an empty name or no capacity."""


class EmpleadoInactivo(ValidacionError):
    """Raised when booking on behalf of a deactivated employee."""


class NoEncontradoError(ReservasError):
    """Raised when an operation targets an unknown id."""


class ConflictoError(ReservasError):
    """Raised when an employee already holds an active reservation for a slot."""


class ApiClientError(ReservasError):
    """Raised when the REST API cannot be reached or answers with an error."""
