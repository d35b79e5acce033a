"""
Server-rendered web interface.

Pages are Jinja2 templates; form posts call the same application services
as the REST API and answer with a 303 redirect. Failures redirect back
with an ``error`` query parameter that the target page displays.
"""

from pathlib import Path
from typing import Annotated, Optional
from urllib.parse import urlencode

import pendulum
from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from ..api.dependencies import Servicios, get_servicios
from ..api.routes import parse_fecha
from ..domain.exceptions import ReservasError, ValidacionError
from ..domain.models import Slot


router = APIRouter(include_in_schema=False)

templates_dir = Path(__file__).resolve().parent / "templates"
templates = Jinja2Templates(directory=str(templates_dir))

ServiciosDep = Annotated[Servicios, Depends(get_servicios)]


def _redirect(url: str, error: Optional[str] = None) -> RedirectResponse:
    if error:
        url = f"{url}?{urlencode({'error': error})}"
    return RedirectResponse(url=url, status_code=303)


def _formato_slot(slot: Slot) -> dict:
    return {
        "fecha": slot.start.format("YYYY-MM-DD"),
        "horario": f"{slot.start.format('HH:mm')}-{slot.end().format('HH:mm')}",
    }


@router.get("/", response_class=HTMLResponse)
async def index(request: Request):
    return templates.TemplateResponse(request, "index.html", {})


# ============= Empleados =============

@router.get("/empleados", response_class=HTMLResponse)
async def listar_empleados_page(request: Request, servicios: ServiciosDep, error: str = ""):
    empleados = await servicios.empleados.listar_empleados()
    return templates.TemplateResponse(
        request, "empleados.html", {"empleados": empleados, "error": error}
    )


@router.get("/empleados/nuevo", response_class=HTMLResponse)
async def nuevo_empleado_form(request: Request, error: str = ""):
    return templates.TemplateResponse(request, "empleado_form.html", {"error": error})


@router.post("/empleados/crear")
async def crear_empleado_submit(
    servicios: ServiciosDep,
    nombre: Annotated[str, Form()],
    email: Annotated[str, Form()],
):
    try:
        await servicios.empleados.crear_empleado(nombre, email)
    except ReservasError as e:
        return _redirect("/empleados/nuevo", str(e))
    return _redirect("/empleados")


@router.post("/empleados/{id}/activar")
async def activar_empleado(id: str, servicios: ServiciosDep):
    try:
        await servicios.empleados.activar_empleado(id)
    except ReservasError as e:
        return _redirect("/empleados", str(e))
    return _redirect("/empleados")


@router.post("/empleados/{id}/desactivar")
async def desactivar_empleado(id: str, servicios: ServiciosDep):
    try:
        await servicios.empleados.desactivar_empleado(id)
    except ReservasError as e:
        return _redirect("/empleados", str(e))
    return _redirect("/empleados")


# ============= Reservas =============

@router.get("/reservas", response_class=HTMLResponse)
async def listar_reservas_page(request: Request, servicios: ServiciosDep, error: str = ""):
    reservas = await servicios.reservas.listar_reservas()
    nombres = {e.id: e.nombre for e in await servicios.empleados.listar_empleados()}

    filas = [
        {
            "id": r.id,
            "empleado": nombres.get(r.empleado_id, r.empleado_id),
            "descripcion": r.descripcion,
            "estado": r.estado.value,
            "activa": r.esta_activa(),
            **_formato_slot(r.slot),
        }
        for r in sorted(reservas, key=lambda r: r.slot)
    ]
    return templates.TemplateResponse(
        request, "reservas.html", {"reservas": filas, "error": error}
    )


@router.get("/reservas/nueva", response_class=HTMLResponse)
async def nueva_reserva_form(request: Request, servicios: ServiciosDep, error: str = ""):
    empleados = [e for e in await servicios.empleados.listar_empleados() if e.activo]
    manana = pendulum.now("UTC").add(days=1).format("YYYY-MM-DD")
    return templates.TemplateResponse(
        request,
        "reserva_form.html",
        {"empleados": empleados, "fecha": manana, "horas": list(range(9, 18)), "error": error},
    )


@router.post("/reservas/crear")
async def crear_reserva_submit(
    servicios: ServiciosDep,
    empleado_id: Annotated[str, Form()],
    fecha: Annotated[str, Form()],
    hora: Annotated[str, Form()],
    descripcion: Annotated[str, Form()] = "",
):
    try:
        dia = parse_fecha(fecha)
        try:
            hour = int(hora)
        except ValueError:
            raise ValidacionError(f"Hora inválida: {hora}") from None
        slot = Slot.from_date_and_hour(dia.year, dia.month, dia.day, hour)
        if slot is None:
            raise ValidacionError(f"Hora inválida: {hora}")
        await servicios.reservas.crear_reserva(empleado_id, slot, descripcion)
    except ReservasError as e:
        return _redirect("/reservas/nueva", str(e))
    return _redirect("/reservas")


@router.post("/reservas/{id}/confirmar")
async def confirmar_reserva(id: str, servicios: ServiciosDep):
    try:
        await servicios.reservas.confirmar_reserva(id)
    except ReservasError as e:
        return _redirect("/reservas", str(e))
    return _redirect("/reservas")


@router.post("/reservas/{id}/cancelar")
async def cancelar_reserva(id: str, servicios: ServiciosDep):
    try:
        await servicios.reservas.cancelar_reserva(id)
    except ReservasError as e:
        return _redirect("/reservas", str(e))
    return _redirect("/reservas")


# ============= Disponibilidad =============

@router.get("/disponibilidad", response_class=HTMLResponse)
async def disponibilidad_page(request: Request, servicios: ServiciosDep, fecha: str = ""):
    error = ""
    fecha = fecha.strip() or pendulum.now("UTC").format("YYYY-MM-DD")
    try:
        dia = parse_fecha(fecha)
    except ValidacionError as e:
        error = str(e)
        dia = pendulum.now("UTC").date()
        fecha = dia.isoformat()

    tabla = await servicios.disponibilidad.tabla_del_dia(dia)
    filas = [
        {
            "nombre": empleado.nombre,
            "celdas": [tabla.get_disponibilidad(empleado.id, slot) for slot in tabla.slots],
        }
        for empleado in tabla.empleados
    ]
    return templates.TemplateResponse(
        request,
        "disponibilidad.html",
        {
            "fecha": fecha,
            "horas": [slot.start.hour for slot in tabla.slots],
            "filas": filas,
            "error": error,
        },
    )


# ============= Salas =============

@router.get("/salas", response_class=HTMLResponse)
async def listar_salas_page(request: Request, servicios: ServiciosDep, error: str = ""):
    salas = await servicios.salas.listar_salas()
    return templates.TemplateResponse(request, "salas.html", {"salas": salas, "error": error})


@router.get("/salas/nueva", response_class=HTMLResponse)
async def nueva_sala_form(request: Request, error: str = ""):
    return templates.TemplateResponse(request, "sala_form.html", {"error": error})


@router.post("/salas/crear")
async def crear_sala_submit(
    servicios: ServiciosDep,
    nombre: Annotated[str, Form()],
    capacidad: Annotated[int, Form()],
):
    try:
        await servicios.salas.crear_sala(nombre, capacidad)
    except ReservasError as e:
        return _redirect("/salas/nueva", str(e))
    return _redirect("/salas")


@router.post("/salas/{id}/activar")
async def activar_sala(id: str, servicios: ServiciosDep):
    try:
        await servicios.salas.activar_sala(id)
    except ReservasError as e:
        return _redirect("/salas", str(e))
    return _redirect("/salas")


@router.post("/salas/{id}/desactivar")
async def desactivar_sala(id: str, servicios: ServiciosDep):
    try:
        await servicios.salas.desactivar_sala(id)
    except ReservasError as e:
        return _redirect("/salas", str(e))
    return _redirect("/salas")
