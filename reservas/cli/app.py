"""
Main CLI application using Typer.

Every command except ``serve`` and ``version`` talks to a running server
through the REST API.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from rich.table import Table

from ..adapters.api_client import ApiClient
from ..config import AppConfig
from ..domain.exceptions import ReservasError
from ..domain.models import Slot

app = typer.Typer(
    name="reservas",
    help="Cliente del sistema de reservas de franjas horarias",
    add_completion=False,
    no_args_is_help=True,
)
empleado_app = typer.Typer(help="Gestión de empleados", no_args_is_help=True)
reserva_app = typer.Typer(help="Gestión de reservas", no_args_is_help=True)
sala_app = typer.Typer(help="Gestión de salas", no_args_is_help=True)
app.add_typer(empleado_app, name="empleado")
app.add_typer(reserva_app, name="reserva")
app.add_typer(sala_app, name="sala")

console = Console()


@dataclass
class CliState:
    config: AppConfig
    api_url: str


def _state(ctx: typer.Context) -> CliState:
    return ctx.find_root().obj


def _client(ctx: typer.Context) -> ApiClient:
    state = _state(ctx)
    return ApiClient(state.api_url, timeout=state.config.client.timeout_seconds)


def _fail(error: object) -> None:
    console.print(f"[bold red]✗ Error:[/bold red] {error}")
    raise typer.Exit(1)


def _parse_fecha(fecha: str) -> pendulum.Date:
    try:
        return pendulum.from_format(fecha.strip(), "YYYY-MM-DD", tz="UTC").date()
    except ValueError as e:
        raise typer.BadParameter("Formato de fecha inválido. Use YYYY-MM-DD") from e


def _horario(inicio, fin) -> str:
    return f"{inicio.strftime('%H:%M')}-{fin.strftime('%H:%M')}"


@app.callback()
def main(
    ctx: typer.Context,
    url: Annotated[Optional[str], typer.Option("--url", "-u", help="URL base de la API, p. ej. http://localhost:3000/api")] = None,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")] = None,
):
    """
    Sistema de reservas: empleados, reservas, salas y disponibilidad.
    """
    try:
        config = AppConfig.load(config_file)
    except (FileNotFoundError, ValueError) as e:
        _fail(e)

    ctx.obj = CliState(config=config, api_url=(url or config.client.api_url).rstrip("/"))


# ============= Empleados =============

@empleado_app.command("crear")
def empleado_crear(
    ctx: typer.Context,
    nombre: Annotated[str, typer.Option("--nombre", "-n", help="Nombre del empleado")],
    email: Annotated[str, typer.Option("--email", "-e", help="Email del empleado")],
):
    """Crear un nuevo empleado."""
    try:
        empleado = _client(ctx).crear_empleado(nombre, email)
    except ReservasError as e:
        _fail(e)

    console.print("[green]✓ Empleado creado exitosamente[/green]")
    console.print(f"  ID: {empleado.id}")
    console.print(f"  Nombre: {empleado.nombre}")
    console.print(f"  Email: {empleado.email}")


@empleado_app.command("listar")
def empleado_listar(ctx: typer.Context):
    """Listar todos los empleados."""
    try:
        empleados = _client(ctx).listar_empleados()
    except ReservasError as e:
        _fail(e)

    if not empleados:
        console.print("[yellow]No hay empleados registrados.[/yellow]")
        return

    table = Table(title="Empleados", show_header=True, header_style="bold cyan")
    table.add_column("ID", style="dim")
    table.add_column("Nombre", style="bold yellow")
    table.add_column("Email")
    table.add_column("Estado")
    for e in empleados:
        table.add_row(e.id, e.nombre, e.email, "[green]Activo[/green]" if e.activo else "[red]Inactivo[/red]")

    console.print()
    console.print(table)
    console.print()


@empleado_app.command("obtener")
def empleado_obtener(ctx: typer.Context, id: Annotated[str, typer.Argument(help="ID del empleado")]):
    """Mostrar un empleado."""
    try:
        empleado = _client(ctx).obtener_empleado(id)
    except ReservasError as e:
        _fail(e)

    console.print(f"[bold]{empleado.nombre}[/bold] <{empleado.email}>")
    console.print(f"  ID: {empleado.id}")
    console.print(f"  Estado: {'Activo' if empleado.activo else 'Inactivo'}")


@empleado_app.command("activar")
def empleado_activar(ctx: typer.Context, id: Annotated[str, typer.Argument(help="ID del empleado")]):
    """Activar un empleado."""
    try:
        empleado = _client(ctx).activar_empleado(id)
    except ReservasError as e:
        _fail(e)
    console.print(f"[green]✓ Empleado {empleado.nombre} activado[/green]")


@empleado_app.command("desactivar")
def empleado_desactivar(ctx: typer.Context, id: Annotated[str, typer.Argument(help="ID del empleado")]):
    """Desactivar un empleado."""
    try:
        empleado = _client(ctx).desactivar_empleado(id)
    except ReservasError as e:
        _fail(e)
    console.print(f"[green]✓ Empleado {empleado.nombre} desactivado[/green]")


# ============= Reservas =============

def _tabla_reservas(titulo: str, reservas) -> Table:
    table = Table(title=titulo, show_header=True, header_style="bold cyan")
    table.add_column("ID", style="dim")
    table.add_column("Empleado", style="dim")
    table.add_column("Fecha")
    table.add_column("Horario")
    table.add_column("Descripción", style="bold")
    table.add_column("Estado")
    for r in reservas:
        table.add_row(
            r.id,
            r.empleado_id,
            r.slot_inicio.strftime("%Y-%m-%d"),
            _horario(r.slot_inicio, r.slot_fin),
            r.descripcion,
            r.estado,
        )
    return table


@reserva_app.command("crear")
def reserva_crear(
    ctx: typer.Context,
    empleado_id: Annotated[str, typer.Option("--empleado-id", "-e", help="ID del empleado")],
    fecha: Annotated[str, typer.Option("--fecha", "-f", help="Fecha (YYYY-MM-DD)")],
    hora: Annotated[int, typer.Option("--hora", help="Hora de inicio (9-17)")],
    descripcion: Annotated[str, typer.Option("--descripcion", "-d", help="Descripción de la reserva")],
):
    """Crear una reserva de una hora."""
    dia = _parse_fecha(fecha)
    slot = Slot.from_date_and_hour(dia.year, dia.month, dia.day, hora)
    if slot is None:
        _fail(f"Hora inválida: {hora}")

    try:
        reserva = _client(ctx).crear_reserva(empleado_id, slot.start, descripcion)
    except ReservasError as e:
        _fail(e)

    console.print("[green]✓ Reserva creada exitosamente[/green]")
    console.print(f"  ID: {reserva.id}")
    console.print(f"  Slot: {reserva.slot_inicio.strftime('%Y-%m-%d')} {_horario(reserva.slot_inicio, reserva.slot_fin)}")
    console.print(f"  Descripción: {reserva.descripcion}")
    console.print(f"  Estado: {reserva.estado}")


@reserva_app.command("listar")
def reserva_listar(ctx: typer.Context):
    """Listar todas las reservas."""
    try:
        reservas = _client(ctx).listar_reservas()
    except ReservasError as e:
        _fail(e)

    if not reservas:
        console.print("[yellow]No hay reservas registradas.[/yellow]")
        return
    console.print(_tabla_reservas("Reservas", reservas))


@reserva_app.command("listar-empleado")
def reserva_listar_empleado(
    ctx: typer.Context,
    empleado_id: Annotated[str, typer.Argument(help="ID del empleado")],
):
    """Listar las reservas activas de un empleado."""
    try:
        reservas = _client(ctx).listar_reservas_empleado(empleado_id)
    except ReservasError as e:
        _fail(e)

    if not reservas:
        console.print("[yellow]El empleado no tiene reservas activas.[/yellow]")
        return
    console.print(_tabla_reservas("Reservas del empleado", reservas))


@reserva_app.command("confirmar")
def reserva_confirmar(ctx: typer.Context, id: Annotated[str, typer.Argument(help="ID de la reserva")]):
    """Confirmar una reserva."""
    try:
        reserva = _client(ctx).confirmar_reserva(id)
    except ReservasError as e:
        _fail(e)
    console.print(f"[green]✓ Reserva {reserva.id} confirmada[/green]")


@reserva_app.command("cancelar")
def reserva_cancelar(ctx: typer.Context, id: Annotated[str, typer.Argument(help="ID de la reserva")]):
    """Cancelar una reserva."""
    try:
        reserva = _client(ctx).cancelar_reserva(id)
    except ReservasError as e:
        _fail(e)
    console.print(f"[green]✓ Reserva {reserva.id} cancelada[/green]")


# ============= Salas =============

@sala_app.command("crear")
def sala_crear(
    ctx: typer.Context,
    nombre: Annotated[str, typer.Option("--nombre", "-n", help="Nombre de la sala")],
    capacidad: Annotated[int, typer.Option("--capacidad", "-c", help="Capacidad de la sala")],
):
    """Crear una sala."""
    try:
        sala = _client(ctx).crear_sala(nombre, capacidad)
    except ReservasError as e:
        _fail(e)

    console.print("[green]✓ Sala creada exitosamente[/green]")
    console.print(f"  ID: {sala.id}")
    console.print(f"  Nombre: {sala.nombre}")
    console.print(f"  Capacidad: {sala.capacidad}")


@sala_app.command("listar")
def sala_listar(ctx: typer.Context):
    """Listar todas las salas."""
    try:
        salas = _client(ctx).listar_salas()
    except ReservasError as e:
        _fail(e)

    if not salas:
        console.print("[yellow]No hay salas registradas.[/yellow]")
        return

    table = Table(title="Salas", show_header=True, header_style="bold cyan")
    table.add_column("ID", style="dim")
    table.add_column("Nombre", style="bold yellow")
    table.add_column("Capacidad", justify="right")
    table.add_column("Estado")
    for s in salas:
        table.add_row(s.id, s.nombre, str(s.capacidad), "[green]Activa[/green]" if s.activa else "[red]Inactiva[/red]")
    console.print(table)


@sala_app.command("activar")
def sala_activar(ctx: typer.Context, id: Annotated[str, typer.Argument(help="ID de la sala")]):
    """Activar una sala."""
    try:
        sala = _client(ctx).activar_sala(id)
    except ReservasError as e:
        _fail(e)
    console.print(f"[green]✓ Sala {sala.nombre} activada[/green]")


@sala_app.command("desactivar")
def sala_desactivar(ctx: typer.Context, id: Annotated[str, typer.Argument(help="ID de la sala")]):
    """Desactivar una sala."""
    try:
        sala = _client(ctx).desactivar_sala(id)
    except ReservasError as e:
        _fail(e)
    console.print(f"[green]✓ Sala {sala.nombre} desactivada[/green]")


# ============= Disponibilidad =============

@app.command()
def disponibilidad(
    ctx: typer.Context,
    fecha: Annotated[str, typer.Option("--fecha", "-f", help="Fecha (YYYY-MM-DD)")],
):
    """Mostrar la disponibilidad de los empleados activos para una fecha."""
    _parse_fecha(fecha)
    try:
        tabla = _client(ctx).disponibilidad(fecha)
    except ReservasError as e:
        _fail(e)

    console.print(f"\n[bold cyan]📅 Disponibilidad para {tabla.fecha}[/bold cyan]\n")
    if not tabla.disponibilidad:
        console.print("[yellow]No hay empleados activos.[/yellow]")
        return

    por_empleado = {}
    for celda in tabla.disponibilidad:
        por_empleado.setdefault(celda.empleado_nombre, []).append(celda)

    for nombre, celdas in por_empleado.items():
        console.print(f"[bold]{nombre}[/bold]")
        for celda in celdas:
            horario = _horario(celda.slot_inicio, celda.slot_fin)
            if celda.disponible:
                console.print(f"  [green]✓[/green] {horario}")
            else:
                console.print(f"  [red]✗[/red] {horario} ({celda.descripcion_reserva or 'ocupado'})")
        console.print()


@app.command()
def ocupacion(
    ctx: typer.Context,
    fecha: Annotated[str, typer.Option("--fecha", "-f", help="Fecha (YYYY-MM-DD)")],
):
    """Número de reservas activas por slot."""
    _parse_fecha(fecha)
    try:
        items = _client(ctx).ocupacion(fecha)
    except ReservasError as e:
        _fail(e)

    table = Table(title=f"Ocupación {fecha}", show_header=True, header_style="bold cyan")
    table.add_column("Horario")
    table.add_column("Reservas activas", justify="right")
    for item in items:
        table.add_row(_horario(item.inicio, item.fin), str(item.reservas_activas))
    console.print(table)


@app.command()
def ranking(ctx: typer.Context):
    """Empleados activos ordenados por número de reservas activas."""
    try:
        entradas = _client(ctx).ranking()
    except ReservasError as e:
        _fail(e)

    if not entradas:
        console.print("[yellow]No hay empleados activos.[/yellow]")
        return

    table = Table(title="Empleados más ocupados", show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Empleado", style="bold yellow")
    table.add_column("Reservas activas", justify="right")
    for idx, entrada in enumerate(entradas, 1):
        table.add_row(str(idx), entrada.nombre, str(entrada.reservas_activas))
    console.print(table)


# ============= Servidor =============

@app.command()
def serve(
    ctx: typer.Context,
    host: Annotated[Optional[str], typer.Option("--host", help="Interfaz de escucha")] = None,
    port: Annotated[Optional[int], typer.Option("--port", "-p", help="Puerto de escucha")] = None,
):
    """
    Arrancar el servidor HTTP (API REST + interfaz web).
    """
    import uvicorn

    from ..app import create_app

    config = _state(ctx).config
    host = host or config.server.host
    port = port or config.server.port

    console.print(f"[bold cyan]🚀 Servidor en http://{host}:{port}[/bold cyan]")
    console.print(f"   Documentación: http://{host}:{port}/api/docs")
    uvicorn.run(create_app(config), host=host, port=port, log_config=None)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]reservas[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
