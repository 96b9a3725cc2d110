"""CLI entrypoint for spherical-overage."""

from __future__ import annotations

import logging
import math

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from spherical_overage.airports import AIRPORTS, UnknownAirportError
from spherical_overage.config import EARTH_RADII, DEFAULT_UNIT, LOG_LEVEL, LOG_LEVELS, earth_radius
from spherical_overage.geo import distance as great_circle
from spherical_overage.report import (
    PointParseError,
    TriangleComparison,
    compare_triangle,
    distance_matrix,
    resolve_point,
    sanity_checks,
)
from spherical_overage.triangles import InvalidTriangleError, TriangleAngles, plane_angles, spherical_angles

console = Console()


def _fmt(x: float, digits: int = 4) -> str:
    if math.isnan(x):
        return "[red]NaN[/]"
    if math.isinf(x):
        return "[red]inf[/]"
    return f"{x:.{digits}f}"


def _angles_row(label: str, angles: TriangleAngles) -> list[str]:
    return [label, *(_fmt(x) for x in angles.angles()), _fmt(angles.total)]


def _comparison_table(cmp: TriangleComparison, unit: str) -> Table:
    p, q, r = cmp.vertices
    table = Table(title=f"Triangle {p} / {q} / {r}")
    table.add_column("Model", style="bold")
    for v in cmp.vertices:
        table.add_column(f"∠{v}", justify="right")
    table.add_column("Sum", justify="right")

    table.add_row(*_angles_row("sphere", cmp.spherical))
    table.add_row(*_angles_row("plane", cmp.plane))
    table.caption = (
        f"sides ({unit}): {q}-{r} {cmp.sides[0]:.1f}, {p}-{r} {cmp.sides[1]:.1f}, "
        f"{p}-{q} {cmp.sides[2]:.1f}   overage: {_fmt(cmp.overage)}°"
    )
    return table


@click.group()
@click.option(
    "--unit",
    default=DEFAULT_UNIT,
    type=click.Choice(list(EARTH_RADII), case_sensitive=False),
    help="Distance unit.",
)
@click.option(
    "--log-level",
    default=LOG_LEVEL,
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Logging level.",
)
@click.pass_context
def cli(ctx: click.Context, unit: str, log_level: str):
    """Spherical vs. flat earth triangle angles."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    ctx.obj = {"unit": unit, "radius": earth_radius(unit)}


# Negative coordinates and sides would otherwise parse as short options.
POSITIONAL_NEGATIVES = {"ignore_unknown_options": True}


@cli.command(context_settings=POSITIONAL_NEGATIVES)
@click.argument("p")
@click.argument("q")
@click.pass_obj
def distance(obj: dict, p: str, q: str):
    """Great-circle distance between two points (airport code or LAT,LON)."""
    try:
        (lp, cp), (lq, cq) = resolve_point(p), resolve_point(q)
    except (UnknownAirportError, PointParseError) as exc:
        raise click.ClickException(str(exc))
    d = great_circle(cp, cq, obj["radius"])
    console.print(f"{lp} → {lq}: [bold]{_fmt(d, 1)}[/] {obj['unit']}")


@cli.command(context_settings=POSITIONAL_NEGATIVES)
@click.argument("sides", nargs=3, type=float)
@click.option("--plane", "plane_only", is_flag=True, help="Only the flat triangle.")
@click.option("--spherical", "spherical_only", is_flag=True, help="Only the spherical triangle.")
@click.option("--strict", is_flag=True, help="Reject invalid triangles instead of returning NaN.")
@click.pass_obj
def angles(obj: dict, sides: tuple[float, float, float], plane_only: bool, spherical_only: bool, strict: bool):
    """Angles opposite sides A B C (in the current unit)."""
    if plane_only and spherical_only:
        raise click.UsageError("--plane and --spherical are mutually exclusive.")

    A, B, C = sides
    table = Table(title=f"Angles for sides {A:g}, {B:g}, {C:g} ({obj['unit']})")
    table.add_column("Model", style="bold")
    for name in ("∠a", "∠b", "∠c", "Sum"):
        table.add_column(name, justify="right")

    try:
        if not plane_only:
            table.add_row(*_angles_row("sphere", spherical_angles(A, B, C, radius=obj["radius"], strict=strict)))
        if not spherical_only:
            table.add_row(*_angles_row("plane", plane_angles(A, B, C, strict=strict)))
    except InvalidTriangleError as exc:
        raise click.ClickException(str(exc))

    console.print(table)


@cli.command(context_settings=POSITIONAL_NEGATIVES)
@click.argument("p")
@click.argument("q")
@click.argument("r")
@click.option("--strict", is_flag=True, help="Reject invalid triangles instead of returning NaN.")
@click.pass_obj
def triangle(obj: dict, p: str, q: str, r: str, strict: bool):
    """Compare sphere and plane angles for the triangle P Q R."""
    try:
        cmp = compare_triangle(p, q, r, radius=obj["radius"], strict=strict)
    except (UnknownAirportError, PointParseError, InvalidTriangleError) as exc:
        raise click.ClickException(str(exc))
    console.print(_comparison_table(cmp, obj["unit"]))


@cli.command()
@click.argument("codes", nargs=-1)
@click.pass_obj
def matrix(obj: dict, codes: tuple[str, ...]):
    """Pairwise distances between airports."""
    try:
        pairs = distance_matrix(list(codes) or None, radius=obj["radius"])
    except UnknownAirportError as exc:
        raise click.ClickException(str(exc))

    table = Table(title=f"Great-circle distances ({obj['unit']})")
    table.add_column("From", style="bold")
    table.add_column("To", style="bold")
    table.add_column("Distance", justify="right")
    for (a, b), d in pairs.items():
        table.add_row(a, b, _fmt(d, 1))
    console.print(table)


@cli.command()
def airports():
    """List the known airport codes."""
    table = Table(title="Airports")
    table.add_column("Code", style="bold")
    table.add_column("Name")
    table.add_column("Lat", justify="right")
    table.add_column("Lon", justify="right")
    for a in AIRPORTS.values():
        table.add_row(a.code, a.name, f"{a.lat_deg:.4f}", f"{a.lon_deg:.4f}")
    console.print(table)


@cli.command()
@click.pass_obj
def demo(obj: dict):
    """Run the built-in sanity checks and airport triangles."""
    table = Table(title=f"Sanity checks (R = {obj['radius']:g} {obj['unit']})")
    table.add_column("Check", style="bold")
    for name in ("∠a", "∠b", "∠c", "Sum"):
        table.add_column(name, justify="right")
    table.add_column("OK", justify="center")

    for check in sanity_checks(obj["radius"]):
        ok = {True: "[green]✓[/]", False: "[red]✗[/]", None: ""}[check.passed]
        table.add_row(*_angles_row(check.label, check.angles), ok)
    console.print(table)

    for vertices in (("HND", "SFO", "SYD"), ("JFK", "SFO", "LHR")):
        cmp = compare_triangle(*vertices, radius=obj["radius"])
        console.print(_comparison_table(cmp, obj["unit"]))

    console.print(Panel(
        "Sphere sums exceed 180° by the spherical excess; the plane sums stay at 180°.",
        title="Summary",
        border_style="blue",
    ))
