import sys
import time
from pathlib import Path
from typing import List, Optional, Tuple

import numpy as np
import pyarrow as pa
import typer

from geometry2d.point_2d import Point2D
from geometry2d.rect_hv import RectHV
from symbol_tables.arrow_io import parse_points, read_points
from symbol_tables.kd_tree_st import KdTreeST
from symbol_tables.loggers import get_logger, set_verbose
from symbol_tables.point_st import PointST

log = get_logger("cli")

app = typer.Typer(add_completion=False, no_args_is_help=True)


def _load_table(source: Optional[Path]) -> pa.Table:
    try:
        if source is None:
            return parse_points(sys.stdin.read())
        return read_points(source)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _build(table: pa.Table, brute_force: bool):
    cls = PointST if brute_force else KdTreeST
    started = time.perf_counter()
    st = cls.from_arrow(table)
    log.info("Built %s from %d rows in %.3fs", cls.__name__, table.num_rows, time.perf_counter() - started)
    return st


def _random_point(rng: np.random.Generator) -> Point2D:
    return Point2D(rng.uniform(0.0, 1.0), rng.uniform(0.0, 1.0))


def _join(points: List[Point2D]) -> str:
    return " ".join(str(p) for p in points)


@app.command("demo")
def cli_demo(
    source: Optional[Path] = typer.Argument(None, exists=True, dir_okay=False, readable=True),
    brute_force: bool = typer.Option(False, "--brute-force/--kd-tree"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s"),
    rect: Tuple[float, float, float, float] = typer.Option(
        (0.0, 0.0, 0.5, 0.5),
        "--rect",
        help="Query rectangle as XMIN YMIN XMAX YMAX.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Load points, then exercise every symbol-table operation once."""
    set_verbose(verbose)
    try:
        query_rect = RectHV(*rect)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--rect") from exc

    st = _build(_load_table(source), brute_force)
    points = st.points()
    typer.echo(_join(points))
    typer.echo(" ".join(str(st.get(p)) for p in points))
    typer.echo(f"st is empty: {str(st.is_empty()).lower()}")
    typer.echo(f"# of points: {st.size()}")

    p = _random_point(np.random.default_rng(seed))
    typer.echo(f"generating random point p: {p}")
    typer.echo(f"st contains p: {str(st.contains(p)).lower()}")
    typer.echo(f"nearest neighbor: {st.nearest(p)}")
    typer.echo(f"points in {query_rect}: {_join(st.range(query_rect))}")


@app.command("bench")
def cli_bench(
    source: Optional[Path] = typer.Argument(None, exists=True, dir_okay=False, readable=True),
    queries: int = typer.Option(1000, "--queries", "-m", min=1),
    brute_force: bool = typer.Option(False, "--brute-force/--kd-tree"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Time nearest-neighbour queries at random points of the unit square."""
    set_verbose(verbose)
    st = _build(_load_table(source), brute_force)
    if st.is_empty():
        raise typer.BadParameter("No points to query.", param_hint="SOURCE")

    rng = np.random.default_rng(seed)
    probes = [_random_point(rng) for _ in range(int(queries))]
    started = time.perf_counter()
    for p in probes:
        st.nearest(p)
    elapsed = time.perf_counter() - started
    log.debug("Ran %d nearest queries", len(probes))
    typer.echo(f"{len(probes)} nearest queries in {elapsed:.6f}s")


def main(argv: Optional[List[str]] = None) -> None:
    app(args=argv, prog_name="point-st")


if __name__ == "__main__":
    main()
