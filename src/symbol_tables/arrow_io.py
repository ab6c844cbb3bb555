from pathlib import Path
from typing import Iterable, Iterator, Union

import numpy as np
import pyarrow as pa

from geometry2d.point_2d import Point2D

POINT_SCHEMA = pa.schema([
    ('x', pa.float64()),
    ('y', pa.float64())
])


def parse_points(text: str) -> pa.Table:
    """Parse whitespace-separated coordinate pairs into an x/y table.

    Tokens are read pairwise as ``x y``; line breaks carry no meaning.

    Raises:
        ValueError: on a non-numeric token or an odd number of tokens.
    """
    tokens = text.split()
    if len(tokens) % 2:
        raise ValueError(f"Expected coordinate pairs, got {len(tokens)} values")
    try:
        coords = np.asarray(tokens, dtype=np.float64).reshape(-1, 2)
    except ValueError as exc:
        raise ValueError(f"Malformed coordinate: {exc}") from exc
    return pa.Table.from_arrays(
        [pa.array(np.ascontiguousarray(coords[:, 0])),
         pa.array(np.ascontiguousarray(coords[:, 1]))],
        schema=POINT_SCHEMA
    )


def read_points(path: Union[str, Path]) -> pa.Table:
    return parse_points(Path(path).read_text(encoding="utf-8"))


def points_table(points: Iterable[Point2D]) -> pa.Table:
    """Columnar copy of points, order preserved"""
    points = list(points)
    return pa.Table.from_arrays(
        [pa.array([p.x for p in points], type=pa.float64()),
         pa.array([p.y for p in points], type=pa.float64())],
        schema=POINT_SCHEMA
    )


def iter_points(table: pa.Table) -> Iterator[Point2D]:
    missing = [c for c in POINT_SCHEMA.names if c not in table.column_names]
    if missing:
        raise ValueError(f"Point table is missing column(s): {', '.join(missing)}")
    xs = table.column('x').to_pylist()
    ys = table.column('y').to_pylist()
    for x, y in zip(xs, ys):
        yield Point2D(x, y)
