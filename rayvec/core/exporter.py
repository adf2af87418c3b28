from __future__ import annotations
import json
import pathlib
from typing import Any, Dict, List, Sequence

import numpy as np

from .tracer import TraceRecord
from .utils import get_logger

_log = get_logger()


def _vec_or_nan(vec) -> np.ndarray:
    if vec is None:
        return np.full(3, np.nan, dtype=np.float32)
    return vec.to_numpy()


class NpzWriter:
    """Collects hit records and writes them as compressed NumPy arrays on close.

    Arrays: ``point`` (K,3), ``normal`` (K,3), ``ray_index`` (K,),
    ``distance`` (K,), ``reflected_direction`` (K,3) and ``view_point`` (K,3).
    Missing per-hit values are NaN. Nothing is written when no ray hit.
    """
    def __init__(self, path: str) -> None:
        self.path = path
        self._records: List[TraceRecord] = []

    def write_records(self, records: Sequence[TraceRecord]) -> None:
        self._records.extend(r for r in records if r.is_hit)

    def close(self) -> None:
        if not self._records:
            _log.info("No hits recorded; %s not written.", self.path)
            return
        path = pathlib.Path(self.path)
        path.parent.mkdir(parents=True, exist_ok=True)
        recs = self._records
        out: Dict[str, np.ndarray] = {
            "point": np.vstack([r.hit.point.to_numpy() for r in recs]),
            "normal": np.vstack([r.hit.normal.to_numpy() for r in recs]),
            "ray_index": np.asarray([r.ray_index for r in recs], dtype=np.int64),
            "distance": np.asarray([r.distance for r in recs], dtype=np.float32),
            "reflected_direction": np.vstack(
                [_vec_or_nan(r.reflected.direction if r.reflected is not None else None) for r in recs]
            ),
            "view_point": np.vstack([_vec_or_nan(r.view_point) for r in recs]),
        }
        np.savez_compressed(path, **out)
        _log.info("Wrote %d hits to %s", len(recs), path.name)
        self._records.clear()


class JsonWriter:
    """Writes one JSON document listing every hit; always produces a file."""
    def __init__(self, path: str) -> None:
        self.path = path
        self._hits: List[Dict[str, Any]] = []

    def write_records(self, records: Sequence[TraceRecord]) -> None:
        for r in records:
            if not r.is_hit:
                continue
            entry: Dict[str, Any] = {
                "ray_index": r.ray_index,
                "point": list(r.hit.point),
                "normal": list(r.hit.normal),
                "distance": r.distance,
            }
            if r.hit.color is not None:
                entry["color"] = r.hit.color
            if r.hit.reflect_factor is not None:
                entry["reflect_factor"] = r.hit.reflect_factor
            if r.reflected is not None:
                entry["reflected"] = {
                    "start": list(r.reflected.start),
                    "direction": list(r.reflected.direction),
                }
            if r.view_point is not None:
                entry["view_point"] = list(r.view_point)
            self._hits.append(entry)

    def close(self) -> None:
        path = pathlib.Path(self.path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump({"hits": self._hits}, f, indent=2)
        _log.info("Wrote %d hits to %s", len(self._hits), path.name)
        self._hits.clear()
