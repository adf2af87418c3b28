from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..config import ScenarioConfig, load_config
from ..config.schema import OutputConfig
from ..core.tracer import TraceRecord, Tracer
from ..core.utils import get_logger
from ..runtime.builders import (
    build_rays,
    build_tracer_config,
    build_triangle,
    build_view,
    build_writer,
)

_log = get_logger()

_OUTPUT_FORMATS = {".npz": "npz", ".json": "json"}


@dataclass(frozen=True)
class TraceRunResult:
    """Summary of a tracing run driven by a configuration file."""

    stats: Dict[str, Any]
    records: List[TraceRecord]
    output_path: Optional[Path]
    config: ScenarioConfig


def trace_from_config(
    config: Union[str, Path, ScenarioConfig],
    *,
    output: Optional[Path] = None,
    workers: Optional[int] = None,
    reflect: Optional[bool] = None,
) -> TraceRunResult:
    """Run a tracing scenario described by a configuration file or object.

    Parameters
    ----------
    config:
        Path to a YAML file or a pre-loaded :class:`~rayvec.config.schema.ScenarioConfig`.
    output:
        Optional override for the file the hits are written to. The extension
        drives the format (``.npz`` or ``.json``).
    workers:
        Optional override for the number of tracing threads.
    reflect:
        Optional override for computing the reflected ray of each hit.

    Returns
    -------
    TraceRunResult
        Includes run statistics (rays, hits, reflected), every trace record,
        the resolved output path (``None`` when nothing is written), and the
        resolved configuration object used for the run.
    """

    cfg = load_config(config) if not isinstance(config, ScenarioConfig) else config.model_copy(deep=True)

    if workers is not None:
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        cfg.tracer.workers = workers
    if reflect is not None:
        cfg.tracer.reflect = reflect

    if output is not None:
        out_path = Path(output).resolve()
        ext = out_path.suffix.lower()
        if ext not in _OUTPUT_FORMATS:
            raise ValueError(f"Unsupported output extension '{ext}'")
        cfg.output = OutputConfig(path=out_path, format=_OUTPUT_FORMATS[ext])
    elif cfg.output is not None:
        cfg.output.path = Path(cfg.output.path).resolve()

    triangle = build_triangle(cfg)
    rays = build_rays(cfg)
    tracer = Tracer(triangle, cfg=build_tracer_config(cfg), view=build_view(cfg))
    _log.info("Tracing %d rays against %r", len(rays), triangle)

    records = tracer.run(rays)
    writer = build_writer(cfg)
    if writer is not None:
        try:
            writer.write_records(records)
        finally:
            writer.close()
    stats = Tracer.stats(records)

    output_path = Path(cfg.output.path) if cfg.output is not None else None
    return TraceRunResult(stats=stats, records=records, output_path=output_path, config=cfg)
