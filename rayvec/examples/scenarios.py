from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import yaml


def _demo() -> Dict[str, Any]:
    return {
        "triangle": {"corners": [[-1.0, -1.0, 0.0], [1.0, -1.0, 0.0], [0.0, 1.0, 0.0]]},
        "rays": {
            "kind": "list",
            "rays": [
                {"start": [0.0, 0.0, 5.0], "direction": [0.0, 0.0, -1.0]},
                {"start": [0.25, -0.25, 3.0], "direction": [0.0, 0.0, -1.0]},
                {"start": [4.0, 4.0, 5.0], "direction": [0.0, 0.0, -1.0]},
                {"start": [0.0, 0.0, 1.0], "direction": [1.0, 0.0, 0.0]},
            ],
        },
        "tracer": {"reflect": True, "forward_only": False, "workers": 1},
        "output": {"path": "demo_hits.json", "format": "json"},
    }


def _grid() -> Dict[str, Any]:
    return {
        "triangle": {"corners": [[-2.0, -2.0, 0.0], [2.0, -2.0, 0.0], [0.0, 2.0, 0.0]]},
        "rays": {
            "kind": "grid",
            "center": [0.0, 0.0, 10.0],
            "direction": [0.0, 0.0, -1.0],
            "up": [0.0, 1.0, 0.0],
            "extent": [4.0, 4.0],
            "count": [9, 9],
        },
        "view": {"kind": "look_at", "eye": [0.0, 0.0, 10.0], "target": [0.0, 0.0, 0.0], "up": [0.0, 1.0, 0.0]},
        "tracer": {"reflect": True, "forward_only": True, "workers": 4},
        "output": {"path": "grid_hits.npz", "format": "npz"},
    }


def _oblique() -> Dict[str, Any]:
    return {
        "triangle": {"corners": [[0.0, 0.0, 0.0], [2.0, 0.0, 0.0], [0.0, 2.0, 0.0]]},
        "transform": [
            {"kind": "rotate", "axis": "x", "angle_deg": 45.0},
            {"kind": "translate", "delta": [0.0, 0.0, -3.0]},
        ],
        "rays": {
            "kind": "list",
            "rays": [
                {"start": [0.5, 0.5, 5.0], "direction": [0.0, 0.0, -1.0]},
                {"start": [0.5, 0.5, 5.0], "direction": [0.1, 0.1, -1.0]},
            ],
        },
        "tracer": {"reflect": True},
        "output": {"path": "oblique_hits.json", "format": "json"},
    }


_PRESETS = {
    "demo": _demo,
    "grid": _grid,
    "oblique": _oblique,
}


def scenario_preset(preset: str) -> Dict[str, Any]:
    try:
        factory = _PRESETS[preset]
    except KeyError:
        raise ValueError(f"Unknown scenario preset '{preset}'. Available: {sorted(_PRESETS)}") from None
    return factory()


def generate_scenario(preset: str = "demo", path: str | Path = "scenario.yaml") -> Path:
    scenario = scenario_preset(preset)
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    with open(out, "w", encoding="utf-8") as f:
        yaml.safe_dump(scenario, f, sort_keys=False)
    return out
