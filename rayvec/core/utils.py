from __future__ import annotations
from typing import Iterable
import numpy as np
import logging

# Tolerance used for approximate Vector / Matrix equality.
EPSILON = float(np.finfo(np.float32).eps)

def get_logger(name: str = "rayvec") -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        fmt = logging.Formatter("[%(levelname)s] %(message)s")
        handler.setFormatter(fmt)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger

def as_float32(values: Iterable[float] | np.ndarray, shape: tuple[int, ...]) -> np.ndarray:
    """Copy ``values`` into a float32 array, asserting the expected shape."""
    if not isinstance(values, np.ndarray):
        values = list(values)
    arr = np.array(values, dtype=np.float32)
    assert arr.shape == shape, f"Input has incorrect shape: {arr.shape} given, {shape} expected"
    return arr

def radians(deg: float | np.ndarray) -> float | np.ndarray:
    return np.deg2rad(deg)

def degrees(rad: float | np.ndarray) -> float | np.ndarray:
    return np.rad2deg(rad)
