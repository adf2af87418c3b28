"""rayvec – minimal 3D geometry kernel with ray/triangle intersection.

The package is organised as:
- Vector, Matrix (core.vector, core.matrix): float32 value types
- Ray, HitInfo, RayTarget (core.ray, core.target): the intersection protocol
- Triangle (shapes.triangle): a RayTarget via plane intersection + containment
- Tracer (core.tracer): single-bounce tracing of ray batches
- NpzWriter / JsonWriter (core.exporter): hit record output
- YAML scenarios (config), the sdk runner and the ``rayvec`` CLI
"""

from .core.vector import Vector
from .core.matrix import Matrix
from .core.ray import Ray
from .core.target import HitInfo, RayTarget
from .core.tracer import Tracer, TracerConfig, TraceRecord
from .core.exporter import JsonWriter, NpzWriter
from .shapes.triangle import Triangle
