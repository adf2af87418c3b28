"""Programmatic entry points for running tracing scenarios."""

from .run import TraceRunResult, trace_from_config

__all__ = ["TraceRunResult", "trace_from_config"]
