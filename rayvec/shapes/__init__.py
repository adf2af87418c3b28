from .triangle import Triangle

__all__ = ["Triangle"]
