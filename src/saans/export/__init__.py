"""Schema-faithful export serialization."""

from .serializer import ExportSerializer

__all__ = ["ExportSerializer"]
