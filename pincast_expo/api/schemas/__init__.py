from .base import ErrorResponse

__all__ = ["ErrorResponse"]
