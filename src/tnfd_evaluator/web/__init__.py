"""HTTP interface for TNFD Evaluator."""

from .app import create_app
from .route import ERROR_MESSAGE

__all__ = ["create_app", "ERROR_MESSAGE"]
