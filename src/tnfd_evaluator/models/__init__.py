"""Data models for TNFD Evaluator."""

from .evaluation import EvaluationResult, EvaluationHandles
from .provider import (
    FileObject,
    VectorStoreObject,
    AssistantObject,
    ThreadObject,
    RunMessage,
    RunObject,
)

__all__ = [
    "EvaluationResult",
    "EvaluationHandles",
    "FileObject",
    "VectorStoreObject",
    "AssistantObject",
    "ThreadObject",
    "RunMessage",
    "RunObject",
]
