"""Evaluation module for scoring reports against the reference document."""

from .parser import parse_evaluation
from .evaluator import Evaluator

__all__ = [
    "parse_evaluation",
    "Evaluator",
]
