"""Utility functions for TNFD Evaluator."""

from .prompts import load_prompt_template
from .uploads import save_upload

__all__ = [
    "load_prompt_template",
    "save_upload",
]
