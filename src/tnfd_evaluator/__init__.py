"""TNFD Evaluator - score disclosure reports against the TNFD recommendations."""

__version__ = "0.1.0"
