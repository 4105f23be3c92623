"""LLM provider integration module."""

from .openai import OpenAIClient

__all__ = ["OpenAIClient"]
