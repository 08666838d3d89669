"""Core module for the matchmaster application."""

from .types import APIResponse

__all__ = ["APIResponse"]
