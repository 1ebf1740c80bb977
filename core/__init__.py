"""Core application components."""

from .input_handler import InputHandler
from .application import AttractorApplication

__all__ = ["InputHandler", "AttractorApplication"]
