"""Command line entry points."""
from .main import app, run

__all__ = ["app", "run"]
