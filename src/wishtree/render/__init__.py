"""Render engine and render configuration."""

from .engine import PlannedEntry, RenderPlanner, plan, render
from .options import FailurePolicy, RenderOptions

__all__ = [
    "FailurePolicy",
    "PlannedEntry",
    "RenderOptions",
    "RenderPlanner",
    "plan",
    "render",
]
