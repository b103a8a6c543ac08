"""Primitive generation and matplotlib output."""

from .backend import render_to_file
from .diagram import draw_closed_cell, draw_open_cell, draw_root_cell, render_diagram
from .style import DEFAULT_STYLE, RenderStyle

__all__ = [
    "DEFAULT_STYLE",
    "RenderStyle",
    "draw_closed_cell",
    "draw_open_cell",
    "draw_root_cell",
    "render_diagram",
    "render_to_file",
]
