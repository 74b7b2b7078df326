"""
Builds plotter programs through a fluent interface and renders them
either as DM/PL machine instructions or as an SVG preview.
"""

from .builder import (
    PlotBuilder,
    Pen,
    MEASURING_UNITS,
    PlotBuilderError,
    InvalidArgumentError,
    UnhandledUnitError,
)
from .render import DmplBuilder, SvgBuilder
from .core.ops import Ops

__all__ = [
    "PlotBuilder",
    "Pen",
    "MEASURING_UNITS",
    "PlotBuilderError",
    "InvalidArgumentError",
    "UnhandledUnitError",
    "DmplBuilder",
    "SvgBuilder",
    "Ops",
]
