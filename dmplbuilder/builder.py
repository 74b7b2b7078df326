from __future__ import annotations
from abc import ABC, abstractmethod
from enum import IntEnum
from typing import Tuple, Union


MeasuringUnit = Union[int, str]

PEN_RANGE = range(0, 7)
MEASURING_UNITS: Tuple[MeasuringUnit, ...] = (1, 2, 3, 4, 5, "M")


class Pen(IntEnum):
    REGULAR = 0
    KISS = 1
    THROUGH = 5
    FLEX = 6


class PlotBuilderError(Exception):
    """Base class for all errors raised by plot builders."""


class InvalidArgumentError(PlotBuilderError, ValueError):
    """A pen id, measuring unit or point list was rejected."""


class UnhandledUnitError(PlotBuilderError, ValueError):
    """The renderer has no output scale for the requested measuring unit."""


def is_valid_pen(pen: int) -> bool:
    if isinstance(pen, bool):
        return False
    return pen in PEN_RANGE


def is_valid_measuring_unit(unit: MeasuringUnit) -> bool:
    # bool is an int subclass, True would otherwise pass as unit 1
    if isinstance(unit, bool):
        return False
    return unit in MEASURING_UNITS


def canonical_measuring_unit(unit: MeasuringUnit) -> MeasuringUnit:
    """
    Returns the table entry equal to unit, so 1.0 is stored as 1 and
    prints as such in the program header.
    """
    if not is_valid_measuring_unit(unit):
        raise invalid_measuring_unit(unit)
    return MEASURING_UNITS[MEASURING_UNITS.index(unit)]


def invalid_pen(pen: int) -> InvalidArgumentError:
    return InvalidArgumentError(f"[{pen}] is not a valid Pen.")


def invalid_measuring_unit(unit: MeasuringUnit) -> InvalidArgumentError:
    return InvalidArgumentError(f"[{unit}] is not a valid measuring unit.")


class PlotBuilder(ABC):
    """
    The set of drawing operations every plot renderer understands.

    A renderer receives a sequence of operations through this fluent
    interface and turns them into an output artifact with compile(). All
    mutating methods return the renderer itself so calls can be chained:

        DmplBuilder().pen_up().regular_cut().pen_down().plot(-1984, 1337)

    Coordinate-bearing operations respect flip_axes(): once enabled, every
    following (x, y) pair is used as (y, x). Pairs added before the flip
    stay as they were.

    Implementations own all of their state; this class holds none.
    """

    @abstractmethod
    def plot(self, x: int, y: int) -> PlotBuilder:
        """Adds a new plot of x and y to machine instructions."""

    @abstractmethod
    def circle(self, x: int, y: int, r: int) -> PlotBuilder:
        """Adds a circle with radius r centered in (x, y)."""

    @abstractmethod
    def arc(self, x: int, y: int, degrees: int) -> PlotBuilder:
        """
        Adds a circle arc.

        (x, y) specifies the center of the circle which contains the arc.
        degrees specifies the size of the arc between -360 and +360; a
        positive value moves counterclockwise, a negative one clockwise.
        """

    @abstractmethod
    def ellipse(
        self, x: int, y: int, x1: int, y1: int, x2: int, y2: int
    ) -> PlotBuilder:
        """
        Adds an ellipse with center (x, y), lateral axis (x1, y1) and
        vertical axis (x2, y2).
        """

    @abstractmethod
    def curve(
        self, x: int, y: int, x1: int, y1: int, *points: int
    ) -> PlotBuilder:
        """
        Adds a curve through the given points. (x1, y1) determines the
        slope of the curved line at the starting point; points must hold
        an even number of coordinates.
        """

    @abstractmethod
    def change_pen(self, pen: int) -> PlotBuilder:
        """Changes the pen of the plotter."""

    @abstractmethod
    def compile(self) -> str:
        """Compiles a string in target format with machine instructions."""

    @abstractmethod
    def push_command(self, command: str) -> PlotBuilder:
        """Pushes a raw command to the instructions."""

    @abstractmethod
    def pen_up(self) -> PlotBuilder:
        """Lifts the pen up."""

    @abstractmethod
    def pen_down(self) -> PlotBuilder:
        """Pushes the pen down on paper."""

    def flex_cut(self) -> PlotBuilder:
        """Changes the plotter pen to use flexcut."""
        return self.change_pen(Pen.FLEX)

    def regular_cut(self) -> PlotBuilder:
        """Changes to the regular plotter pen."""
        return self.change_pen(Pen.REGULAR)

    def through_cut(self) -> PlotBuilder:
        return self.change_pen(Pen.THROUGH)

    def kiss_cut(self) -> PlotBuilder:
        return self.change_pen(Pen.KISS)

    @abstractmethod
    def pressure(self, gram_pressure: int) -> PlotBuilder:
        """Changes the pen pressure in gram."""

    @abstractmethod
    def set_measuring_unit(self, unit: MeasuringUnit) -> PlotBuilder:
        """
        Specifies the measuring unit.

        1 selects 0.001 inch, 5 selects 0.005 inch, M selects 0.1 mm.
        2, 3 and 4 are accepted by the device as well.
        """

    @abstractmethod
    def velocity(self, velocity: int) -> PlotBuilder:
        """Changes the plotter velocity."""

    @abstractmethod
    def flip_axes(self) -> PlotBuilder:
        """Flips the x, y coordinates of all following operations."""

    @abstractmethod
    def cut_off(self) -> PlotBuilder:
        """Cuts off paper when the operation finishes."""
