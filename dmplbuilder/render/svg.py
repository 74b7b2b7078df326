import math
import logging
from typing import Dict, Tuple, Union
from xml.etree import ElementTree as ET
from ..builder import (
    PlotBuilder,
    MeasuringUnit,
    Pen,
    UnhandledUnitError,
    is_valid_pen,
    invalid_pen,
    canonical_measuring_unit,
)


logger = logging.getLogger(__name__)

Number = Union[int, float]

TOOLS: Dict[int, str] = {
    Pen.REGULAR: "regular",
    Pen.KISS: "kiss",
    Pen.THROUGH: "through",
    Pen.FLEX: "flex",
}
DEFAULT_TOOL = TOOLS[Pen.REGULAR]

# Output unit and size of one device step, per measuring unit
UNITS: Dict[MeasuringUnit, Tuple[str, float]] = {
    "M": ("mm", 0.1),
    1: ("in", 0.001),
    5: ("in", 0.005),
}

SVG_TEMPLATE = """\
<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" \
viewBox="0 0 {max_x} {max_y}">
    <defs>
        <style>
            .regular {{
                stroke: rgb(0,0,255);
                stroke-width: 4;
            }}

            .kiss {{
                stroke: rgb(0,0,255);
                stroke-width: 4;
                stroke-dasharray: 20 4;
            }}

            .flex {{
                stroke: rgb(255,0,0);
                stroke-width: 4;
                stroke-dasharray: 20 4;
            }}

            .through {{
                stroke: rgb(255,0,0);
                stroke-width: 4;
            }}

            path {{
                fill: none;
            }}
        </style>
    </defs>
    {instructions}
</svg>"""


def format_number(value: Union[Number, str]) -> str:
    """
    Formats a coordinate for SVG output. Integral values are printed
    without a fractional part, strings are passed through.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return f"{value:.14g}"
    return str(value)


class SvgBuilder(PlotBuilder):
    """
    Illustrates a plot program visually as an SVG line drawing.

    Unlike the DM/PL builder this one keeps track of the pen: every plot
    moves a cursor by a relative offset, and the drawing extent grows to
    include every visited point so the canvas can be sized on compile.

    circle(), ellipse() and curve() are not drawn. pressure(), velocity(),
    cut_off() and push_command() have no visual effect.
    """

    def __init__(self):
        # Current position
        self.x: Number = 0
        self.y: Number = 0

        # Extent of drawing
        self.max_x: Number = 0
        self.max_y: Number = 0

        self.instructions = []
        self.axes_flipped = False
        self.pen_is_down = True
        self.tool = DEFAULT_TOOL
        self.measuring_unit: MeasuringUnit = "M"
        self.unit, self.scale = UNITS["M"]

    @property
    def position(self) -> Tuple[Number, Number]:
        return self.x, self.y

    @property
    def extent(self) -> Tuple[Number, Number]:
        return self.max_x, self.max_y

    def _grow_extent(self, x: Number, y: Number):
        self.max_x = max(self.max_x, x)
        self.max_y = max(self.max_y, y)

    def plot(self, x: int, y: int) -> PlotBuilder:
        if self.axes_flipped:
            x, y = y, x

        target_x = self.x + x
        target_y = self.y + y
        self._grow_extent(target_x, target_y)

        if self.pen_is_down:
            self.push_instruction(
                "line",
                {
                    "x1": self.x,
                    "y1": self.y,
                    "x2": target_x,
                    "y2": target_y,
                    "class": self.tool,
                },
            )

        self.x = target_x
        self.y = target_y
        return self

    def change_pen(self, pen: int) -> PlotBuilder:
        if not is_valid_pen(pen):
            logger.debug(f"Rejecting pen {pen}")
            raise invalid_pen(pen)

        tool = TOOLS.get(pen)
        if tool is None:
            logger.warning(
                f"Pen {pen} has no tool style, drawing it as {DEFAULT_TOOL}"
            )
            tool = DEFAULT_TOOL
        self.tool = tool
        return self

    def compile(self) -> str:
        """Compiles an SVG document of everything drawn so far."""
        logger.debug(f"Compiling {len(self.instructions)} SVG elements")
        return SVG_TEMPLATE.format(
            width=format_number(self.max_x * self.scale) + self.unit,
            height=format_number(self.max_y * self.scale) + self.unit,
            max_x=format_number(self.max_x),
            max_y=format_number(self.max_y),
            instructions="\n".join(self.instructions),
        )

    def push_command(self, command: str) -> PlotBuilder:
        """No effect in the SVG output."""
        return self

    def pen_up(self) -> PlotBuilder:
        self.pen_is_down = False
        return self

    def pen_down(self) -> PlotBuilder:
        self.pen_is_down = True
        return self

    def pressure(self, gram_pressure: int) -> PlotBuilder:
        """No effect in the SVG output."""
        return self

    def set_measuring_unit(self, unit: MeasuringUnit) -> PlotBuilder:
        """
        Sets the unit of the width and height attributes. Only
        1 (0.001 inch), 5 (0.005 inch) and M (0.1 mm) can be previewed.
        """
        if isinstance(unit, bool) or unit not in UNITS:
            logger.debug(f"Rejecting measuring unit {unit!r}")
            raise UnhandledUnitError(f"Unhandled unit: {unit}")
        self.measuring_unit = canonical_measuring_unit(unit)
        self.unit, self.scale = UNITS[unit]
        return self

    def velocity(self, velocity: int) -> PlotBuilder:
        """No effect in the SVG output."""
        return self

    def flip_axes(self) -> PlotBuilder:
        self.axes_flipped = True
        return self

    def cut_off(self) -> PlotBuilder:
        """No effect in the SVG output."""
        return self

    def push_instruction(self, name: str, attributes: Dict) -> PlotBuilder:
        element = ET.Element(
            name,
            {key: format_number(value) for key, value in attributes.items()},
        )
        self.instructions.append(ET.tostring(element, encoding="unicode"))
        return self

    def circle(self, x: int, y: int, r: int) -> PlotBuilder:
        logger.debug("circle() is not drawn in the SVG preview")
        return self

    def arc(self, x: int, y: int, degrees: int) -> PlotBuilder:
        """
        Adds a circle arc. (x, y) is the center of the circle relative to
        the current position.

        The end point is an approximation that looks right for arcs larger
        than 180 degrees but is not geometrically exact. The cursor does
        not move.
        """
        if self.axes_flipped:
            x, y = y, x

        radius = math.sqrt(x ** 2 + y ** 2)

        # FIXME: only visually correct for arcs larger than 180 degrees
        angle = degrees + 180
        end_x = x + radius * math.cos(angle * math.pi / 180)
        end_y = y + radius * math.sin(angle * math.pi / 180)

        self._grow_extent(self.x + x + radius, self.y + y + radius)

        large_arc = 1
        sweep = 0 if angle < 0 else 1

        description = " ".join(
            format_number(part)
            for part in (
                "M", self.x, self.y,
                "a", radius, radius, 0, large_arc, sweep, end_x, end_y,
            )
        )
        return self.push_instruction(
            "path", {"d": description, "class": self.tool}
        )

    def ellipse(
        self, x: int, y: int, x1: int, y1: int, x2: int, y2: int
    ) -> PlotBuilder:
        logger.debug("ellipse() is not drawn in the SVG preview")
        return self

    def curve(
        self, x: int, y: int, x1: int, y1: int, *points: int
    ) -> PlotBuilder:
        logger.debug("curve() is not drawn in the SVG preview")
        return self
