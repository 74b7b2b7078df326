import logging
from typing import List, Tuple
from ..builder import (
    PlotBuilder,
    MeasuringUnit,
    InvalidArgumentError,
    is_valid_pen,
    is_valid_measuring_unit,
    invalid_pen,
    invalid_measuring_unit,
    canonical_measuring_unit,
)


logger = logging.getLogger(__name__)


class DmplBuilder(PlotBuilder):
    """
    Builds a DM/PL program as a flat, comma separated instruction stream.

    The builder does not track any geometry; coordinates are formatted
    exactly as given, after swapping x and y if flip_axes() was called.
    """

    INIT = ";: EC{unit},U H L0,A100,100,R,"
    FINALIZER = "e"
    CUT_OFF_FINALIZER = ";:c,e"

    def __init__(self):
        # Generated DM/PL command instructions
        self.instructions: List[str] = []
        self.measuring_unit: MeasuringUnit = "M"
        self.axes_flipped: bool = False
        self.cut_off_enabled: bool = False

    def _pair(self, x: int, y: int) -> Tuple[int, int]:
        return (y, x) if self.axes_flipped else (x, y)

    def _push_all(self, *tokens) -> PlotBuilder:
        self.instructions.extend(str(token) for token in tokens)
        return self

    def plot(self, x: int, y: int) -> PlotBuilder:
        return self._push_all(*self._pair(x, y))

    def circle(self, x: int, y: int, r: int) -> PlotBuilder:
        x, y = self._pair(x, y)
        return self._push_all(f"CC {x}", y, r)

    def arc(self, x: int, y: int, degrees: int) -> PlotBuilder:
        x, y = self._pair(x, y)
        return self._push_all(f"CA {x}", y, degrees)

    def ellipse(
        self, x: int, y: int, x1: int, y1: int, x2: int, y2: int
    ) -> PlotBuilder:
        x, y = self._pair(x, y)
        return self._push_all(
            f"CE {x}", y, *self._pair(x1, y1), *self._pair(x2, y2)
        )

    def curve(
        self, x: int, y: int, x1: int, y1: int, *points: int
    ) -> PlotBuilder:
        if len(points) % 2:
            logger.debug(f"Rejecting curve with {len(points)} coordinates")
            raise InvalidArgumentError(
                f"[{len(points)}] is not a valid number of curve point "
                "coordinates."
            )

        x, y = self._pair(x, y)
        tokens = [f"CG {x}", y, *self._pair(x1, y1)]
        for i in range(0, len(points), 2):
            tokens.extend(self._pair(points[i], points[i + 1]))
        return self._push_all(*tokens)

    def change_pen(self, pen: int) -> PlotBuilder:
        if not is_valid_pen(pen):
            logger.debug(f"Rejecting pen {pen}")
            raise invalid_pen(pen)
        return self.push_command(f"P{int(pen)};")

    def compile(self) -> str:
        """
        Compiles a string in DM/PL format with machine instructions.

        The finalizer is only added to the returned string, so compiling
        twice yields the same program.
        """
        init = self.INIT.format(unit=self.measuring_unit)
        finalizer = (
            self.CUT_OFF_FINALIZER if self.cut_off_enabled else self.FINALIZER
        )
        logger.debug(
            f"Compiling {len(self.instructions)} DM/PL instructions"
        )
        return init + ",".join(self.instructions + [finalizer])

    def compile_dmpl(self) -> str:
        """Alias for compile(), kept for backwards compatibility."""
        return self.compile()

    def push_command(self, command: str) -> PlotBuilder:
        self.instructions.append(command)
        return self

    def pen_up(self) -> PlotBuilder:
        return self.push_command("U")

    def pen_down(self) -> PlotBuilder:
        return self.push_command("D")

    def pressure(self, gram_pressure: int) -> PlotBuilder:
        return self.push_command(f"BP{gram_pressure};")

    def set_measuring_unit(self, unit: MeasuringUnit) -> PlotBuilder:
        if not is_valid_measuring_unit(unit):
            logger.debug(f"Rejecting measuring unit {unit!r}")
            raise invalid_measuring_unit(unit)
        self.measuring_unit = canonical_measuring_unit(unit)
        return self

    def velocity(self, velocity: int) -> PlotBuilder:
        return self.push_command(f"V{velocity};")

    def flip_axes(self) -> PlotBuilder:
        self.axes_flipped = True
        return self

    def cut_off(self) -> PlotBuilder:
        self.cut_off_enabled = True
        return self
