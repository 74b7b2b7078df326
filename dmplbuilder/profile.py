import uuid
import logging
from typing import Any, Dict, Optional, TypeVar
from blinker import Signal
from .builder import (
    PlotBuilder,
    MeasuringUnit,
    is_valid_pen,
    canonical_measuring_unit,
    invalid_pen,
)


logger = logging.getLogger(__name__)

B = TypeVar("B", bound=PlotBuilder)


class PlotterProfile:
    """
    In-memory plotter settings that are applied to a builder before the
    program is drawn.
    """

    def __init__(self):
        logger.debug("PlotterProfile.__init__")
        self.id = str(uuid.uuid4())
        self.name: str = "Default Plotter"
        self.measuring_unit: MeasuringUnit = "M"
        self.velocity: Optional[int] = None
        self.pressure: Optional[int] = None
        self.pen: Optional[int] = None
        self.flip_axes: bool = False
        self.cut_off: bool = False

        # Signals
        self.changed = Signal()

    def set_name(self, name: str):
        self.name = str(name)
        self.changed.send(self)

    def set_measuring_unit(self, unit: MeasuringUnit):
        unit = canonical_measuring_unit(unit)
        if self.measuring_unit == unit:
            return
        self.measuring_unit = unit
        self.changed.send(self)

    def set_velocity(self, velocity: Optional[int]):
        if self.velocity == velocity:
            return
        self.velocity = velocity
        self.changed.send(self)

    def set_pressure(self, pressure: Optional[int]):
        if self.pressure == pressure:
            return
        self.pressure = pressure
        self.changed.send(self)

    def set_pen(self, pen: Optional[int]):
        if pen is not None and not is_valid_pen(pen):
            raise invalid_pen(pen)
        if self.pen == pen:
            return
        self.pen = pen
        self.changed.send(self)

    def set_flip_axes(self, flip_axes: bool = True):
        if self.flip_axes == flip_axes:
            return
        self.flip_axes = flip_axes
        self.changed.send(self)

    def set_cut_off(self, cut_off: bool = True):
        if self.cut_off == cut_off:
            return
        self.cut_off = cut_off
        self.changed.send(self)

    def apply(self, builder: B) -> B:
        """
        Issues the profile's settings on the builder: measuring unit,
        axis flip, pen, velocity, pressure and cut-off, in that order.
        Unset settings are skipped.
        """
        builder.set_measuring_unit(self.measuring_unit)
        if self.flip_axes:
            builder.flip_axes()
        if self.pen is not None:
            builder.change_pen(self.pen)
        if self.velocity is not None:
            builder.velocity(self.velocity)
        if self.pressure is not None:
            builder.pressure(self.pressure)
        if self.cut_off:
            builder.cut_off()
        return builder

    def to_dict(self) -> Dict[str, Any]:
        return {
            "profile": {
                "name": self.name,
                "measuring_unit": self.measuring_unit,
                "velocity": self.velocity,
                "pressure": self.pressure,
                "pen": self.pen,
                "flip_axes": self.flip_axes,
                "cut_off": self.cut_off,
            }
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlotterProfile":
        pr = cls()
        pr_data = data.get("profile", {})
        pr.name = pr_data.get("name", pr.name)

        unit = pr_data.get("measuring_unit", pr.measuring_unit)
        pr.measuring_unit = canonical_measuring_unit(unit)

        pen = pr_data.get("pen")
        if pen is not None and not is_valid_pen(pen):
            raise invalid_pen(pen)
        pr.pen = pen

        pr.velocity = pr_data.get("velocity")
        pr.pressure = pr_data.get("pressure")
        pr.flip_axes = pr_data.get("flip_axes", pr.flip_axes)
        pr.cut_off = pr_data.get("cut_off", pr.cut_off)
        return pr
