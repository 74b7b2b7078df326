"""
A recorded plot program.

Ops keeps the operations issued against a plot builder as Command
objects, so the same program can be replayed onto any renderer (for
example once as DM/PL for the device and once as SVG for a preview) and
stored as plain data.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, List, Sequence, Tuple, TypeVar
from ..builder import PlotBuilder, MeasuringUnit, Pen

logger = logging.getLogger(__name__)

B = TypeVar("B", bound=PlotBuilder)


class Command(ABC):
    # Names of the constructor arguments, in order. Used for
    # serialization.
    fields: Tuple[str, ...] = ()

    def __repr__(self) -> str:
        return f"<{super().__repr__()} {self.__dict__}"

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.__dict__ == other.__dict__

    @abstractmethod
    def apply_to(self, builder: PlotBuilder) -> PlotBuilder:
        """Issues this command on the given builder."""
        pass

    def is_drawing_command(self) -> bool:
        """Whether this command carries coordinates."""
        return False

    def to_dict(self) -> Dict[str, Any]:
        """Serializes the command to a dictionary."""
        d: Dict[str, Any] = {"type": self.__class__.__name__}
        for name in self.fields:
            d[name] = getattr(self, name)
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Command:
        return cls(*(data[name] for name in cls.fields))


class PlotCommand(Command):
    fields = ("x", "y")

    def __init__(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    def is_drawing_command(self) -> bool:
        return True

    def apply_to(self, builder: PlotBuilder) -> PlotBuilder:
        return builder.plot(self.x, self.y)


class CircleCommand(Command):
    fields = ("x", "y", "r")

    def __init__(self, x: int, y: int, r: int) -> None:
        self.x = x
        self.y = y
        self.r = r

    def is_drawing_command(self) -> bool:
        return True

    def apply_to(self, builder: PlotBuilder) -> PlotBuilder:
        return builder.circle(self.x, self.y, self.r)


class ArcCommand(Command):
    fields = ("x", "y", "degrees")

    def __init__(self, x: int, y: int, degrees: int) -> None:
        self.x = x
        self.y = y
        self.degrees = degrees

    def is_drawing_command(self) -> bool:
        return True

    def apply_to(self, builder: PlotBuilder) -> PlotBuilder:
        return builder.arc(self.x, self.y, self.degrees)


class EllipseCommand(Command):
    fields = ("x", "y", "x1", "y1", "x2", "y2")

    def __init__(
        self, x: int, y: int, x1: int, y1: int, x2: int, y2: int
    ) -> None:
        self.x = x
        self.y = y
        self.x1 = x1
        self.y1 = y1
        self.x2 = x2
        self.y2 = y2

    def is_drawing_command(self) -> bool:
        return True

    def apply_to(self, builder: PlotBuilder) -> PlotBuilder:
        return builder.ellipse(
            self.x, self.y, self.x1, self.y1, self.x2, self.y2
        )


class CurveCommand(Command):
    fields = ("x", "y", "x1", "y1", "points")

    def __init__(
        self, x: int, y: int, x1: int, y1: int, points: Sequence[int] = ()
    ) -> None:
        self.x = x
        self.y = y
        self.x1 = x1
        self.y1 = y1
        self.points: List[int] = list(points)

    def is_drawing_command(self) -> bool:
        return True

    def apply_to(self, builder: PlotBuilder) -> PlotBuilder:
        return builder.curve(self.x, self.y, self.x1, self.y1, *self.points)


class ChangePenCommand(Command):
    fields = ("pen",)

    def __init__(self, pen: int) -> None:
        self.pen = int(pen)

    def apply_to(self, builder: PlotBuilder) -> PlotBuilder:
        return builder.change_pen(self.pen)


class PenUpCommand(Command):
    def apply_to(self, builder: PlotBuilder) -> PlotBuilder:
        return builder.pen_up()


class PenDownCommand(Command):
    def apply_to(self, builder: PlotBuilder) -> PlotBuilder:
        return builder.pen_down()


class SetMeasuringUnitCommand(Command):
    fields = ("unit",)

    def __init__(self, unit: MeasuringUnit) -> None:
        self.unit = unit

    def apply_to(self, builder: PlotBuilder) -> PlotBuilder:
        return builder.set_measuring_unit(self.unit)


class SetVelocityCommand(Command):
    fields = ("velocity",)

    def __init__(self, velocity: int) -> None:
        self.velocity = velocity

    def apply_to(self, builder: PlotBuilder) -> PlotBuilder:
        return builder.velocity(self.velocity)


class SetPressureCommand(Command):
    fields = ("pressure",)

    def __init__(self, pressure: int) -> None:
        self.pressure = pressure

    def apply_to(self, builder: PlotBuilder) -> PlotBuilder:
        return builder.pressure(self.pressure)


class FlipAxesCommand(Command):
    def apply_to(self, builder: PlotBuilder) -> PlotBuilder:
        return builder.flip_axes()


class CutOffCommand(Command):
    def apply_to(self, builder: PlotBuilder) -> PlotBuilder:
        return builder.cut_off()


class RawCommand(Command):
    fields = ("command",)

    def __init__(self, command: str) -> None:
        self.command = command

    def apply_to(self, builder: PlotBuilder) -> PlotBuilder:
        return builder.push_command(self.command)


COMMAND_TYPES = {
    cls.__name__: cls
    for cls in (
        PlotCommand,
        CircleCommand,
        ArcCommand,
        EllipseCommand,
        CurveCommand,
        ChangePenCommand,
        PenUpCommand,
        PenDownCommand,
        SetMeasuringUnitCommand,
        SetVelocityCommand,
        SetPressureCommand,
        FlipAxesCommand,
        CutOffCommand,
        RawCommand,
    )
}


class Ops:
    """
    An ordered list of plot commands.

    The recording methods mirror the PlotBuilder interface and return the
    Ops instance, so a program reads the same whether it is recorded or
    issued on a builder directly. Nothing is validated while recording;
    invalid pens or units are reported by the builder on replay().
    """

    def __init__(self) -> None:
        self.commands: List[Command] = []
        self._commands_ref_for_pyreverse: Command

    def __iter__(self) -> Iterator[Command]:
        return iter(self.commands)

    def __len__(self) -> int:
        return len(self.commands)

    def add(self, command: Command) -> Ops:
        self.commands.append(command)
        return self

    def clear(self) -> None:
        self.commands = []

    def replay(self, builder: B) -> B:
        """
        Issues every recorded command, in order, on the given builder and
        returns the builder.
        """
        for command in self.commands:
            command.apply_to(builder)
        return builder

    def to_dict(self) -> Dict[str, Any]:
        """Serializes the Ops object to a dictionary."""
        return {"commands": [cmd.to_dict() for cmd in self.commands]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Ops:
        """Deserializes a dictionary into an Ops instance."""
        new_ops = cls()
        for cmd_data in data.get("commands", []):
            cmd_type = cmd_data.get("type")
            cmd_cls = COMMAND_TYPES.get(cmd_type)
            if cmd_cls is None:
                logger.warning(
                    "Skipping unknown command type during deserialization:"
                    f" {cmd_type}"
                )
                continue
            new_ops.add(cmd_cls.from_dict(cmd_data))
        return new_ops

    def plot(self, x: int, y: int) -> Ops:
        return self.add(PlotCommand(x, y))

    def circle(self, x: int, y: int, r: int) -> Ops:
        return self.add(CircleCommand(x, y, r))

    def arc(self, x: int, y: int, degrees: int) -> Ops:
        return self.add(ArcCommand(x, y, degrees))

    def ellipse(
        self, x: int, y: int, x1: int, y1: int, x2: int, y2: int
    ) -> Ops:
        return self.add(EllipseCommand(x, y, x1, y1, x2, y2))

    def curve(self, x: int, y: int, x1: int, y1: int, *points: int) -> Ops:
        return self.add(CurveCommand(x, y, x1, y1, points))

    def change_pen(self, pen: int) -> Ops:
        return self.add(ChangePenCommand(pen))

    def flex_cut(self) -> Ops:
        return self.change_pen(Pen.FLEX)

    def regular_cut(self) -> Ops:
        return self.change_pen(Pen.REGULAR)

    def through_cut(self) -> Ops:
        return self.change_pen(Pen.THROUGH)

    def kiss_cut(self) -> Ops:
        return self.change_pen(Pen.KISS)

    def pen_up(self) -> Ops:
        return self.add(PenUpCommand())

    def pen_down(self) -> Ops:
        return self.add(PenDownCommand())

    def set_measuring_unit(self, unit: MeasuringUnit) -> Ops:
        return self.add(SetMeasuringUnitCommand(unit))

    def velocity(self, velocity: int) -> Ops:
        return self.add(SetVelocityCommand(velocity))

    def pressure(self, gram_pressure: int) -> Ops:
        return self.add(SetPressureCommand(gram_pressure))

    def flip_axes(self) -> Ops:
        return self.add(FlipAxesCommand())

    def cut_off(self) -> Ops:
        return self.add(CutOffCommand())

    def push_command(self, command: str) -> Ops:
        return self.add(RawCommand(command))
