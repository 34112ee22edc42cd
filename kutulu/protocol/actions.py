from enum import Enum
from typing import Optional
from typeguard import typechecked

from kutulu.map.grid import Coord


class ActionKind(Enum):
    MOVE = "MOVE"
    WAIT = "WAIT"
    LIGHT = "LIGHT"
    PLAN = "PLAN"
    YELL = "YELL"


@typechecked
class Action:
    """One command for the judge. Only MOVE carries a target cell."""

    def __init__(self, kind: ActionKind, message: str = "", target: Optional[Coord] = None) -> None:
        if (kind is ActionKind.MOVE) != (target is not None):
            raise ValueError(f"{kind.value} {'needs' if kind is ActionKind.MOVE else 'takes no'} target")
        self.kind = kind
        self.message = message
        self.target = target

    @classmethod
    def move(cls, target: Coord, message: str = "") -> "Action":
        return cls(ActionKind.MOVE, message, target)

    @classmethod
    def wait(cls, message: str = "") -> "Action":
        return cls(ActionKind.WAIT, message)

    def to_command(self) -> str:
        """
        Format the action as a protocol line, without the trailing newline.

        Returns:
            str: e.g. ``"MOVE 3 4 Avoiding minion"`` or ``"LIGHT"``.
        """
        parts = [self.kind.value]
        if self.target is not None:
            parts += [str(self.target[0]), str(self.target[1])]
        if self.message:
            parts.append(self.message)
        return " ".join(parts)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Action) and (self.kind, self.target, self.message) == (other.kind, other.target, other.message)

    def __repr__(self) -> str:
        return f"Action({self.to_command()!r})"
