from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional
from typeguard import typechecked

from kutulu.map.grid import Coord


class MinionState(IntEnum):
    SPAWNING = 0
    WANDERING = 1
    STALKING = 2
    RUSHING = 3
    STUNNED = 4


class MinionKind(Enum):
    WANDERER = "wanderer"
    SLASHER = "slasher"
    SPAWNING_MINION = "spawning_minion"


class EffectKind(Enum):
    PLAN = "EFFECT_PLAN"
    LIGHT = "EFFECT_LIGHT"
    SHELTER = "EFFECT_SHELTER"
    YELL = "EFFECT_YELL"


@typechecked
class Explorer:
    """An explorer as seen this tick: ourselves or a teammate."""

    def __init__(self, id: int, coord: Coord, sanity: int, plans_remaining: int = 0, lights_remaining: int = 0) -> None:
        self.id = id
        self.coord = coord
        self.sanity = sanity
        self.plans_remaining = plans_remaining
        self.lights_remaining = lights_remaining

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "coord": self.coord,
            "sanity": self.sanity,
            "plans_remaining": self.plans_remaining,
            "lights_remaining": self.lights_remaining,
        }

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Explorer) and self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"Explorer(id={self.id}, coord={self.coord}, sanity={self.sanity}, plans={self.plans_remaining}, lights={self.lights_remaining})"


@typechecked
class Minion:
    """
    A hostile entity on the grid.

    Threat logic only ever reads ``coord``. The state tag, target and countdown
    are carried for diagnostics.
    """

    kind: MinionKind

    def __init__(self, id: int, coord: Coord, state: MinionState, target: int = -1, countdown: int = 0) -> None:
        """
        Initialize a minion.

        Args:
            id (int): Entity id from the judge.
            coord (Coord): Current position.
            state (MinionState): Current behaviour state.
            target (int): Id of the explorer it is after, -1 for none.
            countdown (int): Turns until the next spawn, recall or state change.
        """
        self.id = id
        self.coord = coord
        self.state = state
        self.target = target
        self.countdown = countdown

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "id": self.id,
            "coord": self.coord,
            "state": self.state.name,
            "target": self.target,
            "countdown": self.countdown,
        }

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Minion) and self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash((self.kind, self.id))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id}, coord={self.coord}, state={self.state.name})"


class Wanderer(Minion):
    kind = MinionKind.WANDERER


class Slasher(Minion):
    kind = MinionKind.SLASHER


class SpawningMinion(Minion):
    kind = MinionKind.SPAWNING_MINION


@typechecked
class Effect:
    """An active effect on the board. ``target`` is only set for yells."""

    def __init__(self, kind: EffectKind, id: int, coord: Coord, remaining: int, caster: int, target: int = -1) -> None:
        self.kind = kind
        self.id = id
        self.coord = coord
        self.remaining = remaining
        self.caster = caster
        self.target = target

    def __repr__(self) -> str:
        return f"Effect(kind={self.kind.name}, caster={self.caster}, target={self.target}, remaining={self.remaining})"


@typechecked
class Snapshot:
    """
    Everything the judge told us about one tick.

    Built once per tick by the parser and never modified afterwards.
    """

    def __init__(
        self,
        me: Explorer,
        allies: Optional[List[Explorer]] = None,
        wanderers: Optional[List[Wanderer]] = None,
        slashers: Optional[List[Slasher]] = None,
        spawning_minions: Optional[List[SpawningMinion]] = None,
        effects: Optional[List[Effect]] = None,
    ) -> None:
        self.me = me
        self.allies = allies if allies is not None else []
        self.wanderers = wanderers if wanderers is not None else []
        self.slashers = slashers if slashers is not None else []
        self.spawning_minions = spawning_minions if spawning_minions is not None else []
        self.effects = effects if effects is not None else []

    def minions_of(self, kind: MinionKind) -> List[Minion]:
        """Live minions of one kind."""
        if kind is MinionKind.WANDERER:
            return list(self.wanderers)
        if kind is MinionKind.SLASHER:
            return list(self.slashers)
        return list(self.spawning_minions)

    def effects_of(self, kind: EffectKind, caster: Optional[int] = None) -> List[Effect]:
        return [e for e in self.effects if e.kind is kind and (caster is None or e.caster == caster)]

    def __repr__(self) -> str:
        return (
            f"Snapshot(me={self.me.id}, allies={len(self.allies)}, wanderers={len(self.wanderers)}, "
            f"slashers={len(self.slashers)}, spawning={len(self.spawning_minions)}, effects={len(self.effects)})"
        )
