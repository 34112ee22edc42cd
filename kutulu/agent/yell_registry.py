from typing import Iterable, List, Set
from typeguard import typechecked

from kutulu.core.console import *
from kutulu.game.entities import Effect, EffectKind


@typechecked
class YellRegistry:
    """
    Explorers we have already yelled at during this match.

    Created empty when the match starts and owned by the tick loop. Ids are
    only ever added, never removed, because a second yell on the same explorer
    has no effect.
    """

    def __init__(self) -> None:
        self._yelled: Set[int] = set()
        self._order: List[int] = []

    def record(self, explorer_id: int) -> bool:
        """
        Remember that ``explorer_id`` has been yelled at.

        Returns:
            bool: True if the id was new.
        """
        if explorer_id in self._yelled:
            return False
        self._yelled.add(explorer_id)
        self._order.append(explorer_id)
        debug(f"Explorer {explorer_id} added to yell registry")
        return True

    def record_effects(self, effects: Iterable[Effect], my_id: int) -> int:
        """
        Register the targets of every yell we cast.

        Args:
            effects (Iterable[Effect]): Effects active this tick.
            my_id (int): Our explorer id.

        Returns:
            int: Number of new ids recorded.
        """
        added = 0
        for effect in effects:
            if effect.kind is EffectKind.YELL and effect.caster == my_id and self.record(effect.target):
                added += 1
        return added

    def already_yelled(self, explorer_id: int) -> bool:
        return explorer_id in self._yelled

    def __len__(self) -> int:
        return len(self._order)

    def __repr__(self) -> str:
        return f"YellRegistry({self._order})"
