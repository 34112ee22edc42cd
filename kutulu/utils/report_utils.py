from typing import Optional
from rich.console import Console
from rich.table import Table

from kutulu.agent.yell_registry import YellRegistry
from kutulu.game.entities import Snapshot
from kutulu.map.grid import Grid
from kutulu.protocol.actions import Action

console = Console(stderr=True)


def render_grid(grid: Grid, snapshot: Optional[Snapshot] = None) -> None:
    """
    Prints the grid, overlaying explorers and minions when a snapshot is given.
    """
    overlay = {}
    if snapshot is not None:
        for minion in snapshot.spawning_minions:
            overlay[minion.coord] = "[yellow]s[/]"
        for minion in snapshot.slashers:
            overlay[minion.coord] = "[bold red]S[/]"
        for minion in snapshot.wanderers:
            overlay[minion.coord] = "[red]W[/]"
        for ally in snapshot.allies:
            overlay[ally.coord] = "[cyan]A[/]"
        overlay[snapshot.me.coord] = "[bold green]@[/]"

    table = Table(title=f"Grid {grid.width}x{grid.height}", show_header=False, box=None)
    table.add_column("y", style="dim", justify="right")
    table.add_column("cells")
    for y, row in enumerate(grid.rows()):
        cells = [overlay.get((x, y), char) for x, char in enumerate(row)]
        table.add_row(str(y), "".join(cells))
    console.print(table)


def render_snapshot(tick: int, snapshot: Snapshot, action: Action, registry: YellRegistry) -> None:
    """
    Prints one row per entity of the tick, then the chosen action.
    """
    table = Table(title=f"Tick {tick}")
    table.add_column("Entity", style="cyan")
    table.add_column("Id", justify="right")
    table.add_column("Coord", justify="center")
    table.add_column("Details")

    me = snapshot.me
    table.add_row("[bold green]me[/]", str(me.id), str(me.coord), f"sanity={me.sanity} plans={me.plans_remaining} lights={me.lights_remaining}")
    for ally in snapshot.allies:
        yelled = " yelled" if registry.already_yelled(ally.id) else ""
        table.add_row("ally", str(ally.id), str(ally.coord), f"sanity={ally.sanity}{yelled}")
    for minion in snapshot.wanderers + snapshot.slashers + snapshot.spawning_minions:
        table.add_row(f"[red]{minion.kind.value}[/]", str(minion.id), str(minion.coord), f"{minion.state.name} target={minion.target} countdown={minion.countdown}")
    for effect in snapshot.effects:
        table.add_row(f"[magenta]{effect.kind.name.lower()}[/]", str(effect.id), str(effect.coord), f"caster={effect.caster} remaining={effect.remaining}")
    console.print(table)
    console.print(f"[bold]Action:[/] {action.to_command()}")
