"""Shared wrap-around movement for every entity that lives on the grid."""

from __future__ import annotations

from typing import Iterator

from .config import Direction
from .events import EventDispatcher, Grew, Moved
from .grid import Cell, GridDimensions


def wrap_step(cell: Cell, direction: Direction, dims: GridDimensions) -> Cell:
    """Move one cell and re-enter from the opposite edge when leaving the grid."""
    dx, dy = direction.vector
    x = cell[0] + dx
    y = cell[1] + dy
    if x >= dims.width:
        x = 0
    elif x < 0:
        x = dims.width - 1
    if y >= dims.height:
        y = 0
    elif y < 0:
        y = dims.height - 1
    return x, y


class GridBody:
    """Ordered body of cells with a heading and a pending-growth flag.

    Controllers own one of these rather than inheriting from it. The head is
    ``body[0]`` and the body is never empty.
    """

    def __init__(
        self,
        entity_id: str,
        start: Cell,
        direction: Direction,
        dispatcher: EventDispatcher | None = None,
    ) -> None:
        self.entity_id = entity_id
        self.body: list[Cell] = [start]
        self.direction = direction
        self.pending_growth = False
        self._dispatcher = dispatcher

    def __len__(self) -> int:
        return len(self.body)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.body)

    @property
    def head(self) -> Cell:
        return self.body[0]

    @property
    def tail(self) -> Cell:
        return self.body[-1]

    def occupies(self, cell: Cell) -> bool:
        return cell in self.body

    def grow(self) -> None:
        self.pending_growth = True

    def next_head(self, dims: GridDimensions) -> Cell:
        return wrap_step(self.head, self.direction, dims)

    def advance(self, new_head: Cell) -> bool:
        """Insert ``new_head`` and either keep or drop the tail.

        Returns True when the tail was kept (the body grew this step).
        """
        self.body.insert(0, new_head)
        grew = self.pending_growth
        if grew:
            self.pending_growth = False
        else:
            self.body.pop()
        self._emit(Moved(self.entity_id, new_head))
        if grew:
            self._emit(Grew(self.entity_id, len(self.body)))
        return grew

    def step(self, dims: GridDimensions) -> Cell:
        new_head = self.next_head(dims)
        self.advance(new_head)
        return new_head

    def reset(self, cell: Cell, direction: Direction) -> None:
        self.body = [cell]
        self.direction = direction
        self.pending_growth = False

    def wrap_into(self, dims: GridDimensions) -> None:
        self.body = [dims.wrap(cell) for cell in self.body]

    def _emit(self, event) -> None:
        if self._dispatcher is not None:
            self._dispatcher.emit(event)
