"""Grid ⇄ world conversion and play-field sizing."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

import pygame

from .config import MIN_GRID_CELLS, ConfigError

logger = logging.getLogger(__name__)

Cell = tuple[int, int]


@dataclass(frozen=True, slots=True)
class GridDimensions:
    width: int
    height: int
    cell_size: float
    offset: tuple[float, float] = (0.0, 0.0)

    @property
    def degenerate(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def contains(self, cell: Cell) -> bool:
        return 0 <= cell[0] < self.width and 0 <= cell[1] < self.height

    def wrap(self, cell: Cell) -> Cell:
        """Fold an arbitrary cell back onto the play field."""
        return cell[0] % self.width, cell[1] % self.height


class GridCoordinateSystem:
    """Owns the live :class:`GridDimensions` for one viewport.

    Entities ask for ``dims`` on every tick instead of keeping their own copy,
    so a resize is picked up by everyone on the next update.
    """

    def __init__(
        self,
        viewport_size: tuple[int, int],
        cell_size: float,
        min_cells: int = MIN_GRID_CELLS,
    ) -> None:
        self.min_cells = min_cells
        self.viewport_size = (0, 0)
        self.dims = self.recompute(viewport_size, cell_size)

    def recompute(
        self, viewport_size: tuple[int, int], cell_size: float
    ) -> GridDimensions:
        """Size the grid to the viewport and center it."""
        if cell_size <= 0:
            raise ConfigError(f"cell_size must be positive, got {cell_size}")
        view_w, view_h = viewport_size
        width = self._fit(view_w, cell_size)
        height = self._fit(view_h, cell_size)
        offset = (
            (view_w - width * cell_size) / 2,
            (view_h - height * cell_size) / 2,
        )
        self.viewport_size = (view_w, view_h)
        self.dims = GridDimensions(width, height, cell_size, offset)
        logger.debug(
            "Grid recomputed: %dx%d cells of %spx, offset %s",
            width,
            height,
            cell_size,
            offset,
        )
        return self.dims

    def _fit(self, view: float, cell_size: float) -> int:
        """At least ``min_cells``, but never more cells than the viewport holds.

        A viewport narrower than one cell is degenerate and gets the minimum.
        """
        fit = int(view // cell_size)
        if fit <= 0:
            return self.min_cells
        return min(max(self.min_cells, fit), fit)

    def to_world(self, cell: Cell, center: bool = False) -> pygame.Vector2:
        dims = self.dims
        pos = pygame.Vector2(
            dims.offset[0] + cell[0] * dims.cell_size,
            dims.offset[1] + cell[1] * dims.cell_size,
        )
        if center:
            pos += pygame.Vector2(dims.cell_size / 2, dims.cell_size / 2)
        return pos

    def to_grid(self, world_pos: pygame.Vector2 | tuple[float, float]) -> pygame.Vector2:
        dims = self.dims
        return pygame.Vector2(
            (world_pos[0] - dims.offset[0]) / dims.cell_size,
            (world_pos[1] - dims.offset[1]) / dims.cell_size,
        )

    def clamp_to_viewport(self, world_pos: pygame.Vector2) -> pygame.Vector2:
        """Keep a cell's top-left corner inside the visible area."""
        view_w, view_h = self.viewport_size
        size = self.dims.cell_size
        return pygame.Vector2(
            min(max(world_pos.x, 0.0), max(0.0, view_w - size)),
            min(max(world_pos.y, 0.0), max(0.0, view_h - size)),
        )

    def random_cell(self, rng: random.Random) -> Cell:
        """Uniform cell in the current grid, 10x10 when the grid is degenerate."""
        dims = self.dims
        width = dims.width if dims.width > 0 else MIN_GRID_CELLS
        height = dims.height if dims.height > 0 else MIN_GRID_CELLS
        return rng.randrange(width), rng.randrange(height)
