from __future__ import annotations

from enum import IntEnum
import random
from typing import Iterable, Iterator

from loguru import logger
import numpy as np

from vehicle_evolver.exceptions import PreconditionError

GENOME_SHAPE: tuple[int, int] = (6, 8)  # rows, columns


class CellKind(IntEnum):
    """Block occupying a single grid cell of a vehicle."""

    EMPTY = 0
    STRUCTURAL = 1
    WHEEL = 2

    @property
    def glyph(self) -> str:
        return _GLYPHS[self]


_GLYPHS: dict[CellKind, str] = {
    CellKind.EMPTY: "◻",
    CellKind.STRUCTURAL: "◼",
    CellKind.WHEEL: "⭕",
}

# Relative weights for random initialisation (normalised by random.choices).
RANDOM_CELL_WEIGHTS: dict[CellKind, float] = {
    CellKind.EMPTY: 0.4,
    CellKind.STRUCTURAL: 1.0,
    CellKind.WHEEL: 0.3,
}

Coordinate = tuple[int, int]


def choose_mutation_sites(
    shape: tuple[int, int], amount: int, rng: random.Random
) -> list[Coordinate]:
    """Pick ``min(amount, rows * columns)`` distinct cells uniformly at random."""
    if amount < 0:
        raise PreconditionError(f"mutation amount must be >= 0, got {amount}")
    rows, columns = shape
    coordinates = [(r, c) for r in range(rows) for c in range(columns)]
    return rng.sample(coordinates, min(amount, len(coordinates)))


class Genome:
    """Immutable grid of :class:`CellKind` values.

    Equality and hashing are structural over the full grid, so two vehicles
    built independently with the same cells are the same fitness-cache key.
    """

    __slots__ = ("_cells", "_hash")

    def __init__(self, cells: np.ndarray | Iterable[Iterable[int]]):
        raw = np.asarray(cells)
        if raw.size and (
            raw.dtype.kind not in "iub"
            or int(raw.min()) < min(CellKind)
            or int(raw.max()) > max(CellKind)
        ):
            raise PreconditionError(
                f"unknown cell kind in grid (dtype {raw.dtype}, range "
                f"{raw.min()}..{raw.max()})"
            )
        grid = raw.astype(np.uint8)
        if grid.ndim != 2 or grid.shape[0] < 1 or grid.shape[1] < 2:
            raise PreconditionError(
                f"genome grid must be 2-D with at least 1x2 cells, got shape {grid.shape}"
            )
        grid.setflags(write=False)
        self._cells = grid
        self._hash = hash((grid.shape, grid.tobytes()))

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def random(
        cls, rng: random.Random | None = None, shape: tuple[int, int] = GENOME_SHAPE
    ) -> Genome:
        rng = rng or random.Random()
        kinds = list(RANDOM_CELL_WEIGHTS)
        weights = [RANDOM_CELL_WEIGHTS[k] for k in kinds]
        drawn = rng.choices(kinds, weights=weights, k=shape[0] * shape[1])
        return cls(np.array(drawn, dtype=np.uint8).reshape(shape))

    @classmethod
    def filled(cls, kind: CellKind, shape: tuple[int, int] = GENOME_SHAPE) -> Genome:
        return cls(np.full(shape, int(kind), dtype=np.uint8))

    @classmethod
    def empty(cls, shape: tuple[int, int] = GENOME_SHAPE) -> Genome:
        return cls.filled(CellKind.EMPTY, shape)

    @classmethod
    def from_cells(
        cls, cells: Iterable[CellKind], shape: tuple[int, int] = GENOME_SHAPE
    ) -> Genome:
        """Build a genome from a flat row-major sequence of cell kinds."""
        flat = np.array([int(c) for c in cells], dtype=np.uint8)
        if flat.size != shape[0] * shape[1]:
            raise PreconditionError(
                f"expected {shape[0] * shape[1]} cells for shape {shape}, got {flat.size}"
            )
        return cls(flat.reshape(shape))

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def shape(self) -> tuple[int, int]:
        return self._cells.shape  # type: ignore[return-value]

    @property
    def rows(self) -> int:
        return self._cells.shape[0]

    @property
    def columns(self) -> int:
        return self._cells.shape[1]

    @property
    def cells(self) -> np.ndarray:
        """Read-only view of the underlying grid."""
        return self._cells

    def __getitem__(self, coordinate: Coordinate) -> CellKind:
        return CellKind(int(self._cells[coordinate]))

    def iter_cells(self) -> Iterator[tuple[Coordinate, CellKind]]:
        for (r, c), value in np.ndenumerate(self._cells):
            yield (r, c), CellKind(int(value))

    def count(self, kind: CellKind) -> int:
        return int(np.count_nonzero(self._cells == int(kind)))

    # ------------------------------------------------------------------
    # Variation
    # ------------------------------------------------------------------

    def mutate(self, amount: int, rng: random.Random | None = None) -> Genome:
        """Return a copy with ``amount`` distinct cells redrawn uniformly.

        A redrawn cell may keep its old kind.
        """
        rng = rng or random.Random()
        grid = self._cells.copy()
        kinds = list(CellKind)
        for r, c in choose_mutation_sites(self.shape, amount, rng):
            new_kind = rng.choice(kinds)
            logger.debug(
                "[Genome] mutated at {},{} from {} to {}",
                r,
                c,
                CellKind(int(grid[r, c])).glyph,
                new_kind.glyph,
            )
            grid[r, c] = int(new_kind)
        return Genome(grid)

    def one_point_crossover(self, other: Genome, cut: int) -> tuple[Genome, Genome]:
        """Swap the column range ``[cut, columns)`` between two genomes."""
        self._check_compatible(other)
        if not 1 <= cut < self.columns:
            raise PreconditionError(
                f"crossover point must be in [1, {self.columns}), got {cut}"
            )
        brother = self._cells.copy()
        brother[:, cut:] = other._cells[:, cut:]
        sister = other._cells.copy()
        sister[:, cut:] = self._cells[:, cut:]
        return Genome(brother), Genome(sister)

    def uniform_crossover(
        self, other: Genome, rng: random.Random | None = None
    ) -> tuple[Genome, Genome]:
        """Per-cell fair coin; the two children are exact complements."""
        self._check_compatible(other)
        rng = rng or random.Random()
        mask = np.array(
            [rng.random() < 0.5 for _ in range(self._cells.size)], dtype=bool
        ).reshape(self.shape)
        first = np.where(mask, self._cells, other._cells)
        second = np.where(mask, other._cells, self._cells)
        return Genome(first), Genome(second)

    def _check_compatible(self, other: Genome) -> None:
        if self.shape != other.shape:
            raise PreconditionError(
                f"cannot cross genomes of shapes {self.shape} and {other.shape}"
            )

    # ------------------------------------------------------------------
    # Value semantics
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Genome):
            return NotImplemented
        return self._hash == other._hash and np.array_equal(self._cells, other._cells)

    def __hash__(self) -> int:
        return self._hash

    def __copy__(self) -> Genome:
        return self

    def __deepcopy__(self, memo: dict) -> Genome:
        return self

    def __repr__(self) -> str:
        flat = "".join(str(int(v)) for v in self._cells.flat)
        return f"Genome(shape={self.shape}, cells={flat})"

    def __str__(self) -> str:
        return "\n".join(
            "".join(CellKind(int(v)).glyph for v in row) for row in self._cells
        )
