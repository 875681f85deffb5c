from abc import ABC, abstractmethod
from typing import Iterator, Sequence, TypeVar

T = TypeVar("T")


class ParentSelector(ABC):
    """Abstract base class for pairing parents for crossover."""

    @abstractmethod
    def create_parent_iterator(self, available_parents: Sequence[T]) -> Iterator[tuple[T, T]]:
        """Create an iterator that yields (father, mother) pairs.

        Args:
            available_parents: Parents in selection order

        Returns:
            Iterator over parent pairs
        """


class SlidingWindowParentSelector(ParentSelector):
    """Pairs every parent with its successor (window 2, stride 1).

    ``n`` parents give ``n - 1`` overlapping pairs, so every inner parent
    breeds twice.
    """

    def create_parent_iterator(self, available_parents: Sequence[T]) -> Iterator[tuple[T, T]]:
        for i in range(len(available_parents) - 1):
            yield available_parents[i], available_parents[i + 1]
