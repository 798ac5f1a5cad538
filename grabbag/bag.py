from abc import ABC, abstractmethod
import logging
import numbers
from typing import Generic, Iterable, Iterator, Optional, TypeVar

import numpy as np

T = TypeVar("T")


def make_random_state(seed: Optional[int] = None) -> np.random.RandomState:
    """
    Build a RandomState for any int seed, including negative and very large ones.

    The seed is mapped to a non-negative int (0, -1, 1, -2, ... -> 0, 1, 2, 3, ...)
    and expanded through a SeedSequence, so distinct seeds give distinct streams.
    """
    if seed is None:
        return np.random.RandomState()
    if isinstance(seed, bool) or not isinstance(seed, numbers.Integral):
        raise TypeError(f"seed must be an int, got {type(seed)}")

    seed = int(seed)
    entropy = 2 * seed if seed >= 0 else -2 * seed - 1
    return np.random.RandomState(np.random.SeedSequence(entropy).generate_state(4))


class BagSampler(ABC, Generic[T]):
    """
    Sampling without replacement with automatic refill.

    A sampler holds a fixed reference set of items and a "bag" of items still
    to be drawn in the current cycle. Each draw removes one item from the bag;
    once the bag is empty the next draw refills it from the reference set and
    shuffles it again.

    Design principles:
    - Every sampler owns its random state; nothing is shared between instances
    - A seeded sampler is fully reproducible for the same sequence of calls
    - Cycle boundaries are implicit: refill happens on the draw after the bag empties
    - No internal locking; share an instance across threads only behind a lock

    Subclasses decide what a refill puts in the bag (_build_bag) and how an
    item is picked from it (_pick_index).
    """

    def __init__(self, items: Iterable[T], seed: Optional[int] = None):
        original_items = list(items)
        if not original_items:
            raise EmptyItemSetError(f"{type(self).__name__} needs at least one item")

        self._original_items: list[T] = original_items
        self._current_bag: list[T] = []
        self.seed = seed
        self._rng = make_random_state(seed)

    @property
    def original_items(self) -> tuple[T, ...]:
        """The reference item set, in construction order."""
        return tuple(self._original_items)

    @property
    @abstractmethod
    def cycle_size(self) -> int:
        """Number of draws in one full cycle."""
        pass

    @abstractmethod
    def _build_bag(self) -> list[T]:
        """Return the unshuffled contents of a fresh bag."""
        pass

    @abstractmethod
    def _pick_index(self) -> int:
        """
        Choose the position in the (non-empty) bag of the next item.

        Called after any needed refill, so the bag always holds at least one item.
        """
        pass

    def next(self) -> T:
        """Draw the next item, refilling the bag first if it is empty."""
        if not self._current_bag:
            self._refill()

        index = self._pick_index()
        return self._current_bag.pop(index)

    def draw(self, count: int) -> list[T]:
        """Draw `count` items in a row."""
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        return [self.next() for _ in range(count)]

    def remaining_count(self) -> int:
        """Items left in the current cycle. 0 means the next draw refills."""
        return len(self._current_bag)

    def peek_remaining(self) -> list[T]:
        """Snapshot of the items left in the current cycle, in bag order."""
        return list(self._current_bag)

    def reset(self):
        """Empty the bag so the next draw starts a fresh cycle."""
        self._current_bag.clear()

    def replace_items(self, items: Iterable[T]):
        """
        Swap in a new reference item set and start a fresh cycle.

        Raises:
            EmptyItemSetError: If `items` is empty. The sampler is left unchanged.
        """
        new_items = list(items)
        if not new_items:
            raise EmptyItemSetError(f"{type(self).__name__} needs at least one item")
        self._original_items = new_items
        self.reset()

    def _refill(self):
        bag = self._build_bag()
        self._shuffle(bag)
        self._current_bag = bag
        logging.debug(f"{type(self).__name__} refilled bag with {len(bag)} items")

    def _shuffle(self, bag: list[T]):
        """In-place Fisher-Yates shuffle driven by this sampler's random state."""
        for n in range(len(bag) - 1, 0, -1):
            k = int(self._rng.randint(n + 1))
            bag[k], bag[n] = bag[n], bag[k]

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        return self.next()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(items={len(self._original_items)}, "
            f"remaining={len(self._current_bag)}, seed={self.seed})"
        )


class GrabBagError(Exception):
    """Base class for sampler errors."""
    pass


class EmptyItemSetError(GrabBagError, ValueError):
    """Raised when a sampler is given an empty item set."""
    pass


class InvalidWeightError(GrabBagError, ValueError):
    """Raised when a weight is not a usable number."""
    pass


class NoDrawableItemsError(GrabBagError, RuntimeError):
    """Raised when a refill would leave the bag empty (every weight rounds to zero)."""
    pass
