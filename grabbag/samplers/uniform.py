from typing import Iterable, Optional, TypeVar

from grabbag.bag import BagSampler

T = TypeVar("T")


class UniformBagSampler(BagSampler[T]):
    """
    Equal-chance sampling: every item appears exactly once per cycle.

    Each cycle is a fresh shuffle of the full item set. Items are then picked
    from the bag at a uniformly random position, so interleaving draws with
    remaining_count() / peek_remaining() never needs a separate cursor.

    Example:
        sampler = UniformBagSampler(["A", "B", "C"], seed=42)
        sampler.draw(3)   # some permutation of A, B, C
        sampler.next()    # starts a new cycle
    """

    def __init__(self, items: Iterable[T], seed: Optional[int] = None):
        """
        Initialize uniform bag sampler.

        Args:
            items: Items to draw from. Duplicates are kept and drawn once each per cycle.
            seed: Random seed for reproducibility. If None, output is non-deterministic.

        Raises:
            EmptyItemSetError: If `items` is empty.
        """
        super().__init__(items, seed=seed)

    @property
    def cycle_size(self) -> int:
        return len(self._original_items)

    def _build_bag(self) -> list[T]:
        return list(self._original_items)

    def _pick_index(self) -> int:
        return int(self._rng.randint(len(self._current_bag)))
