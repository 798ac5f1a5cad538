import logging
import math
import numbers
from typing import Callable, Hashable, Iterable, Mapping, Optional, TypeVar

from grabbag.bag import BagSampler, InvalidWeightError, NoDrawableItemsError
from grabbag.constants import (
    DEFAULT_WEIGHT,
    INVALID_WEIGHT_POLICIES,
    INVALID_WEIGHTS_CLAMP,
    INVALID_WEIGHTS_REJECT,
    MAX_REPLICAS,
)

T = TypeVar("T")

# Marks an item that is not in the item set, or whose key cannot be looked up
_UNKNOWN = object()


def validate_weight(item, weight, policy: str = INVALID_WEIGHTS_REJECT) -> float:
    """
    Check a single weight and return it as a float.

    Args:
        item: Item the weight belongs to (only used in error messages)
        weight: The weight to check
        policy: "reject" raises on negative/NaN weights, "clamp" turns them into 0.0

    Returns:
        The weight as a float

    Raises:
        InvalidWeightError: If the weight is not numeric, is infinite, is
                            negative/NaN under the "reject" policy, or would put
                            more than MAX_REPLICAS copies in the bag
    """
    if isinstance(weight, bool) or not isinstance(weight, numbers.Real):
        raise InvalidWeightError(f"Weight for {item!r} must be numeric, got {type(weight)}")

    weight = float(weight)
    if math.isinf(weight):
        raise InvalidWeightError(f"Weight for {item!r} must be finite, got {weight}")

    if math.isnan(weight) or weight < 0:
        if policy == INVALID_WEIGHTS_CLAMP:
            logging.debug(f"Clamping weight {weight} for {item!r} to 0.0")
            return 0.0
        raise InvalidWeightError(f"Weight for {item!r} must be non-negative, got {weight}")

    if replicas_for(weight) > MAX_REPLICAS:
        raise InvalidWeightError(
            f"Weight for {item!r} would place more than {MAX_REPLICAS} copies in the bag, got {weight}"
        )

    return weight


def replicas_for(weight: float) -> int:
    """Copies of an item placed in the bag per cycle (round half to even, never negative)."""
    return max(int(round(weight)), 0)


class WeightedBagSampler(BagSampler[T]):
    """
    Weighted sampling without replacement over a replicated bag.

    On refill every item is put in the bag round(weight) times, then the bag is
    shuffled. Draws pick from the bag with probability proportional to each
    copy's current weight and remove the picked copy. An item therefore shows
    up at most round(weight) times per cycle, and exactly that many times over
    a fully drained cycle.

    Weights are quantized: an item with weight 0.4 gets no copies and is never
    drawn, while weights 0.5 and 2.5 round to 0 and 2 (round half to even).

    Weight changes take effect for replica counts at the next refill. Copies
    already in the bag are picked using the current weights, and copies whose
    weight has dropped to zero are skipped.

    Example:
        sampler = WeightedBagSampler(["A", "B"], {"A": 3.0, "B": 1.0}, seed=7)
        sampler.draw(4)   # three "A" and one "B", in shuffled order
    """

    def __init__(
        self,
        items: Iterable[T],
        weights: Optional[Mapping[Hashable, float]] = None,
        seed: Optional[int] = None,
        invalid_weights: str = INVALID_WEIGHTS_REJECT,
        key: Optional[Callable[[T], Hashable]] = None,
    ):
        """
        Initialize weighted bag sampler.

        Args:
            items: Items to draw from
            weights: Dict mapping item keys to weights. Items not in the dict get
                     weight 1.0, entries for unknown items are ignored.
                     Example: {"common": 5.0, "rare": 1.0, "disabled": 0.0}
            seed: Random seed for reproducibility. If None, output is non-deterministic.
            invalid_weights: "reject" raises InvalidWeightError on negative or NaN
                             weights, "clamp" treats them as 0.0
            key: Optional function mapping an item to the hashable key its weight
                 is stored under. Defaults to the item itself.

        Raises:
            EmptyItemSetError: If `items` is empty
            InvalidWeightError: If a weight is invalid under the chosen policy
            ValueError: If `invalid_weights` is not a known policy
        """
        if invalid_weights not in INVALID_WEIGHT_POLICIES:
            raise ValueError(
                f"Unknown invalid_weights policy: {invalid_weights}. "
                f"Expected one of {INVALID_WEIGHT_POLICIES}"
            )

        super().__init__(items, seed=seed)
        self.invalid_weights = invalid_weights
        self._key = key or (lambda item: item)
        self._weights = self._build_weights(self._original_items, weights or {}, {})

    def _build_weights(
        self,
        items: list[T],
        new_weights: Mapping[Hashable, float],
        previous: Mapping[Hashable, float],
    ) -> dict[Hashable, float]:
        weights = {}
        for item in items:
            item_key = self._key(item)
            if item_key in weights:
                continue
            if item_key in new_weights:
                weights[item_key] = validate_weight(item, new_weights[item_key], self.invalid_weights)
            else:
                weights[item_key] = previous.get(item_key, DEFAULT_WEIGHT)
        return weights

    def _known_key(self, item):
        """Weight key of `item`, or _UNKNOWN if the item is not in the item set."""
        try:
            item_key = self._key(item)
            if item_key in self._weights:
                return item_key
        except (TypeError, KeyError, AttributeError):
            # Unhashable item, or one the key function cannot read
            pass
        return _UNKNOWN

    @property
    def weights(self) -> dict[Hashable, float]:
        """Snapshot of the weight map, keyed by item key."""
        return dict(self._weights)

    @property
    def cycle_size(self) -> int:
        """Number of draws in a full cycle at the current weights."""
        return sum(replicas_for(self._weights[self._key(item)]) for item in self._original_items)

    def get_weight(self, item: T) -> float:
        """Weight of `item`, or 0.0 if it is not in the item set."""
        item_key = self._known_key(item)
        if item_key is _UNKNOWN:
            return 0.0
        return self._weights[item_key]

    def replica_count(self, item: T) -> int:
        """Copies of `item` the next refill will put in the bag (per occurrence in the item set)."""
        return replicas_for(self.get_weight(item))

    def update_weight(self, item: T, new_weight: float):
        """
        Change the weight of one item.

        Items outside the item set are ignored rather than rejected.

        Raises:
            InvalidWeightError: If `new_weight` is invalid under the sampler's policy
        """
        item_key = self._known_key(item)
        if item_key is _UNKNOWN:
            logging.debug(f"Ignoring weight update for unknown item {item!r}")
            return
        self._weights[item_key] = validate_weight(item, new_weight, self.invalid_weights)

    def update_weights(self, new_weights: Mapping[Hashable, float]):
        """
        Change several weights at once, keyed by item key.

        Unknown keys are ignored. Every known entry is validated before any
        weight is changed, so an invalid entry leaves the weight map untouched.

        Raises:
            InvalidWeightError: If any known entry is invalid under the sampler's policy
        """
        validated = {}
        for item_key, weight in new_weights.items():
            if item_key not in self._weights:
                logging.debug(f"Ignoring weight update for unknown item {item_key!r}")
                continue
            validated[item_key] = validate_weight(item_key, weight, self.invalid_weights)
        self._weights.update(validated)

    def replace_items(self, items: Iterable[T], weights: Optional[Mapping[Hashable, float]] = None):
        """
        Swap in a new item set and start a fresh cycle.

        Items that were already known keep their weight unless `weights`
        overrides it; new items default to 1.0; weights of dropped items are forgotten.

        Raises:
            EmptyItemSetError: If `items` is empty. The sampler is left unchanged.
            InvalidWeightError: If a weight is invalid. The sampler is left unchanged.
        """
        new_items = list(items)
        new_weights = self._build_weights(new_items, weights or {}, self._weights)
        super().replace_items(new_items)
        self._weights = new_weights

    def _build_bag(self) -> list[T]:
        bag = []
        for item in self._original_items:
            bag.extend([item] * replicas_for(self._weights[self._key(item)]))
        if not bag:
            raise NoDrawableItemsError(
                f"Every weight rounds to zero replicas; nothing to draw from {len(self._original_items)} items"
            )
        return bag

    def _bag_weights(self) -> list[float]:
        return [self._weights[self._key(item)] for item in self._current_bag]

    def _pick_index(self) -> int:
        bag_weights = self._bag_weights()
        total_weight = sum(bag_weights)

        if total_weight <= 0:
            # Every copy left was zeroed after the refill
            logging.debug(f"Discarding {len(self._current_bag)} zero-weight items left in the bag")
            self._current_bag.clear()
            self._refill()
            bag_weights = self._bag_weights()
            total_weight = sum(bag_weights)

        point = self._rng.random_sample() * total_weight

        cumulative = 0.0
        last_drawable = None
        for index, weight in enumerate(bag_weights):
            if weight <= 0:
                continue
            cumulative += weight
            last_drawable = index
            if cumulative >= point:
                return index

        # Floating point accumulation fell just short of the drawn point
        return last_drawable
