"""Configuration classes for samplers."""
from dataclasses import dataclass
from typing import Any, Optional

from grabbag.constants import INVALID_WEIGHT_POLICIES, INVALID_WEIGHTS_REJECT, SAMPLER_TYPES
from grabbag.samplers.weighted import validate_weight


@dataclass
class SamplerConfig:
    """
    Configuration for bag samplers.

    Attributes:
        type: Type of sampler, "uniform" or "weighted"
        items: Items to draw from. If None, the keys of `weights` are used.
               Example: ["sword", "shield", "potion"]
        weights: Dictionary mapping items to weights (weighted sampler only).
                 Each cycle holds round(weight) copies of an item.
                 Items not in dict get weight 1.0.
                 Example: {"sword": 1.0, "shield": 1.0, "potion": 3.0}
        seed: Random seed for reproducibility. If None, sampling is non-deterministic.
        invalid_weights: "reject" to raise on negative/NaN weights, "clamp" to treat them as 0.0
    """
    type: str = "weighted"
    items: Optional[list[Any]] = None
    weights: Optional[dict[Any, float]] = None
    seed: Optional[int] = None
    invalid_weights: str = INVALID_WEIGHTS_REJECT

    @classmethod
    def from_dict(cls, data: dict) -> "SamplerConfig":
        """
        Create SamplerConfig from a dictionary.

        Args:
            data: Dictionary containing sampler configuration

        Returns:
            SamplerConfig instance

        Raises:
            ValueError: If fields are missing or invalid
        """
        if not isinstance(data, dict):
            raise ValueError(f"Sampler configuration must be a dict, got {type(data)}")

        # Validate sampler type
        sampler_type = data.get("type", "weighted")
        if sampler_type not in SAMPLER_TYPES:
            raise ValueError(f"Unsupported sampler type: {sampler_type}. Expected one of {SAMPLER_TYPES}.")

        invalid_weights = data.get("invalid_weights", INVALID_WEIGHTS_REJECT)
        if invalid_weights not in INVALID_WEIGHT_POLICIES:
            raise ValueError(
                f"Unsupported invalid_weights policy: {invalid_weights}. Expected one of {INVALID_WEIGHT_POLICIES}."
            )

        items = data.get("items", None)
        if items is not None:
            if not isinstance(items, list):
                raise ValueError(f"items must be a list, got {type(items)}")
            if not items:
                raise ValueError("items must not be empty")

        weights = data.get("weights", None)
        if weights is not None:
            if not isinstance(weights, dict):
                raise ValueError(f"weights must be a dict, got {type(weights)}")
            if sampler_type != "weighted":
                raise ValueError(f"weights are only supported by the weighted sampler, not {sampler_type}")
            # Same rules the sampler applies, reported as config errors
            for item, weight in weights.items():
                try:
                    validate_weight(item, weight, invalid_weights)
                except ValueError as e:
                    raise ValueError(f"Invalid weights in sampler configuration: {e}") from e

        if items is None and not weights:
            raise ValueError("Sampler configuration needs 'items' or a non-empty 'weights' mapping")

        seed = data.get("seed", None)
        if seed is not None:
            if isinstance(seed, bool) or not isinstance(seed, int):
                raise ValueError(f"seed must be an int, got {type(seed)}")

        return cls(
            type=sampler_type,
            items=items,
            weights=weights,
            seed=seed,
            invalid_weights=invalid_weights,
        )

    def resolve_items(self) -> Optional[list[Any]]:
        """Items to sample from: explicit `items`, else the keys of `weights`."""
        if self.items is not None:
            return list(self.items)
        if self.weights:
            return list(self.weights.keys())
        return None
