from typing import Iterator, Sequence

import torch.utils.data

from grabbag.samplers.uniform import UniformBagSampler
from grabbag.samplers.weighted import WeightedBagSampler


class BagIndexSampler(torch.utils.data.Sampler):
    """
    Draw dataset indices from a bag, for use with a DataLoader.

    Without weights every index is visited once per cycle. With per-index
    weights each index appears round(weight) times per cycle. The bag carries
    over between epochs, so when `num_samples` is not a multiple of the cycle
    size a cycle continues into the next epoch instead of restarting.
    """

    def __init__(
        self,
        num_indices: int,
        weights: Sequence[float] | None = None,
        num_samples: int | None = None,
        seed: int | None = None,
    ):
        """
        Initialize bag index sampler.

        Args:
            num_indices: Size of the dataset; indices are drawn from range(num_indices)
            weights: Optional per-index weights, one per index
            num_samples: Samples per epoch. If None, uses one full cycle.
            seed: Random seed for reproducibility
        """
        if num_indices <= 0:
            raise ValueError(f"num_indices must be positive, got {num_indices}")
        if weights is not None and len(weights) != num_indices:
            raise ValueError(f"weights must have one entry per index ({num_indices}), got {len(weights)}")
        if num_samples is not None and num_samples <= 0:
            raise ValueError(f"num_samples must be positive, got {num_samples}")

        self.num_indices = num_indices
        self.seed = seed

        indices = range(num_indices)
        if weights is None:
            self.bag = UniformBagSampler(indices, seed=seed)
        else:
            self.bag = WeightedBagSampler(
                indices,
                weights={idx: float(weight) for idx, weight in enumerate(weights)},
                seed=seed,
            )

        self.num_samples = num_samples or self.bag.cycle_size

    def __iter__(self) -> Iterator[int]:
        """Yield `num_samples` indices, continuing the current cycle."""
        for _ in range(self.num_samples):
            yield self.bag.next()

    def __len__(self) -> int:
        return self.num_samples
