"""grabbag - Bag-based random samplers: every item gets its turn."""

from grabbag.bag import (
    BagSampler,
    GrabBagError,
    EmptyItemSetError,
    InvalidWeightError,
    NoDrawableItemsError,
)
from grabbag.samplers.uniform import UniformBagSampler
from grabbag.samplers.weighted import WeightedBagSampler
from grabbag.samplers.index import BagIndexSampler
from grabbag.samplers.factory import make_sampler, load_sampler_config
from grabbag.stats import summarize_draws

__version__ = "0.1.0"

__all__ = [
    "BagSampler",
    "GrabBagError",
    "EmptyItemSetError",
    "InvalidWeightError",
    "NoDrawableItemsError",
    "UniformBagSampler",
    "WeightedBagSampler",
    "BagIndexSampler",
    "make_sampler",
    "load_sampler_config",
    "summarize_draws",
]
