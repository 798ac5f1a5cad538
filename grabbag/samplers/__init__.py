"""Sampler implementations for grabbag."""

from grabbag.samplers.config import SamplerConfig
from grabbag.samplers.uniform import UniformBagSampler
from grabbag.samplers.weighted import WeightedBagSampler
from grabbag.samplers.factory import make_sampler, load_sampler_config

__all__ = [
    "SamplerConfig",
    "UniformBagSampler",
    "WeightedBagSampler",
    "make_sampler",
    "load_sampler_config",
]
