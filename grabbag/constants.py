"""
Constants shared by the grabbag samplers.
"""

# Weight given to items that have no explicit entry in a weight mapping
DEFAULT_WEIGHT = 1.0

# Environment variable checked by load_sampler_config() when no path is given
SAMPLER_CONFIG_ENV_VAR = "GRABBAG_SAMPLER_CONFIG_PATH"

# How invalid (negative / NaN) weights are handled
INVALID_WEIGHTS_REJECT = "reject"
INVALID_WEIGHTS_CLAMP = "clamp"
INVALID_WEIGHT_POLICIES = (INVALID_WEIGHTS_REJECT, INVALID_WEIGHTS_CLAMP)

# Sampler types understood by SamplerConfig
SAMPLER_TYPES = ("uniform", "weighted")

# Largest number of copies one item may place in a bag per cycle.
# Weights that round above this are rejected under every policy.
MAX_REPLICAS = 10_000
