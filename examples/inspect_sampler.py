"""
Inspect a bag sampler built from a config file and the distribution it draws.

Sample commands:
  python examples/inspect_sampler.py --config-path examples/configs/loot_table.json
  python examples/inspect_sampler.py --config-path examples/configs/loot_table.json --num-draws 500
"""
import argparse
import logging
from pprint import pformat

from grabbag.samplers import WeightedBagSampler, load_sampler_config, make_sampler
from grabbag.stats import summarize_draws


def inspect(config_path: str, num_draws: int):
    """
    Builds a sampler from a config file, draws from it and prints what came out.

    Args:
        config_path: Path to the sampler config file
        num_draws: Number of items to draw
    """
    logging.info(f"Loading config: {config_path}")
    sampler_config = load_sampler_config(config_path)
    if sampler_config is None:
        logging.error(f"Could not load a sampler config from {config_path}")
        return

    # --- 1. Sampler Creation & Info ---
    print("\n" + "=" * 80)
    print("1. Sampler Configuration")
    print("=" * 80 + "\n")

    sampler = make_sampler(sampler_config=sampler_config)
    print(pformat(sampler_config))
    print(f"\nSampler object created: {sampler!r}")
    print(f"Draws per cycle: {sampler.cycle_size}")

    if isinstance(sampler, WeightedBagSampler):
        print("\nReplicas per cycle:")
        for item in sampler.original_items:
            print(f"  - {item}: weight {sampler.get_weight(item)} -> {sampler.replica_count(item)} copies")

    # --- 2. First Cycle ---
    print("\n" + "=" * 80)
    print("2. First Cycle")
    print("=" * 80 + "\n")

    first_cycle = sampler.draw(sampler.cycle_size)
    print(", ".join(str(item) for item in first_cycle))

    # --- 3. Sampling Verification ---
    print("\n" + "=" * 80)
    print("3. Sampling Verification")
    print("=" * 80 + "\n")

    print(f"Drawing {num_draws} more items to verify distribution...")
    draws = sampler.draw(num_draws)
    # Expected shares follow replica counts, not raw weights
    weights = None
    if isinstance(sampler, WeightedBagSampler):
        weights = {item: sampler.replica_count(item) for item in sampler.original_items}
    print(summarize_draws(draws, weights=weights).to_string())


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    parser = argparse.ArgumentParser(
        description="Inspect a bag sampler and its draw distribution from a config file."
    )
    parser.add_argument(
        "--config-path",
        type=str,
        default="examples/configs/loot_table.json",
        help="The path to the JSON config file (default: examples/configs/loot_table.json).",
    )
    parser.add_argument(
        "--num-draws",
        type=int,
        default=1000,
        help="How many items to draw after the first cycle (default: 1000).",
    )
    args = parser.parse_args()
    inspect(args.config_path, args.num_draws)


if __name__ == "__main__":
    main()
