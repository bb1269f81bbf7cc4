#!/usr/bin/env python3
"""Example usage of the landscape-simple programmatic API."""

from __future__ import annotations

import math
from pathlib import Path

import numpy as np

from landscape_simple import (
    HyperparameterSpace,
    SobolSampler,
    compose,
    configurations,
    constant,
    discrete,
    geometric,
    load_space,
    minmax,
    mixture,
    to_frame,
)


def describe_configs(configs, title: str, limit: int = 3) -> None:
    """Pretty-print a few configurations."""
    print(f"\n{title} (showing {min(limit, len(configs))} of {len(configs)})")
    for idx, config in enumerate(configs[:limit], start=1):
        values = ", ".join(f"{k}={v:.4g}" if isinstance(v, (float, np.floating)) else f"{k}={v}" for k, v in config)
        print(f"  {idx:>2}: {values}")


def main() -> None:
    print("Landscape API demo")

    # 1) Declare a space directly
    space = HyperparameterSpace.new(
        layers=discrete([3, 5, 8, 12, 17, 23]),
        lr=geometric(1e-4, 5e-2),
        width=compose(int, math.ceil, geometric(np.float32(1.0), np.float32(10.0))),
        dropout=mixture([(0.2, constant(0.0)), (0.8, minmax(0.05, 0.5))]),
    )

    # 2) Generate 2^5 configurations
    configs = configurations(space, m=5, rng=31)
    describe_configs(configs, "Scrambled Sobol' configurations")

    # 3) The same landscape through the strategy object, unscrambled
    sampler = SobolSampler(space, scramble=False)
    describe_configs(sampler.sample(3), "Unscrambled configurations")

    # 4) Load the declarative version of the space
    space_file = Path(__file__).with_name("search_space.toml")
    declaration = load_space(space_file)
    frame = to_frame(configurations(declaration.space, m=declaration.m, rng=declaration.seed), declaration.space)
    print(f"\nLoaded {space_file.name}: {frame.shape[0]} rows")
    print(frame.head(5))


if __name__ == "__main__":
    main()
