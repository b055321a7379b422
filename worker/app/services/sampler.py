# worker/app/services/sampler.py
from __future__ import annotations

from typing import Any


def sample_value(value: Any, max_length: int, apply_limit: bool = True) -> Any:
    """
    Return a copy of a parsed JSON value with every array capped to its first
    ``max_length`` elements.

    - list: leading slice when apply_limit and longer than max_length, each
      kept element sampled in turn
    - dict: same keys in the same order, values sampled
    - str/int/float/bool/None: returned as-is

    The input is never mutated.
    """
    if max_length < 1:
        raise ValueError(f"max_length must be >= 1, got {max_length}")
    return _sample(value, max_length, apply_limit)


def _sample(value: Any, n: int, apply_limit: bool) -> Any:
    if isinstance(value, list):
        kept = value[:n] if apply_limit and len(value) > n else value
        return [_sample(v, n, apply_limit) for v in kept]
    if isinstance(value, dict):
        return {k: _sample(v, n, apply_limit) for k, v in value.items()}
    return value


def max_array_length(value: Any) -> int:
    """Length of the longest array found anywhere in value (0 if none)."""
    if isinstance(value, list):
        return max([len(value)] + [max_array_length(v) for v in value])
    if isinstance(value, dict):
        return max([0] + [max_array_length(v) for v in value.values()])
    return 0
