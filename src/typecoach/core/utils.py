"""
Numerical utilities for the type classifier.

Pure numpy. Distributions are arrays aligned with ``model.TYPES``.
"""

from __future__ import annotations

from typing import Dict, Sequence

import numpy as np


def clamp(v: float, lo: float, hi: float) -> float:
    """Clamp a scalar into [lo, hi]."""
    return max(lo, min(hi, v))


def normalize(x: np.ndarray) -> np.ndarray:
    """Normalize array to sum to 1 (probability distribution)."""
    x = np.asarray(x, dtype=np.float64)
    total = float(np.sum(x))
    if not np.isfinite(total) or total <= 0.0:
        return np.ones_like(x) / x.size
    return x / total


def entropy(p: np.ndarray) -> float:
    """Shannon entropy in bits, H(p) = -sum(p * log2(p)), skipping zeros."""
    p = np.asarray(p, dtype=np.float64)
    p_pos = p[p > 0.0]
    return -float(np.sum(p_pos * np.log2(p_pos)))


def argmax_index(p: np.ndarray) -> int:
    """Index of the largest entry; first one wins on ties."""
    return int(np.argmax(p))


def to_mapping(p: np.ndarray, keys: Sequence[str]) -> Dict[str, float]:
    """Convert an aligned array into a plain {key: float} dict."""
    return {k: float(v) for k, v in zip(keys, p)}
