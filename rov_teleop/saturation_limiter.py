"""
Thruster saturation limiter.

Instead of clipping each thruster independently (which changes the direction
of the commanded wrench), the whole command vector is shrunk by one factor
so the most extreme thruster sits exactly on its limit.
"""
from typing import Sequence, Tuple

import numpy as np


def limit_saturation(p_port: float, p_vert: float, p_stbd: float) -> float:
    """
    Check for thruster saturation and compute a uniform scale factor.

    Args:
        p_port: Desired normalized port thrust
        p_vert: Desired normalized vertical thrust
        p_stbd: Desired normalized starboard thrust

    Returns:
        scale: 1.0 if all commands are within [-1, 1], otherwise
            1 / max(|min|, max) such that p_scaled = p * scale
    """
    p = np.array([p_port, p_vert, p_stbd], dtype=float)
    if not np.all(np.isfinite(p)):
        raise ValueError(f"Thrust percentages must be finite, got {p}")

    p_max = float(np.max(p))
    p_min = float(np.min(p))

    if p_min < -1.0 or p_max > 1.0:
        return 1.0 / max(abs(p_min), p_max)
    return 1.0


def apply_scale(percents: Sequence[float], scale: float) -> Tuple[float, ...]:
    """Scale every thruster command by the same factor."""
    return tuple(float(p) * scale for p in percents)
