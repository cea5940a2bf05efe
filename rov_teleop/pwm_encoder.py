"""
ESC pulse-width encoding.
Maps a normalized thruster command in [-1, 1] to a servo pulse width in [1000, 2000] µs.
"""
import logging
import math

import jax.numpy as jnp

logger = logging.getLogger(__name__)

PWM_NEUTRAL = 1500
PWM_HALF_RANGE = 500
PWM_MIN = PWM_NEUTRAL - PWM_HALF_RANGE
PWM_MAX = PWM_NEUTRAL + PWM_HALF_RANGE


def saturation(x: float, limit: float = 1.0) -> float:
    """Limit x to [-limit, limit]."""
    return float(jnp.clip(x, -abs(limit), abs(limit)))


def encode(percent: float) -> int:
    """
    Encode a normalized thrust command as a pulse width.

    Commands outside [-1, 1] should already have been scaled by the
    saturation limiter; anything still out of range is clipped here.

    Args:
        percent: Normalized thrust command

    Returns:
        Pulse width [µs]
    """
    percent = float(percent)
    if not math.isfinite(percent):
        raise ValueError(f"Thrust command must be finite, got {percent}")

    if abs(percent) > 1.0:
        logger.warning(f"Thrust command {percent:.3f} out of range, clipping to [-1, 1]")
        percent = saturation(percent)

    # Round half away from zero, so the pulse widths are symmetric around neutral
    offset = percent * PWM_HALF_RANGE
    offset = math.copysign(math.floor(abs(offset) + 0.5), offset)

    return PWM_NEUTRAL + int(offset)
