"""
Auxiliary actuator state: light dimmer and laser toggle.

Both are advanced once per joystick sample and only report a value when
their state changed, so downstream consumers are not flooded with
redundant commands.
"""
import math
from typing import Optional

LASER_OFF = 0
LASER_ON = 255


class LightDimmer:
    """
    Integrates a bipolar axis into a light level in [0, 1].

    level' = clamp(level + axis * rate, 0, 1)
    """

    def __init__(self, rate: float = -0.1, level: float = 0.0):
        """
        Args:
            rate: Level change per sample at full axis deflection. Negative
                inverts the axis direction.
            level: Initial light level in [0, 1]
        """
        if not math.isfinite(rate):
            raise ValueError("Light rate must be finite")
        if not 0.0 <= level <= 1.0:
            raise ValueError("Initial light level must be in [0, 1]")

        self.rate = float(rate)
        self.level = float(level)

    def update(self, axis: float) -> Optional[float]:
        """
        Advance the light level by one sample.

        Returns:
            The new level if it changed, otherwise None
        """
        previous = self.level
        self.level = max(0.0, min(previous + axis * self.rate, 1.0))

        if self.level != previous:
            return self.level
        return None


class ToggleLatch:
    """
    Two-state latch (LASER_OFF / LASER_ON) flipped on a button press edge.

    Joy samples arrive much faster than a physical press, so a single press
    spans many samples. The latch only flips on the sample where the button
    goes from released to pressed.
    """

    def __init__(self, state: int = LASER_OFF):
        if state not in (LASER_OFF, LASER_ON):
            raise ValueError(f"Latch state must be {LASER_OFF} or {LASER_ON}")

        self.state = state
        self._was_pressed = False

    def update(self, pressed: bool) -> Optional[int]:
        """
        Advance the latch by one sample.

        Returns:
            The new state if the latch flipped, otherwise None
        """
        pressed = bool(pressed)
        rising_edge = pressed and not self._was_pressed
        self._was_pressed = pressed

        if not rising_edge:
            return None

        self.state = LASER_ON if self.state == LASER_OFF else LASER_OFF
        return self.state
