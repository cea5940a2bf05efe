"""
Joystick input boundary.

Raw sensor_msgs/Joy samples carry positional axes/buttons arrays. They are
converted once into a named JoySample, and validated, before entering the
allocation pipeline.

Default mapping (controller layout: http://wiki.ros.org/joy):
    surge        axis 1    left stick up/down
    heave        axis 4    right stick up/down
    yaw          axis 0    left stick left/right
    light_adjust axis 6    cross key left/right
    camera_tilt  axis 7    cross key up/down
    laser_toggle button 4  right bumper
"""
import math
from dataclasses import dataclass
from typing import Sequence


class InvalidSampleError(ValueError):
    """Raised when a joystick sample does not match the configured mapping."""


@dataclass(frozen=True)
class JoyMapping:
    """Indices into the Joy axes/buttons arrays."""
    surge_axis: int = 1
    heave_axis: int = 4
    yaw_axis: int = 0
    light_axis: int = 6
    camera_tilt_axis: int = 7
    laser_button: int = 4

    def __post_init__(self):
        for name, value in self.__dict__.items():
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"Joy index '{name}' must be a non-negative integer, got {value!r}")

    @property
    def min_axes(self) -> int:
        """Number of axes a sample needs for this mapping."""
        return max(self.surge_axis, self.heave_axis, self.yaw_axis,
                   self.light_axis, self.camera_tilt_axis) + 1

    @property
    def min_buttons(self) -> int:
        """Number of buttons a sample needs for this mapping."""
        return self.laser_button + 1


@dataclass(frozen=True)
class JoySample:
    """One validated joystick sample, axes in [-1, 1]."""
    surge: float = 0.0
    heave: float = 0.0
    yaw: float = 0.0
    light_adjust: float = 0.0
    camera_tilt: float = 0.0
    laser_pressed: bool = False

    @classmethod
    def from_joy(cls, axes: Sequence[float], buttons: Sequence[int],
                 mapping: JoyMapping = JoyMapping()) -> "JoySample":
        """
        Build a sample from raw Joy arrays.

        Args:
            axes: Joy axis values
            buttons: Joy button states (0 = released)
            mapping: Index mapping

        Raises:
            InvalidSampleError: If an array is too short or an axis value is
                non-finite or outside [-1, 1]
        """
        if len(axes) < mapping.min_axes:
            raise InvalidSampleError(
                f"Joy sample has {len(axes)} axes, mapping needs at least {mapping.min_axes}"
            )
        if len(buttons) < mapping.min_buttons:
            raise InvalidSampleError(
                f"Joy sample has {len(buttons)} buttons, mapping needs at least {mapping.min_buttons}"
            )

        def axis(index: int) -> float:
            value = float(axes[index])
            if not math.isfinite(value) or abs(value) > 1.0:
                raise InvalidSampleError(f"Joy axis {index} value {value} outside [-1, 1]")
            return value

        return cls(
            surge=axis(mapping.surge_axis),
            heave=axis(mapping.heave_axis),
            yaw=axis(mapping.yaw_axis),
            light_adjust=axis(mapping.light_axis),
            camera_tilt=axis(mapping.camera_tilt_axis),
            laser_pressed=buttons[mapping.laser_button] != 0,
        )
