"""
Thruster calibration curves.
Maps a desired thruster force [N] to a normalized command in [-1, 1].

Rough linear approximation of the OpenROV test stand data:
https://github.com/laughlinbarker/openrov_teststand/tree/master/test_stand_data/sample_data_and_output
"""
import math
from dataclasses import dataclass


@dataclass(frozen=True)
class CalibrationCurve:
    """
    Piecewise-linear force -> percent thrust curve.

    Forward and reverse forces are scaled by separate maxima, so the curve
    may be asymmetric around zero. Values outside [-1, 1] are returned as-is;
    saturation is handled downstream.
    """
    max_forward_thrust: float
    max_reverse_thrust: float
    name: str = ""

    def __post_init__(self):
        for value in (self.max_forward_thrust, self.max_reverse_thrust):
            if not math.isfinite(value) or value <= 0.0:
                raise ValueError("Maximum thrust values must be finite and positive")

    def __call__(self, force: float) -> float:
        return thrust_percent(force, self)


# Graupner 2308.60 port/stbd thrusters: 1.5 kg forward (14.7 N), ~75% in reverse
PORT_STBD_CURVE = CalibrationCurve(14.7, 11.0, name="graupner_2308_60")

# Graupner 2303.57 vertical thruster: no data, assumed symmetric in bollard pull
VERTICAL_CURVE = CalibrationCurve(14.7, 14.7, name="graupner_2303_57")


def thrust_percent(force: float, curve: CalibrationCurve) -> float:
    """
    Compute desired percentage thrust for a thruster.

    Args:
        force: Desired thruster force [N]
        curve: Calibration curve of the thruster model

    Returns:
        Normalized command, nominally in [-1, 1] (not clamped)
    """
    force = float(force)
    if force > 0.0:
        return force / curve.max_forward_thrust
    if force < 0.0:
        return force / curve.max_reverse_thrust
    return 0.0
