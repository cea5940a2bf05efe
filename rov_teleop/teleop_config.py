"""
Teleop configuration and YAML loading.
"""
import math
from dataclasses import dataclass, field

import yaml

from rov_teleop.joy_input import JoyMapping
from rov_teleop.thrust_calibration import CalibrationCurve, PORT_STBD_CURVE, VERTICAL_CURVE

# 0.2 s is towards the upper limit of not overloading the BBB/ATmega2560 115200 baud serial link
MIN_DISPATCH_PERIOD = 0.2  # [s]


@dataclass(frozen=True)
class TeleopConfig:
    """
    Parameters of the teleop engine.

    Gains turn axis deflection into a body wrench: F = gain * axis.
    """
    mapping: JoyMapping = field(default_factory=JoyMapping)
    x_gain: float = 4.0             # [N] at full surge deflection
    z_gain: float = 3.0             # [N] at full heave deflection
    yaw_gain: float = 0.3           # [N⋅m] at full yaw deflection
    thruster_offset: float = 0.045  # [m] port/stbd displacement along y-axis
    light_rate: float = -0.1        # light level change per sample
    dispatch_period: float = 0.2    # [s] motor command republish period
    port_stbd_curve: CalibrationCurve = PORT_STBD_CURVE
    vertical_curve: CalibrationCurve = VERTICAL_CURVE
    joy_topic: str = 'joy'
    motor_topic: str = '/openrov/motortarget'
    light_topic: str = '/openrov/light_command'
    laser_topic: str = '/openrov/laser_toggle'
    camera_topic: str = '/openrov/camera_servo'

    def __post_init__(self):
        for name in ('x_gain', 'z_gain', 'yaw_gain', 'light_rate'):
            if not math.isfinite(getattr(self, name)):
                raise ValueError(f"{name} must be finite")
        if not math.isfinite(self.thruster_offset) or self.thruster_offset == 0.0:
            raise ValueError("thruster_offset must be finite and nonzero")
        if not math.isfinite(self.dispatch_period) or self.dispatch_period < MIN_DISPATCH_PERIOD:
            raise ValueError(f"dispatch_period must be at least {MIN_DISPATCH_PERIOD} s")


def _section(settings: dict, name: str) -> dict:
    """Return a settings section, treating an empty section as missing."""
    section = settings.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"Config section '{name}' must be a mapping, got {type(section).__name__}")
    return section


def config_from_dict(config: dict) -> TeleopConfig:
    """
    Build a TeleopConfig from a nested settings dictionary.

    Missing or empty sections and keys keep their defaults.
    """
    config = config or {}
    defaults = TeleopConfig()

    joy_mapping = _section(config, 'joy_mapping')
    unknown = set(joy_mapping) - set(JoyMapping.__dataclass_fields__)
    if unknown:
        raise ValueError(f"Unknown joy_mapping keys: {sorted(unknown)}")
    mapping = JoyMapping(**joy_mapping)

    gains = _section(config, 'gains')
    geometry = _section(config, 'geometry')
    lights = _section(config, 'lights')
    dispatch = _section(config, 'dispatch')
    topics = _section(config, 'topics')

    calibration = _section(config, 'calibration')
    port_stbd = _section(calibration, 'port_stbd')
    vertical = _section(calibration, 'vertical')

    return TeleopConfig(
        mapping=mapping,
        x_gain=float(gains.get('x', defaults.x_gain)),
        z_gain=float(gains.get('z', defaults.z_gain)),
        yaw_gain=float(gains.get('yaw', defaults.yaw_gain)),
        thruster_offset=float(geometry.get('thruster_offset', defaults.thruster_offset)),
        light_rate=float(lights.get('rate', defaults.light_rate)),
        dispatch_period=float(dispatch.get('period', defaults.dispatch_period)),
        port_stbd_curve=CalibrationCurve(
            float(port_stbd.get('max_forward', PORT_STBD_CURVE.max_forward_thrust)),
            float(port_stbd.get('max_reverse', PORT_STBD_CURVE.max_reverse_thrust)),
            name=PORT_STBD_CURVE.name,
        ),
        vertical_curve=CalibrationCurve(
            float(vertical.get('max_forward', VERTICAL_CURVE.max_forward_thrust)),
            float(vertical.get('max_reverse', VERTICAL_CURVE.max_reverse_thrust)),
            name=VERTICAL_CURVE.name,
        ),
        joy_topic=topics.get('joy', defaults.joy_topic),
        motor_topic=topics.get('motors', defaults.motor_topic),
        light_topic=topics.get('light', defaults.light_topic),
        laser_topic=topics.get('laser', defaults.laser_topic),
        camera_topic=topics.get('camera', defaults.camera_topic),
    )


def load_config_from_yaml(yaml_path: str) -> TeleopConfig:
    """
    Load teleop configuration from a YAML file.

    Args:
        yaml_path: Path to YAML configuration file

    Returns:
        TeleopConfig with defaults for anything not in the file
    """
    with open(yaml_path, 'r') as f:
        config = yaml.safe_load(f)

    if config is not None and not isinstance(config, dict):
        raise ValueError(f"Expected a mapping at the top of {yaml_path}")

    return config_from_dict(config)
