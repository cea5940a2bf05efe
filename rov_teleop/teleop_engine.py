"""
Teleop engine: joystick sample -> thruster pulse widths, lights and laser.

Pipeline per sample:
1. Body wrench from axis deflection and gains
2. Thrust allocation (A @ T = F)
3. Calibration curve per thruster (force -> percent thrust)
4. Uniform saturation scaling
5. Pulse-width encoding, stored as the latest motor command

The stored command is republished at a fixed rate by the caller via resend(),
independent of the joystick sample rate.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from rov_teleop.auxiliary_actuators import LightDimmer, ToggleLatch
from rov_teleop.joy_input import InvalidSampleError, JoySample
from rov_teleop.pwm_encoder import PWM_NEUTRAL, encode
from rov_teleop.saturation_limiter import apply_scale, limit_saturation
from rov_teleop.teleop_config import TeleopConfig
from rov_teleop.thrust_allocator import AllocationError, ThrustAllocator
from rov_teleop.thrust_calibration import thrust_percent


@dataclass(frozen=True)
class ActuatorCommand:
    """ESC pulse widths [µs] for [port, vert, stbd]."""
    port: int = PWM_NEUTRAL
    vertical: int = PWM_NEUTRAL
    starboard: int = PWM_NEUTRAL

    def as_list(self) -> list:
        return [self.port, self.vertical, self.starboard]


@dataclass(frozen=True)
class SampleResult:
    """Outcome of one joystick sample. light/laser are None when unchanged."""
    command: ActuatorCommand
    light: Optional[float] = None
    laser: Optional[int] = None


class TeleopEngine:
    """
    Open-loop command mixer for the three thruster OpenROV.

    Owns the allocation pipeline, the latest motor command and the
    auxiliary actuator state.
    """

    def __init__(self, config: TeleopConfig = None, logger: logging.Logger = None):
        """
        Initialize teleop engine.

        Args:
            config: Teleop configuration (defaults if None)
            logger: Optional logger, e.g. a ROS node logger

        Raises:
            AllocationError: If the thruster geometry gives a singular allocation matrix
        """
        self.config = config or TeleopConfig()
        self.logger = logger or logging.getLogger(__name__)

        self.allocator = ThrustAllocator(self.config.thruster_offset)
        self.light = LightDimmer(rate=self.config.light_rate)
        self.laser = ToggleLatch()

        self._command = ActuatorCommand()

    @property
    def last_command(self) -> ActuatorCommand:
        return self._command

    @property
    def light_level(self) -> float:
        return self.light.level

    @property
    def laser_state(self) -> int:
        return self.laser.state

    def body_wrench(self, sample: JoySample) -> Tuple[float, float, float]:
        """
        Interpret stick deflection as a desired wrench.

        Returns:
            (F_surge, F_heave, tau_z) in body frame [N, N, N⋅m]
        """
        return (
            self.config.x_gain * sample.surge,
            self.config.z_gain * sample.heave,
            self.config.yaw_gain * sample.yaw,
        )

    def compute_command(self, sample: JoySample) -> ActuatorCommand:
        """
        Run the allocation pipeline for one sample without touching stored state.
        """
        F_surge, F_heave, tau_z = self.body_wrench(sample)
        T_port, T_vert, T_stbd = self.allocator.allocate(F_surge, F_heave, tau_z)

        percents = (
            thrust_percent(T_port, self.config.port_stbd_curve),
            thrust_percent(T_vert, self.config.vertical_curve),
            thrust_percent(T_stbd, self.config.port_stbd_curve),
        )

        # Scale everything to bring within saturation limits
        scale = limit_saturation(*percents)
        if scale < 1.0:
            self.logger.debug(f"Thrusters saturated, scale factor {scale:.3f}")

        port, vert, stbd = (encode(p) for p in apply_scale(percents, scale))
        return ActuatorCommand(port=port, vertical=vert, starboard=stbd)

    def process_joy(self, axes: Sequence[float], buttons: Sequence[int]) -> Optional[SampleResult]:
        """
        Handle one raw joystick sample.

        Stores the new motor command and advances light/laser state. An
        invalid sample is dropped with a warning and leaves all state as is.

        Args:
            axes: Joy axis values
            buttons: Joy button states

        Returns:
            SampleResult, or None if the sample was dropped
        """
        try:
            sample = JoySample.from_joy(axes, buttons, self.config.mapping)
        except InvalidSampleError as e:
            self.logger.warning(f"Dropping joy sample: {e}")
            return None

        try:
            command = self.compute_command(sample)
        except AllocationError as e:
            self.logger.error(f"Dropping joy sample, allocation failed: {e}")
            return None

        self._command = command
        self.logger.debug(f"ESC vals: [{command.port}, {command.vertical}, {command.starboard}]")

        light = self.light.update(sample.light_adjust)
        if light is not None:
            self.logger.debug(f"Desired lights: {light:.2f}")

        laser = self.laser.update(sample.laser_pressed)
        if laser is not None:
            self.logger.info(f"Laser status: {laser}")

        return SampleResult(command=command, light=light, laser=laser)

    def resend(self) -> ActuatorCommand:
        """Return the last stored motor command for periodic republishing."""
        return self._command

    def get_state(self) -> dict:
        """Get current engine state for debugging."""
        return {
            'motors': self._command.as_list(),
            'light_level': self.light.level,
            'laser': self.laser.state,
            'thruster_offset': self.allocator.d,
        }
