import os
import rclpy
from rclpy.node import Node
from sensor_msgs.msg import Joy
from std_msgs.msg import Float32, Int32, Int32MultiArray
from ament_index_python.packages import get_package_share_directory, PackageNotFoundError
from dataclasses import replace
from rov_teleop.joy_input import JoyMapping
from rov_teleop.teleop_config import TeleopConfig, load_config_from_yaml
from rov_teleop.teleop_engine import TeleopEngine


class OpenROVTeleop(Node):
    def __init__(self):
        super().__init__('openrov_teleop')

        # Declare parameters (defaults from the YAML file if given, else TeleopConfig)
        self.declare_parameter('config_file', '')
        base = self._load_base_config()

        # Joy axis/button mapping, see http://wiki.ros.org/joy
        self.declare_parameter('X_stick', base.mapping.surge_axis)       # left stick up/down
        self.declare_parameter('Z_stick', base.mapping.heave_axis)       # right stick up/down
        self.declare_parameter('Yaw_stick', base.mapping.yaw_axis)       # left stick left/right
        self.declare_parameter('lights_adj', base.mapping.light_axis)    # cross key left/right
        self.declare_parameter('camera_tilt', base.mapping.camera_tilt_axis)  # cross key up/down
        self.declare_parameter('laser_toggle', base.mapping.laser_button)
        self.declare_parameter('x_gain', base.x_gain)
        self.declare_parameter('z_gain', base.z_gain)
        self.declare_parameter('yaw_gain', base.yaw_gain)
        self.declare_parameter('thruster_offset', base.thruster_offset)
        self.declare_parameter('light_rate', base.light_rate)
        self.declare_parameter('dispatch_period', base.dispatch_period)

        mapping = JoyMapping(
            surge_axis=self._int_param('X_stick'),
            heave_axis=self._int_param('Z_stick'),
            yaw_axis=self._int_param('Yaw_stick'),
            light_axis=self._int_param('lights_adj'),
            camera_tilt_axis=self._int_param('camera_tilt'),
            laser_button=self._int_param('laser_toggle'),
        )
        self.config = replace(
            base,
            mapping=mapping,
            x_gain=self._double_param('x_gain'),
            z_gain=self._double_param('z_gain'),
            yaw_gain=self._double_param('yaw_gain'),
            thruster_offset=self._double_param('thruster_offset'),
            light_rate=self._double_param('light_rate'),
            dispatch_period=self._double_param('dispatch_period'),
        )

        # Raises AllocationError on a singular thruster geometry, nothing to run without it
        self.engine = TeleopEngine(self.config, logger=self.get_logger())

        # Publishers (one topic per actuator on the OpenROV side)
        self.motor_pub = self.create_publisher(Int32MultiArray, self.config.motor_topic, 1)
        self.light_pub = self.create_publisher(Float32, self.config.light_topic, 1)
        self.laser_pub = self.create_publisher(Int32, self.config.laser_topic, 1)
        # Camera tilt is read from the joystick but not acted upon yet
        self.camera_pub = self.create_publisher(Int32, self.config.camera_topic, 1)

        self.create_subscription(Joy, self.config.joy_topic, self.joy_callback, 10)

        # joy publishes at 100-200 Hz, far more than the OpenROV serial link handles,
        # so motor commands go out on a fixed timer instead of per sample
        self.timer = self.create_timer(self.config.dispatch_period, self.timer_callback)

        self.get_logger().info(
            f"Teleop ready: gains x={self.config.x_gain}, z={self.config.z_gain}, "
            f"yaw={self.config.yaw_gain}, d={self.config.thruster_offset} m, "
            f"motor period {self.config.dispatch_period} s"
        )

    def _load_base_config(self) -> TeleopConfig:
        config_file = self.get_parameter('config_file').get_parameter_value().string_value
        if not config_file:
            return TeleopConfig()

        if not os.path.isabs(config_file):
            try:
                # Try package share directory first
                pkg_dir = get_package_share_directory('rov_teleop')
                config_file = os.path.join(pkg_dir, 'config', config_file)
            except PackageNotFoundError:
                # Fall back to relative path
                config_file = os.path.join(
                    os.path.dirname(__file__), '..', 'config', config_file
                )

        self.get_logger().info(f"Loading teleop config from: {config_file}")
        return load_config_from_yaml(config_file)

    def _int_param(self, name: str) -> int:
        return self.get_parameter(name).get_parameter_value().integer_value

    def _double_param(self, name: str) -> float:
        return self.get_parameter(name).get_parameter_value().double_value

    def joy_callback(self, msg: Joy):
        """Recompute thruster command; publish lights/laser only on change"""
        result = self.engine.process_joy(msg.axes, msg.buttons)
        if result is None:
            return

        if result.light is not None:
            self.light_pub.publish(Float32(data=float(result.light)))
        if result.laser is not None:
            self.laser_pub.publish(Int32(data=int(result.laser)))

    def timer_callback(self):
        """Republish the latest motor command"""
        command = self.engine.resend()
        self.motor_pub.publish(Int32MultiArray(data=command.as_list()))


def main(args=None):
    rclpy.init(args=args)
    node = OpenROVTeleop()
    rclpy.spin(node)
    node.destroy_node()
    rclpy.shutdown()


if __name__ == '__main__':
    main()
