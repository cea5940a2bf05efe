#!/usr/bin/env python3
"""
Launch file for the OpenROV teleop node with a joystick driver.

Gains, geometry and mapping come from the YAML config file. Override single
values with e.g. `ros2 run rov_teleop openrov_teleop --ros-args -p x_gain:=5.0`.
"""
from launch import LaunchDescription
from launch_ros.actions import Node
from launch.actions import DeclareLaunchArgument
from launch.substitutions import LaunchConfiguration


def generate_launch_description():
    # Declare arguments
    config_file_arg = DeclareLaunchArgument(
        'config_file',
        default_value='teleop.yaml',
        description='Teleop YAML file name'
    )

    joy_dev_arg = DeclareLaunchArgument(
        'joy_dev',
        default_value='0',
        description='Joystick device id'
    )

    # Joystick driver
    joy_node = Node(
        package='joy',
        executable='joy_node',
        name='joy_node',
        output='screen',
        parameters=[{
            'device_id': LaunchConfiguration('joy_dev'),
            'autorepeat_rate': 20.0,
        }]
    )

    # Teleop node
    teleop_node = Node(
        package='rov_teleop',
        executable='openrov_teleop',
        name='openrov_teleop',
        output='screen',
        parameters=[{
            'config_file': LaunchConfiguration('config_file'),
        }]
    )

    return LaunchDescription([
        config_file_arg,
        joy_dev_arg,
        joy_node,
        teleop_node,
    ])
