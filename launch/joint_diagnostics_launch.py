from launch import LaunchDescription
from launch.actions import DeclareLaunchArgument
from launch.conditions import IfCondition
from launch.substitutions import LaunchConfiguration
from launch_ros.actions import Node


def generate_launch_description():

    config_launch_arg = DeclareLaunchArgument('config_file')
    api_launch_arg = DeclareLaunchArgument('enable_api', default_value='true')

    return LaunchDescription([
        config_launch_arg,
        api_launch_arg,
        Node(
            package='joint_diagnostics',
            executable='joint_diagnostics_node',
            name='joint_diagnostics_node',
            output='screen',
            parameters=[LaunchConfiguration('config_file')],
        ),
        Node(
            package='joint_diagnostics',
            executable='api_node',
            name='joint_diagnostics_api_node',
            output='screen',
            parameters=[LaunchConfiguration('config_file')],
            condition=IfCondition(LaunchConfiguration('enable_api')),
        )
    ])
