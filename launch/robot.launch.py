from launch import LaunchDescription
from launch.substitutions import PathJoinSubstitution, LaunchConfiguration
from launch.actions import DeclareLaunchArgument, IncludeLaunchDescription
from launch.launch_description_sources import PythonLaunchDescriptionSource
from launch_ros.substitutions import FindPackageShare

def generate_launch_description():

    default_config_path = PathJoinSubstitution([
        FindPackageShare("joint_diagnostics"), "config", "joint_diagnostics.yaml"
    ])

    launch_arguments = [
        DeclareLaunchArgument("config_file", default_value=default_config_path),
        DeclareLaunchArgument("enable_api", default_value="true")
    ]

    launches = [
        IncludeLaunchDescription(
            PythonLaunchDescriptionSource([
                PathJoinSubstitution([
                    FindPackageShare('joint_diagnostics'), 'launch', 'joint_diagnostics_launch.py'
                ])
            ]),
            launch_arguments={
                'config_file': LaunchConfiguration("config_file"),
                'enable_api': LaunchConfiguration("enable_api")
            }.items()
        ),
        IncludeLaunchDescription(
            PythonLaunchDescriptionSource([
                PathJoinSubstitution([
                    FindPackageShare('joint_diagnostics'), 'launch', 'diagnostics_launch.py'
                ])
            ]),
        )
    ]

    return LaunchDescription(launch_arguments + launches)
