import os
from typing import List, Optional

import yaml


DEFAULT_ROBOTS_FILE = os.path.join(os.path.dirname(__file__), 'robots.yaml')


class RobotJointsError(Exception):
    """Robot joint table could not be loaded"""
    pass


def load_robot_joints(path: Optional[str] = None) -> dict:
    """Load the {robot: [joint, ...]} table from a YAML file."""
    path = path or DEFAULT_ROBOTS_FILE
    if not os.path.exists(path):
        raise RobotJointsError(f'Robot joints file not found: {path}')

    try:
        with open(path, 'r') as f:
            table = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise RobotJointsError(f'Invalid YAML in robot joints file: {e}')

    if not isinstance(table, dict):
        raise RobotJointsError(f'Robot joints file must map robot names to joint lists: {path}')
    return table


def joint_names_for(robot: str, path: Optional[str] = None) -> List[str]:
    """Ordered joint names for a robot model (case-insensitive)."""
    table = load_robot_joints(path)
    joints = table.get(robot.lower())
    if not joints:
        known = ', '.join(sorted(table))
        raise RobotJointsError(f'Unknown robot "{robot}" (known: {known})')
    return [str(j) for j in joints]
