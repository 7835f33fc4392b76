import pytest

from joint_diagnostics.robot_joints import (
    RobotJointsError,
    joint_names_for,
    load_robot_joints,
)


def test_packaged_tables():
    table = load_robot_joints()
    assert set(table) >= {'nao', 'pepper'}

    nao = joint_names_for('NAO')
    assert nao[0] == 'HeadYaw'
    assert 'LHand' in nao and 'RHand' in nao
    assert len(nao) == len(set(nao))


def test_custom_file(tmp_path):
    path = tmp_path / 'robots.yaml'
    path.write_text('arm:\n  - Shoulder\n  - Elbow\n')

    assert joint_names_for('arm', str(path)) == ['Shoulder', 'Elbow']


def test_unknown_robot():
    with pytest.raises(RobotJointsError, match='Unknown robot'):
        joint_names_for('romeo')


def test_missing_file(tmp_path):
    with pytest.raises(RobotJointsError, match='not found'):
        load_robot_joints(str(tmp_path / 'missing.yaml'))


def test_malformed_file(tmp_path):
    path = tmp_path / 'robots.yaml'
    path.write_text('- just\n- a list\n')

    with pytest.raises(RobotJointsError):
        load_robot_joints(str(path))
