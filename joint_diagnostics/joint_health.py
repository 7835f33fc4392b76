import logging
import time
from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import Dict, List, Sequence, Tuple


KEY_TEMPLATES = (
    'Device/SubDeviceList/{}/Temperature/Sensor/Value',
    'Device/SubDeviceList/{}/Hardness/Actuator/Value',
    'Device/SubDeviceList/{}/ElectricCurrent/Sensor/Value',
)


class Level(IntEnum):
    # Same values as diagnostic_msgs/DiagnosticStatus
    OK = 0
    WARN = 1
    ERROR = 2
    STALE = 3


@dataclass
class DiagnosticRecord:
    name: str
    hardware_id: str
    level: Level = Level.OK
    message: str = 'OK'
    values: Dict[str, object] = field(default_factory=dict)


@dataclass
class DiagnosticBatch:
    stamp: float
    records: List[DiagnosticRecord] = field(default_factory=list)


def build_reading_keys(joint_names: Sequence[str]) -> Tuple[str, ...]:
    """Memory keys for every joint: temperature, stiffness, current."""
    return tuple(t.format(name) for name in joint_names for t in KEY_TEMPLATES)


def classify_temperature(joint: str, temperature: float,
                         warn_level: float, error_level: float):
    """Return (level, message) for a joint temperature."""
    if temperature < warn_level:
        return Level.OK, 'OK'
    if temperature < error_level:
        return Level.WARN, 'Hot'
    return Level.ERROR, f'HIGH JOINT TEMPERATURE: {joint}'


def level_message(level: Level) -> str:
    if level == Level.OK:
        return 'OK'
    if level == Level.WARN:
        return 'WARN'
    return 'ERROR'


class JointStatistics:
    """Cross-joint extremes collected during one cycle."""

    def __init__(self):
        self.max_level = Level.OK
        self.max_temperature = 0.0
        self.max_stiffness = 0.0
        self.min_stiffness = 1.0
        self.min_stiffness_wo_hands = 1.0
        self.max_current = 0.0
        self.min_current = 10.0
        self.hot_joints: List[str] = []

    def add(self, joint: str, level: Level, temperature: float,
            stiffness: float, current: float):
        self.max_level = max(self.max_level, level)
        self.max_temperature = max(self.max_temperature, temperature)
        self.max_stiffness = max(self.max_stiffness, stiffness)
        self.min_stiffness = min(self.min_stiffness, stiffness)
        if 'Hand' not in joint:
            self.min_stiffness_wo_hands = min(self.min_stiffness_wo_hands, stiffness)
        self.max_current = max(self.max_current, current)
        self.min_current = min(self.min_current, current)
        if level >= Level.WARN:
            self.hot_joints.append(f'{joint}: {temperature:g}°C')

    @property
    def hot_joints_text(self) -> str:
        return ''.join(f'\n{line}' for line in self.hot_joints)


class JointHealthAggregator:
    """
    Polls joint temperature, stiffness and current from ALMemory and
    publishes one diagnostic record per joint plus an aggregate record.

    The session and the publisher are borrowed, never closed here. Calls to
    publish() are expected to be serial.
    """

    TEMPERATURE_WARN_LEVEL = 68.0

    def __init__(self, session, publisher, joint_names: Sequence[str],
                 temperature_error_level: float,
                 name_prefix: str = 'joint_diagnostics',
                 logger=None, clock=time.time):
        self._publisher = publisher
        self._logger = logger or logging.getLogger(__name__)
        self._clock = clock
        self.joint_names = tuple(joint_names)
        self.temperature_warn_level = self.TEMPERATURE_WARN_LEVEL
        self.temperature_error_level = float(temperature_error_level)
        self.name_prefix = name_prefix

        self._status = DiagnosticRecord(
            name=f'{name_prefix}:Status', hardware_id='robot')

        self._memory = None
        try:
            self._memory = session.service('ALMemory')
        except Exception as e:
            self._logger.error(f'Failed to connect to Memory Proxy!\n\tTrace: {e}')

        self.reading_keys = build_reading_keys(self.joint_names)

    # -----------------------------------------------------------------------
    # Status
    # -----------------------------------------------------------------------
    @property
    def status(self) -> DiagnosticRecord:
        """Copy of the running status; only publish() updates it."""
        return replace(self._status, values=dict(self._status.values))

    def get_status_msg(self) -> str:
        return self._status.message

    def _escalate(self, record: DiagnosticRecord):
        if record.level > self._status.level:
            self._status.level = record.level
            self._status.message = record.message

    # -----------------------------------------------------------------------
    # Cycle
    # -----------------------------------------------------------------------
    def _read_values(self) -> List[float]:
        if self._memory is None:
            raise RuntimeError('ALMemory proxy is not available')
        values = self._memory.getListData(list(self.reading_keys))
        if len(values) != len(self.reading_keys):
            raise ValueError(
                f'Expected {len(self.reading_keys)} values, got {len(values)}')
        return [float(v) for v in values]

    def _joint_record(self, joint: str, temperature: float,
                      stiffness: float, current: float) -> DiagnosticRecord:
        level, message = classify_temperature(
            joint, temperature,
            self.temperature_warn_level, self.temperature_error_level)
        return DiagnosticRecord(
            name=f'{self.name_prefix}:{joint}',
            hardware_id=joint,
            level=level,
            message=message,
            values={
                'Temperature': temperature,
                'Stiffness': stiffness,
                'ElectricCurrent': current,
            },
        )

    def _aggregate_record(self, stats: JointStatistics) -> DiagnosticRecord:
        return DiagnosticRecord(
            name=f'{self.name_prefix}:Status',
            hardware_id='joints',
            level=stats.max_level,
            message=level_message(stats.max_level),
            values={
                'Highest Temperature': stats.max_temperature,
                'Highest Stiffness': stats.max_stiffness,
                'Lowest Stiffness': stats.min_stiffness,
                'Lowest Stiffness without Hands': stats.min_stiffness_wo_hands,
                'Highest Electric Current': stats.max_current,
                'Lowest Electric Current': stats.min_current,
                'Hot Joints': stats.hot_joints_text,
            },
        )

    def publish(self) -> bool:
        """
        Run one poll-classify-publish cycle.

        Returns False when the joint data could not be read (nothing is
        published) or when any joint reached ERROR, True otherwise.
        """
        self._status.level = Level.OK
        self._status.message = 'OK'

        try:
            values = self._read_values()
        except Exception as e:
            self._logger.error(f'Could not get joint data from the robot\n\tTrace: {e}')
            return False

        batch = DiagnosticBatch(stamp=self._clock())
        stats = JointStatistics()
        readings = iter(values)
        for joint in self.joint_names:
            temperature = next(readings)
            stiffness = next(readings)
            current = next(readings)

            record = self._joint_record(joint, temperature, stiffness, current)
            batch.records.append(record)
            self._escalate(record)
            stats.add(joint, record.level, temperature, stiffness, current)

        batch.records.append(self._aggregate_record(stats))

        self._publisher.publish(batch)

        return self._status.level < Level.ERROR
