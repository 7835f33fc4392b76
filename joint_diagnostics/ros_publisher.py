from builtin_interfaces.msg import Time
from diagnostic_msgs.msg import DiagnosticArray, DiagnosticStatus, KeyValue

from joint_diagnostics.joint_health import DiagnosticBatch, DiagnosticRecord


def _to_time(stamp: float) -> Time:
    sec = int(stamp)
    nanosec = min(int(round((stamp - sec) * 1e9)), 999999999)
    return Time(sec=sec, nanosec=nanosec)


def _value_str(value) -> str:
    if isinstance(value, float):
        return f'{value:g}'
    return str(value)


def to_diagnostic_status(record: DiagnosticRecord) -> DiagnosticStatus:
    status = DiagnosticStatus()
    status.level = bytes([int(record.level)])
    status.name = record.name
    status.message = record.message
    status.hardware_id = record.hardware_id
    status.values = [KeyValue(key=k, value=_value_str(v)) for k, v in record.values.items()]
    return status


def to_diagnostic_array(batch: DiagnosticBatch) -> DiagnosticArray:
    msg = DiagnosticArray()
    msg.header.stamp = _to_time(batch.stamp)
    msg.status = [to_diagnostic_status(r) for r in batch.records]
    return msg


class DiagnosticArrayPublisher:
    """Adapts a rclpy DiagnosticArray publisher to DiagnosticBatch."""

    def __init__(self, publisher):
        self._publisher = publisher

    def publish(self, batch: DiagnosticBatch):
        self._publisher.publish(to_diagnostic_array(batch))
