import qi
import rclpy
from rclpy.node import Node

from diagnostic_msgs.msg import DiagnosticArray
from std_srvs.srv import Trigger

from joint_diagnostics.joint_health import JointHealthAggregator, Level
from joint_diagnostics.robot_joints import joint_names_for
from joint_diagnostics.ros_publisher import DiagnosticArrayPublisher

DEFAULT_PUBLISH_RATE = 1.0  # Hz


def publish_period(rate, logger) -> float:
    """Timer period for a publish rate; non-positive rates use the default."""
    if rate is None or rate <= 0.0:
        logger.error(
            f'Invalid publish_rate {rate}, using {DEFAULT_PUBLISH_RATE} Hz.')
        rate = DEFAULT_PUBLISH_RATE
    return 1.0 / rate


class JointDiagnosticsNode(Node):
    def __init__(self):
        super().__init__('joint_diagnostics_node')

        # --- Parameters ---
        # NAOqi endpoint hosting ALMemory
        self.declare_parameter('memory_url', 'tcp://127.0.0.1:9559')

        # Joint list: explicit names win, otherwise taken from the robot table
        self.declare_parameter('robot', 'nao')
        self.declare_parameter('joint_names', [''])

        self.declare_parameter('temperature_error_level', 75.0)  # degC
        self.declare_parameter('publish_rate', DEFAULT_PUBLISH_RATE)
        self.declare_parameter('diagnostics_topic', '/diagnostics')
        self.declare_parameter('status_service', '~/get_status')

        self._load_params()

        # --- NAOqi session ---
        self._session = qi.Session()
        try:
            self._session.connect(self._memory_url)
            self.get_logger().info(f'Connected to NAOqi at {self._memory_url}')
        except RuntimeError as e:
            self.get_logger().error(
                f'Could not connect to NAOqi at {self._memory_url}: {e}')

        # --- Publishers ---
        self._diag_pub = self.create_publisher(
            DiagnosticArray, self._diagnostics_topic, 10)

        self._aggregator = JointHealthAggregator(
            self._session,
            DiagnosticArrayPublisher(self._diag_pub),
            self._joint_names,
            self._temperature_error_level,
            logger=self.get_logger(),
            clock=lambda: self.get_clock().now().nanoseconds / 1e9,
        )

        # --- Services ---
        self.create_service(Trigger, self._status_service, self._status_callback)

        # --- Timer ---
        self._timer = self.create_timer(
            publish_period(self._publish_rate, self.get_logger()), self._timer_callback)

        self.get_logger().info(
            f'Joint diagnostics initialized for {len(self._joint_names)} joints.')

    # -----------------------------------------------------------------------
    # Parameter loading
    # -----------------------------------------------------------------------
    def _load_params(self):
        self._memory_url = self.get_parameter('memory_url').value
        self._robot = self.get_parameter('robot').value
        self._temperature_error_level = self.get_parameter('temperature_error_level').value
        self._publish_rate = self.get_parameter('publish_rate').value
        self._diagnostics_topic = self.get_parameter('diagnostics_topic').value
        self._status_service = self.get_parameter('status_service').value

        # Remove any empty strings
        joint_names = [j for j in self.get_parameter('joint_names').value if j]
        if not joint_names:
            joint_names = joint_names_for(self._robot)
            self.get_logger().info(f'Using default joints for robot "{self._robot}".')
        self._joint_names = joint_names

    # -----------------------------------------------------------------------
    # Callbacks
    # -----------------------------------------------------------------------
    def _timer_callback(self):
        # A failed read leaves the status at OK and is logged by the aggregator
        healthy = self._aggregator.publish()
        if not healthy and self._aggregator.status.level >= Level.ERROR:
            self.get_logger().error(
                f'Joint diagnostics unhealthy: {self._aggregator.get_status_msg()}')

    def _status_callback(self, request, response):
        response.success = self._aggregator.status.level < Level.ERROR
        response.message = self._aggregator.get_status_msg()
        return response

    def close(self):
        self._session.close()


def main(args=None):
    rclpy.init(args=args)
    node = JointDiagnosticsNode()
    try:
        rclpy.spin(node)
    except KeyboardInterrupt:
        pass
    finally:
        node.close()
        node.destroy_node()
        try:
            rclpy.shutdown()
        except Exception:
            pass


if __name__ == '__main__':
    main()
