import rclpy
from rclpy.node import Node
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn
import threading

from std_srvs.srv import Trigger
from joint_diagnostics.api_router import router as diagnostics_router

# --- FastAPI App ---
app = FastAPI(title="Joint Diagnostics API", description="REST API for robot joint health")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(diagnostics_router)


class APINode(Node):
    def __init__(self):
        super().__init__('joint_diagnostics_api_node')

        # --- Parameters ---
        self.declare_parameter('host', '0.0.0.0')
        self.declare_parameter('port', 8000)
        self.declare_parameter('status_service_name', '/joint_diagnostics_node/get_status')
        self.declare_parameter('service_timeout', 2.0)  # seconds

        self.host = self.get_parameter('host').value
        self.port = self.get_parameter('port').value
        self.status_service_name = self.get_parameter('status_service_name').value
        self.service_timeout = self.get_parameter('service_timeout').value

        # --- Status Service Client ---
        self._status_client = self.create_client(Trigger, self.status_service_name)

        self.get_logger().info('API Node initialized.')

    def request_joint_status(self):
        """Call the status Trigger service; (healthy, message) or None."""
        if not self._status_client.service_is_ready():
            self.get_logger().warning(
                f'Status service "{self.status_service_name}" not available.')
            return None

        # The executor spins in another thread, so block on an event instead
        # of spin_until_future_complete.
        future = self._status_client.call_async(Trigger.Request())

        event = threading.Event()
        result_box = []

        def _done(f):
            try:
                result_box.append(f.result())
            except Exception as e:
                self.get_logger().error(f'Status service call failed: {e}')
                result_box.append(None)
            event.set()

        future.add_done_callback(_done)
        event.wait(timeout=self.service_timeout)

        if result_box and result_box[0] is not None:
            return result_box[0].success, result_box[0].message
        return None


def ros2_thread_func(node):
    """Function to run the ROS 2 executor in a separate thread."""
    rclpy.spin(node)


def main(args=None):
    rclpy.init(args=args)
    ros_node = APINode()

    # Routers reach the node through app state
    app.state.ros_node = ros_node

    ros_thread = threading.Thread(target=ros2_thread_func, args=(ros_node,), daemon=True)
    ros_thread.start()

    try:
        ros_node.get_logger().info(f'Starting FastAPI server on {ros_node.host}:{ros_node.port}')
        uvicorn.run(app, host=ros_node.host, port=ros_node.port, log_level="info")
    except KeyboardInterrupt:
        pass
    finally:
        ros_node.destroy_node()
        rclpy.shutdown()
        ros_thread.join(timeout=1.0)


if __name__ == '__main__':
    main()
