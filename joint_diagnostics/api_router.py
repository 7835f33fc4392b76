from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

# --- Pydantic Models ---
class JointStatusResponse(BaseModel):
    healthy: bool
    message: str

# Create a FastAPI router
router = APIRouter()

# --- Endpoints ---

@router.get("/diagnostics/joints/status", response_model=JointStatusResponse)
def get_joint_status(request: Request):
    # Access the ros_node injected into app state
    ros_node = getattr(request.app.state, "ros_node", None)
    if ros_node is None:
        raise HTTPException(status_code=500, detail="ROS node not initialized")

    result = ros_node.request_joint_status()
    if result is None:
        raise HTTPException(status_code=503, detail="Failed to query joint status. Is the diagnostics node running?")

    healthy, message = result
    return JointStatusResponse(healthy=healthy, message=message)
