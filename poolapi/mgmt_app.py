"""
API Gateway Management Plane

HTTP/JSON API for operators inspecting the gateway. Read only: it lists
the command registry and where each sibling process is expected to listen.
It never forwards commands; that only happens on the API unix socket.
"""

from fastapi import APIRouter, FastAPI, Request
from pydantic import BaseModel
from typing import List, Optional
import logging

from poolapi import __version__, config
from poolapi.registry import registered_commands

logger = logging.getLogger(__name__)

app = FastAPI(title="Pool API Gateway Management", version=__version__)
router = APIRouter(prefix="/mgmt", tags=["management"])


class CommandInfo(BaseModel):
    """Registered API command"""
    name: str
    process: str
    remote_command: str
    requires_params: bool


class ProcessInfo(BaseModel):
    """Sibling process channel"""
    process: str
    channel: Optional[str] = None


@router.get("/commands", response_model=List[CommandInfo])
def list_commands():
    return [
        CommandInfo(
            name=spec.name,
            process=spec.target.value,
            remote_command=spec.remote_command,
            requires_params=spec.requires_params
        )
        for spec in registered_commands()
    ]


@router.get("/processes", response_model=List[ProcessInfo])
def list_processes(request: Request):
    """
    List the channel each sibling process is reached through.
    Empty until the service attaches its ProcessChannels to app.state.
    """
    channels = getattr(request.app.state, "channels", None)
    if channels is None:
        return []
    return [
        ProcessInfo(process=target.value, channel=str(getattr(channel, "socket_path", channel)))
        for target, channel in channels.channels.items()
    ]


app.include_router(router)


@app.get("/")
def root(request: Request):
    """Management plane root endpoint"""
    return {
        "service": "poolapi",
        "status": "running",
        "version": __version__,
        "api_socket": getattr(request.app.state, "api_socket", None),
        "close_wait_seconds": getattr(request.app.state, "close_wait", config.CLOSE_WAIT_SECONDS)
    }
