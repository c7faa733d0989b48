"""Local hostname detection for the GELF ``host`` field."""

import platform
import socket
from typing import Optional


def detect_hostname() -> Optional[str]:
    """Return the local hostname, or None if it cannot be determined."""
    try:
        hostname = socket.gethostname()
    except OSError:
        hostname = ""
    return hostname or platform.node() or None
