"""Installation status reporting towards the host."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class InstallationStatus(Enum):
    """Status of a tool's installation, as shown by the host."""

    NONE = "none"
    CHECKING_FOR_UPDATE = "checking_for_update"
    DOWNLOADING = "downloading"
    FAILED = "failed"


StatusReporter = Callable[[str, InstallationStatus, Optional[str]], None]


def log_status(
    tool_id: str,
    status: InstallationStatus,
    message: Optional[str] = None,
) -> None:
    """Default reporter: hosts without a status channel get log records."""
    if status == InstallationStatus.FAILED:
        logger.error("%s: %s", tool_id, message or "installation failed")
    else:
        logger.info("%s: %s", tool_id, status.value)
