from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol

logger = logging.getLogger(__name__)

SERVER_INFO_PATH = "/rest/api/2/serverInfo"


class InfoTransport(Protocol):
    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any: ...


class ServerInfoCloudDetector:
    """
    Asks Jira for its deploymentType once and remembers the answer.
    """

    def __init__(self, transport: InfoTransport):
        self.transport = transport
        self._is_cloud: Optional[bool] = None

    def is_cloud_deployment(self) -> bool:
        if self._is_cloud is None:
            info = self.transport.get(SERVER_INFO_PATH)
            if not isinstance(info, dict):
                info = {}
            self._is_cloud = info.get("deploymentType") == "Cloud"
            logger.debug("deploymentType=%s", info.get("deploymentType"))
        return self._is_cloud


class StaticCloudDetector:
    def __init__(self, is_cloud: bool):
        self.is_cloud = is_cloud

    def is_cloud_deployment(self) -> bool:
        return self.is_cloud
