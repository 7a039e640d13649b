"""
Host metrics services for local and SSH-reachable machines
"""

import logging
from typing import Any, Dict

from .base import HostService
from .local import LocalHost
from .remote import RemoteHost

logger = logging.getLogger(__name__)

LOCAL_ADDRESSES = ("", "localhost", "127.0.0.1", "::1")


def create_service(host_config: Dict[str, Any]) -> HostService:
    """
    Create the metrics service for the configured host.

    Args:
        host_config: The "host" section of the configuration

    Returns:
        LocalHost without an address, RemoteHost otherwise
    """
    address = str(host_config.get("address") or "").strip()
    timeout = float(host_config.get("timeout", 10))

    if address in LOCAL_ADDRESSES:
        logger.info("Monitoring local host")
        return LocalHost(timeout=timeout)

    service = RemoteHost(address, host_config.get("username") or None, timeout=timeout)
    logger.info(f"Monitoring remote host {service.name}")
    return service


__all__ = [
    "HostService",
    "LocalHost",
    "RemoteHost",
    "create_service",
]
