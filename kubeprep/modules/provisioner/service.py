"""Service enablement for the container runtime and kubelet."""

import logging

from .host import Host

logger = logging.getLogger("kubeprep.provisioner.service")

CRIO_SERVICE = 'crio'
KUBELET_SERVICE = 'kubelet'


def start_container_runtime(host: Host) -> None:
    """Reload unit files, then enable and start CRI-O."""
    host.daemon_reload()
    host.enable_service(CRIO_SERVICE, now=True)
    logger.info("✅ CRI-O installed and started successfully.")


def start_kubelet(host: Host) -> None:
    logger.info("--- Enabling and Starting Kubelet ---")
    host.enable_service(KUBELET_SERVICE)
    host.start_service(KUBELET_SERVICE)
