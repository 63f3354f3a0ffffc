"""Kernel module and sysctl prerequisites for the container network stack."""

import logging
from typing import Dict, Tuple

from .errors import KernelModuleError
from .host import Host
from .utils import render_sysctl

logger = logging.getLogger("kubeprep.provisioner.kernel")

MODULES_LOAD_FILE = '/etc/modules-load.d/k8s.conf'
SYSCTL_FILE = '/etc/sysctl.d/k9s.conf'

KERNEL_MODULES: Tuple[str, ...] = ('overlay', 'br_netfilter')

SYSCTL_PARAMS: Dict[str, str] = {
    'net.bridge.bridge-nf-call-iptables': '1',
    'net.bridge.bridge-nf-call-ip6tables': '1',
    'net.ipv4.ip_forward': '1',
}

REQUIRED_MODULE = 'br_netfilter'


def verify_modules(host: Host, module: str = REQUIRED_MODULE) -> None:
    """Confirm a kernel module shows up in the live module list.

    Raises:
        KernelModuleError: If the module is not loaded
    """
    if module not in host.list_modules():
        logger.error(f"❌ {module} module failed to load. Check kernel headers.")
        raise KernelModuleError(f"Kernel module {module} is not loaded")
    logger.info(f"✅ Kernel module {module} loaded successfully.")


def configure_kernel(host: Host) -> None:
    """Declare, load and verify kernel modules, then apply sysctl settings."""
    logger.info("--- Configuring Kernel Parameters for Kubernetes ---")

    host.write_file(MODULES_LOAD_FILE, ''.join(f'{name}\n' for name in KERNEL_MODULES))
    for module in KERNEL_MODULES:
        host.load_module(module)

    host.write_file(SYSCTL_FILE, render_sysctl(SYSCTL_PARAMS))
    host.apply_sysctl()

    verify_modules(host)
