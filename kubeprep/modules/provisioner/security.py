"""SELinux and firewall relaxation."""

import logging
import re

from .host import Host

logger = logging.getLogger("kubeprep.provisioner.security")

SELINUX_CONFIG = '/etc/selinux/config'
FIREWALL_SERVICE = 'firewalld'

_ENFORCING_RE = re.compile(r'^SELINUX=enforcing$', re.MULTILINE)


def disable_selinux(host: Host) -> None:
    """Switch SELinux to permissive now and disable it from the next boot."""
    mode = host.selinux_mode()
    if mode.lower() == 'enforcing':
        host.set_selinux_permissive()
    else:
        logger.debug(f"SELinux already {mode}, skipping setenforce")

    current = host.read_file(SELINUX_CONFIG)
    if current is None:
        logger.warning(f"⚠️  {SELINUX_CONFIG} not found, SELinux is not installed")
        return
    updated = _ENFORCING_RE.sub('SELINUX=disabled', current)
    if updated != current:
        host.write_file(SELINUX_CONFIG, updated)
        logger.info("SELinux has been disabled. Reboot is recommended but not mandatory for now.")


def disable_firewall(host: Host) -> None:
    """Stop and disable firewalld when it is installed."""
    if not host.service_exists(FIREWALL_SERVICE):
        logger.info(f"{FIREWALL_SERVICE} is not installed, nothing to disable")
        return
    # Control plane needs 6443, 2379-2380, 10250, 10257, 10259; workers 10250, 30000-32767
    host.stop_service(FIREWALL_SERVICE)
    host.disable_service(FIREWALL_SERVICE)


def relax_security(host: Host) -> None:
    logger.info("--- Disabling SELinux and Firewalld ---")
    disable_selinux(host)
    disable_firewall(host)
