"""Operator-facing completion report and shell profile setup."""

import logging
from typing import List, Optional

from .host import Host
from .models import PROFILE_LINES, NodeRole, ProvisionConfig

logger = logging.getLogger("kubeprep.provisioner.report")

RULE = '-' * 56

_ROLE_HINTS = ('master', 'control')


def infer_role(hostname: str) -> NodeRole:
    """Guess the node role from its host name.

    Names containing 'master' or 'control' are control-plane nodes; every
    other name is treated as a worker.
    """
    name = hostname.lower()
    if any(hint in name for hint in _ROLE_HINTS):
        return NodeRole.CONTROL_PLANE
    return NodeRole.WORKER


def resolve_role(config: ProvisionConfig, hostname: str) -> NodeRole:
    if config.node_role is not None:
        return NodeRole(config.node_role)
    role = infer_role(hostname)
    logger.warning(
        f"⚠️  No node role configured, assuming {role.value} from hostname {hostname!r}. "
        "Set --role to be explicit."
    )
    return role


def render_next_steps(config: ProvisionConfig, role: NodeRole) -> str:
    """Render the follow-up instructions shown once provisioning finishes."""
    lines = [
        "Installation complete!",
        RULE,
        "NEXT STEPS:",
        RULE,
    ]
    if role == NodeRole.CONTROL_PLANE:
        lines += [
            "This is a Control Plane node. Initialize the cluster:",
            f"  sudo kubeadm init --pod-network-cidr={config.pod_network_cidr} "
            f"--kubernetes-version=v{config.kube_version}",
        ]
    else:
        lines += [
            "This is a Worker node. Run the kubeadm join command printed by the",
            "Control Plane initialization step:",
            "  sudo kubeadm join <control-plane-host>:6443 --token <token> "
            "--discovery-token-ca-cert-hash sha256:<hash>",
        ]
    lines += [
        "To check the status of your services:",
        "  sudo systemctl status crio",
        "  sudo systemctl status kubelet",
        RULE,
    ]
    return '\n'.join(lines) + '\n'


def missing_profile_lines(existing: Optional[str]) -> List[str]:
    present = set((existing or '').splitlines())
    return [line for line in PROFILE_LINES if line not in present]


def configure_shell_profile(host: Host, profile: str) -> None:
    """Add kubectl completion and the 'k' alias to the shell profile."""
    existing = host.read_file(profile)
    missing = missing_profile_lines(existing)
    if not missing:
        logger.debug(f"{profile} already has kubectl completion")
        return
    if existing and not existing.endswith('\n'):
        missing = [''] + missing
    host.append_lines(profile, missing)
    logger.info(f"🐚 Added kubectl completion to {profile}")
