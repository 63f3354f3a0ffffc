"""Data models for the node provisioner."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

YUM_REPOS_DIR = '/etc/yum.repos.d'

DEFAULT_PACKAGES: Tuple[str, ...] = (
    'socat', 'conntrack', 'ipset', 'vim', 'git', 'curl', 'wget', 'bash-completion',
)

PROFILE_LINES: Tuple[str, ...] = (
    'source <(kubectl completion bash)',
    'alias k=kubectl',
    'complete -F __start_kubectl k',
)


class NodeRole(str, Enum):
    """Role a node plays in the cluster."""
    CONTROL_PLANE = 'control-plane'
    WORKER = 'worker'


class ProvisionPhase(str, Enum):
    """Phases of a provisioning run, in execution order."""
    NOT_STARTED = 'not_started'
    PREFLIGHT = 'preflight'
    DEPENDENCIES = 'dependencies'
    SECURITY = 'security'
    KERNEL = 'kernel'
    CONTAINER_RUNTIME = 'container_runtime'
    KUBERNETES = 'kubernetes'
    KUBELET = 'kubelet'
    SHELL_PROFILE = 'shell_profile'
    COMPLETED = 'completed'
    FAILED = 'failed'


@dataclass(frozen=True)
class OSRelease:
    """Host distribution as read from /etc/os-release."""
    distro_id: str
    major: int
    id_like: Tuple[str, ...] = ()
    version_id: str = ''
    pretty_name: str = ''


@dataclass(frozen=True)
class RepoDescriptor:
    """A yum/dnf repository registration."""
    repo_id: str
    name: str
    baseurl: str
    gpgkey: Optional[str] = None
    enabled: bool = True
    gpgcheck: bool = True

    @property
    def filename(self) -> str:
        return f'{YUM_REPOS_DIR}/{self.repo_id}.repo'

    def render(self) -> str:
        """Render the repository as a .repo INI section."""
        lines = [
            f'[{self.repo_id}]',
            f'name={self.name}',
            f'baseurl={self.baseurl}',
            f'enabled={int(self.enabled)}',
            f'gpgcheck={int(self.gpgcheck)}',
        ]
        if self.gpgkey:
            lines.append(f'gpgkey={self.gpgkey}')
        return '\n'.join(lines) + '\n'


@dataclass(frozen=True)
class CrioRepos:
    """The pair of CRI-O repository files selected for an OS release."""
    base_url: str
    runtime_url: str
    crio_version: str
    os_flavor: str

    @property
    def base_filename(self) -> str:
        return f'{YUM_REPOS_DIR}/devel:kubic:libcontainers:stable.repo'

    @property
    def runtime_filename(self) -> str:
        return f'{YUM_REPOS_DIR}/devel:kubic:libcontainers:stable:cri-o:{self.crio_version}.repo'

    def files(self) -> Dict[str, str]:
        """Map each target .repo path to the URL it is fetched from."""
        return {
            self.base_filename: self.base_url,
            self.runtime_filename: self.runtime_url,
        }


@dataclass
class ProvisionConfig:
    """Inputs for one provisioning run."""
    kube_version: str = '1.29.0'
    crio_version: str = '1.29'
    node_role: Optional[NodeRole] = None
    pod_network_cidr: str = '10.244.0.0/16'
    profile: str = '~/.bashrc'
    packages: List[str] = field(default_factory=lambda: list(DEFAULT_PACKAGES))


@dataclass
class ProvisionState:
    """Tracks the progress of a provisioning run."""
    phase: ProvisionPhase = ProvisionPhase.NOT_STARTED
    completed: List[ProvisionPhase] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def update_phase(self, phase: ProvisionPhase) -> None:
        """Update the current phase."""
        self.phase = phase

    def complete_phase(self, phase: ProvisionPhase) -> None:
        self.completed.append(phase)

    def add_error(self, error: str) -> None:
        """Add an error message to the run state."""
        self.errors.append(error)
