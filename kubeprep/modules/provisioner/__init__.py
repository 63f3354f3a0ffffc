"""Kubernetes node provisioning for Red Hat family hosts.

This package prepares a single host for kubeadm with CRI-O. It's organized
into several focused modules:

- core: Phase orchestration
- host: Host capabilities (real, dry-run)
- resolver: OS detection and repository selection
- kernel: Kernel modules and sysctl settings
- security: SELinux and firewalld
- packages: Repository registration and package installation
- service: Runtime and kubelet services
- report: Role handling, shell profile and next-step instructions
- models: Data models and types
- errors: Error types
- utils: Utility functions
"""

from .core import Provisioner, provision
from .errors import (
    CommandError,
    ConfigError,
    KernelModuleError,
    NetworkFetchError,
    PackageInstallError,
    ProvisionError,
    ServiceError,
    UnsupportedOSError,
    VersionMismatchError,
)
from .host import DryRunHost, Host, SystemHost
from .kernel import configure_kernel, verify_modules
from .models import (
    CrioRepos,
    NodeRole,
    OSRelease,
    ProvisionConfig,
    ProvisionPhase,
    ProvisionState,
    RepoDescriptor,
)
from .report import infer_role, render_next_steps
from .resolver import detect_os, kubernetes_repo, parse_os_release, resolve_crio_repos
from .utils import minor_series, validate_versions

__all__ = [
    'Provisioner',
    'provision',
    'Host',
    'SystemHost',
    'DryRunHost',
    'ProvisionError',
    'CommandError',
    'PackageInstallError',
    'ServiceError',
    'NetworkFetchError',
    'UnsupportedOSError',
    'KernelModuleError',
    'VersionMismatchError',
    'ConfigError',
    'CrioRepos',
    'NodeRole',
    'OSRelease',
    'ProvisionConfig',
    'ProvisionPhase',
    'ProvisionState',
    'RepoDescriptor',
    'configure_kernel',
    'verify_modules',
    'infer_role',
    'render_next_steps',
    'detect_os',
    'kubernetes_repo',
    'parse_os_release',
    'resolve_crio_repos',
    'minor_series',
    'validate_versions',
]
