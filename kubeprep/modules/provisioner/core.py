"""Provisioning orchestrator.

Runs the provisioning phases in order against a :class:`Host` and stops at
the first failure.
"""

import logging
from typing import Callable, List, Optional, Tuple

from .errors import ProvisionError
from .host import Host
from .kernel import configure_kernel
from .models import NodeRole, OSRelease, ProvisionConfig, ProvisionPhase, ProvisionState
from .packages import install_crio, install_dependencies, install_kubernetes
from .report import configure_shell_profile, render_next_steps, resolve_role
from .resolver import detect_os, resolve_crio_repos
from .security import relax_security
from .service import start_container_runtime, start_kubelet
from .utils import validate_versions

logger = logging.getLogger("kubeprep.provisioner.core")


class Provisioner:
    """Prepares one Red Hat family host to run Kubernetes with CRI-O.

    Every action goes through the injected host, so the same sequence can run
    against the real machine, a dry-run recorder or a fake in tests.
    """

    def __init__(self, host: Host, config: ProvisionConfig):
        self.host = host
        self.config = config
        self.state = ProvisionState()
        self.os_release: Optional[OSRelease] = None
        self.role: Optional[NodeRole] = None

    def phases(self) -> List[Tuple[ProvisionPhase, Callable[[], None]]]:
        return [
            (ProvisionPhase.PREFLIGHT, self.preflight),
            (ProvisionPhase.DEPENDENCIES, self.install_dependencies),
            (ProvisionPhase.SECURITY, self.relax_security),
            (ProvisionPhase.KERNEL, self.configure_kernel),
            (ProvisionPhase.CONTAINER_RUNTIME, self.install_container_runtime),
            (ProvisionPhase.KUBERNETES, self.install_kubernetes),
            (ProvisionPhase.KUBELET, self.start_kubelet),
            (ProvisionPhase.SHELL_PROFILE, self.configure_shell_profile),
        ]

    def run(self) -> str:
        """Run every phase and return the next-steps report.

        Raises:
            ProvisionError: The first failure, with ``step`` set to the failed phase
        """
        logger.info(f"🚀 Starting Kubernetes v{self.config.kube_version} installation setup...")
        logger.info(f"Container Runtime: CRI-O v{self.config.crio_version}")

        for phase, action in self.phases():
            self.state.update_phase(phase)
            try:
                action()
            except ProvisionError as e:
                e.step = e.step or phase.value
                self.state.add_error(str(e))
                self.state.update_phase(ProvisionPhase.FAILED)
                logger.error(f"❌ Provisioning failed during {phase.value}: {e.message}")
                raise
            self.state.complete_phase(phase)

        self.state.update_phase(ProvisionPhase.COMPLETED)
        return render_next_steps(self.config, self.role)

    def preflight(self) -> None:
        """Validate inputs and detect the OS before touching the host."""
        validate_versions(self.config.kube_version, self.config.crio_version)
        self.os_release = detect_os(self.host)
        self.role = resolve_role(self.config, self.host.hostname())
        self.state.metadata['os_release'] = self.os_release.major
        self.state.metadata['role'] = self.role.value

    def install_dependencies(self) -> None:
        install_dependencies(self.host, self.config.packages)

    def relax_security(self) -> None:
        relax_security(self.host)

    def configure_kernel(self) -> None:
        configure_kernel(self.host)

    def install_container_runtime(self) -> None:
        repos = resolve_crio_repos(self.os_release.major, self.config.crio_version)
        logger.info(f"Using {repos.os_flavor} CRI-O repositories")
        self.state.metadata['crio_repos'] = repos.files()
        install_crio(self.host, repos)
        start_container_runtime(self.host)

    def install_kubernetes(self) -> None:
        repo = install_kubernetes(self.host, self.config.kube_version)
        self.state.metadata['kubernetes_repo'] = repo.baseurl

    def start_kubelet(self) -> None:
        start_kubelet(self.host)

    def configure_shell_profile(self) -> None:
        configure_shell_profile(self.host, self.config.profile)


def provision(host: Host, config: ProvisionConfig) -> str:
    """Provision a host and return the next-steps report."""
    return Provisioner(host, config).run()
