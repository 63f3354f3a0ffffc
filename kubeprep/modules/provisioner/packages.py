"""Package repository registration and installation.

Handles the base dependency set, the CRI-O container runtime and the
pinned Kubernetes tools.
"""

import logging
from typing import Iterable

from .host import Host
from .models import CrioRepos, RepoDescriptor
from .resolver import kubernetes_repo

logger = logging.getLogger("kubeprep.provisioner.packages")

CRIO_PACKAGE = 'cri-o'
KUBERNETES_TOOLS = ('kubelet', 'kubeadm', 'kubectl')


def install_dependencies(host: Host, packages: Iterable[str]) -> None:
    """Update the system and install the base dependency set."""
    logger.info("--- Updating System and Installing Dependencies ---")
    host.update_packages()
    host.install_packages(list(packages))


def register_crio_repos(host: Host, repos: CrioRepos) -> None:
    """Download both CRI-O .repo files into the host repository store."""
    for path, url in repos.files().items():
        logger.info(f"📥 Fetching {url}")
        host.write_file(path, host.fetch_url(url))


def install_crio(host: Host, repos: CrioRepos) -> None:
    """Register the CRI-O repositories and install the runtime package."""
    logger.info(f"--- Installing CRI-O Container Runtime (v{repos.crio_version}) ---")
    register_crio_repos(host, repos)
    host.install_packages([CRIO_PACKAGE])


def register_repo(host: Host, repo: RepoDescriptor) -> None:
    host.write_file(repo.filename, repo.render())
    logger.info(f"📄 Registered repository {repo.repo_id} ({repo.baseurl})")


def pinned_packages(kube_version: str) -> list:
    return [f'{tool}-{kube_version}' for tool in KUBERNETES_TOOLS]


def install_kubernetes(host: Host, kube_version: str) -> RepoDescriptor:
    """Register the Kubernetes repository and install pinned kubelet/kubeadm/kubectl."""
    logger.info("--- Installing Kubernetes Tools (kubeadm, kubelet, kubectl) ---")
    repo = kubernetes_repo(kube_version)
    register_repo(host, repo)
    host.clean_package_cache()
    host.install_packages(
        pinned_packages(kube_version),
        extra_args=[f'--disableexcludes={repo.repo_id}'],
    )
    return repo
