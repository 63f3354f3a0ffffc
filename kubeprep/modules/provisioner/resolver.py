"""OS detection and package repository selection.

The CRI-O packages come from the openSUSE Kubic repositories, which are
published per CentOS generation. Hosts on release 9 or newer use the
``CentOS_9`` tree; everything older uses ``CentOS_8``.
"""

import logging
import re
from typing import Dict

from .errors import UnsupportedOSError
from .host import Host
from .models import CrioRepos, OSRelease, RepoDescriptor
from .utils import minor_series

logger = logging.getLogger("kubeprep.provisioner.resolver")

KUBIC_BASE = 'https://download.opensuse.org/repositories/devel:/kubic:/libcontainers:/stable'
K8S_PKGS_BASE = 'https://pkgs.k8s.io/core:/stable:'

RHEL_FAMILY = {'rhel', 'centos', 'fedora', 'rocky', 'almalinux', 'ol'}
MIN_SUPPORTED_RELEASE = 8


def _parse_key_values(text: str) -> Dict[str, str]:
    data: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        key, value = line.split('=', 1)
        data[key.strip()] = value.strip().strip('"').strip("'")
    return data


def parse_os_release(text: str) -> OSRelease:
    """Parse /etc/os-release contents into an :class:`OSRelease`.

    Raises:
        UnsupportedOSError: If VERSION_ID is missing or malformed, the distribution
            is not Red Hat family, or the release predates RHEL 8
    """
    data = _parse_key_values(text or '')
    distro_id = data.get('ID', '').lower()
    id_like = tuple(data.get('ID_LIKE', '').lower().split())
    version_id = data.get('VERSION_ID', '')

    match = re.match(r'^(\d+)', version_id)
    if not match:
        raise UnsupportedOSError(
            f"Cannot determine OS major release from VERSION_ID={version_id!r}"
        )
    major = int(match.group(1))

    if distro_id not in RHEL_FAMILY and not RHEL_FAMILY.intersection(id_like):
        raise UnsupportedOSError(
            f"Unsupported distribution {distro_id or 'unknown'!r}: only Red Hat family hosts are supported"
        )

    # Fedora numbers its releases independently and is always on the newer tree
    if distro_id != 'fedora' and major < MIN_SUPPORTED_RELEASE:
        raise UnsupportedOSError(
            f"Unsupported release {distro_id} {version_id}: {MIN_SUPPORTED_RELEASE} or newer is required"
        )

    return OSRelease(
        distro_id=distro_id,
        major=major,
        id_like=id_like,
        version_id=version_id,
        pretty_name=data.get('PRETTY_NAME', ''),
    )


def detect_os(host: Host) -> OSRelease:
    """Read and parse the host's os-release metadata."""
    release = parse_os_release(host.query_os_release())
    logger.info(f"🖥️  Detected {release.pretty_name or release.distro_id} (major release {release.major})")
    return release


def resolve_crio_repos(major: int, crio_version: str) -> CrioRepos:
    """Select the CRI-O repository pair for an OS major release.

    Releases 9 and newer map to the CentOS_9 tree, every other integer to CentOS_8.
    """
    flavor = 'CentOS_9' if major >= 9 else 'CentOS_8'
    base_url = f'{KUBIC_BASE}/{flavor}/devel:kubic:libcontainers:stable.repo'
    runtime_url = (
        f'{KUBIC_BASE}:/cri-o:/{crio_version}/{flavor}/'
        f'devel:kubic:libcontainers:stable:cri-o:{crio_version}.repo'
    )
    return CrioRepos(
        base_url=base_url,
        runtime_url=runtime_url,
        crio_version=crio_version,
        os_flavor=flavor,
    )


def kubernetes_repo(kube_version: str) -> RepoDescriptor:
    """Build the pkgs.k8s.io repository for the version's minor series."""
    series = minor_series(kube_version)
    baseurl = f'{K8S_PKGS_BASE}/v{series}/rpm/'
    return RepoDescriptor(
        repo_id='kubernetes',
        name='Kubernetes',
        baseurl=baseurl,
        gpgkey=f'{baseurl}repodata/repomd.xml.key',
    )
