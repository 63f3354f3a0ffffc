from typing import Dict, List, Optional, Sequence, Set, Type

import pytest

from kubeprep.modules.provisioner.errors import CommandError, NetworkFetchError
from kubeprep.modules.provisioner.host import Host
from kubeprep.modules.provisioner.models import ProvisionConfig

RHEL9_OS_RELEASE = '''NAME="Rocky Linux"
VERSION="9.3 (Blue Onyx)"
ID="rocky"
ID_LIKE="rhel centos fedora"
VERSION_ID="9.3"
PRETTY_NAME="Rocky Linux 9.3 (Blue Onyx)"
'''

RHEL8_OS_RELEASE = '''NAME="CentOS Stream"
VERSION="8"
ID="centos"
ID_LIKE="rhel fedora"
VERSION_ID="8"
PRETTY_NAME="CentOS Stream 8"
'''

SELINUX_CONFIG = '''# This file controls the state of SELinux on the system.
SELINUX=enforcing
SELINUXTYPE=targeted
'''


class FakeHost(Host):
    """In-memory host that records every command."""

    def __init__(self, os_release=RHEL9_OS_RELEASE, hostname='control-1',
                 modules_that_load=('overlay', 'br_netfilter'), services=('firewalld',)):
        self._os_release = os_release
        self._hostname = hostname
        self.files: Dict[str, str] = {'/etc/selinux/config': SELINUX_CONFIG}
        self.commands: List[List[str]] = []
        self.fetched: List[str] = []
        self.modules: Set[str] = set()
        self.modules_that_load = set(modules_that_load)
        self.services = set(services)
        self.selinux = 'Enforcing'
        self.failing: Dict[str, Type[CommandError]] = {}
        self.offline = False

    def query_os_release(self) -> str:
        return self._os_release

    def hostname(self) -> str:
        return self._hostname

    def read_file(self, path: str) -> Optional[str]:
        return self.files.get(path)

    def write_file(self, path: str, content: str, mode: int = 0o644) -> None:
        self.files[path] = content

    def append_lines(self, path: str, lines: Sequence[str]) -> None:
        self.files[path] = self.files.get(path, '') + ''.join(f'{line}\n' for line in lines)

    def run(self, args: Sequence[str], error_cls: Type[CommandError] = CommandError) -> str:
        args = list(args)
        self.commands.append(args)
        command = ' '.join(args)
        for prefix, cls in self.failing.items():
            if command.startswith(prefix):
                raise cls(f"'{command}' failed", returncode=1, command=args)
        if args[0] == 'modprobe' and args[1] in self.modules_that_load:
            self.modules.add(args[1])
        if args[:2] == ['setenforce', '0']:
            self.selinux = 'Permissive'
        return ''

    def list_modules(self) -> List[str]:
        return sorted(self.modules)

    def service_exists(self, name: str) -> bool:
        return name in self.services

    def selinux_mode(self) -> str:
        return self.selinux

    def fetch_url(self, url: str) -> str:
        if self.offline:
            raise NetworkFetchError(f"Failed to fetch {url}", returncode=503)
        self.fetched.append(url)
        return f'[repo]\nbaseurl={url}\n'

    def ran(self, *prefix: str) -> bool:
        return any(cmd[:len(prefix)] == list(prefix) for cmd in self.commands)


@pytest.fixture
def host():
    return FakeHost()


@pytest.fixture
def config():
    return ProvisionConfig(kube_version='1.29.0', crio_version='1.29', profile='/root/.bashrc')
