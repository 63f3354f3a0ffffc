"""Host capabilities used by the provisioner.

Every side effect the provisioner has on a machine goes through a
:class:`Host`. :class:`SystemHost` performs the work with dnf, systemctl,
modprobe, sysctl and HTTPS fetches; :class:`DryRunHost` reads facts from
the machine but only records the changes it would make.
"""

import logging
import os
import socket
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple, Type

import requests
from requests.adapters import HTTPAdapter, Retry

from ...config import Config
from .errors import (
    CommandError,
    NetworkFetchError,
    PackageInstallError,
    ServiceError,
)

logger = logging.getLogger("kubeprep.provisioner.host")

OS_RELEASE_PATH = '/etc/os-release'


class Host(ABC):
    """Capabilities the provisioner needs from the machine being provisioned."""

    @abstractmethod
    def query_os_release(self) -> str:
        """Return the raw contents of /etc/os-release."""

    @abstractmethod
    def hostname(self) -> str:
        """Return the configured host name."""

    @abstractmethod
    def read_file(self, path: str) -> Optional[str]:
        """Return file contents, or None when the file does not exist."""

    @abstractmethod
    def write_file(self, path: str, content: str, mode: int = 0o644) -> None:
        """Create or replace a file."""

    @abstractmethod
    def append_lines(self, path: str, lines: Sequence[str]) -> None:
        """Append lines to a file, creating it when needed."""

    @abstractmethod
    def run(self, args: Sequence[str], error_cls: Type[CommandError] = CommandError) -> str:
        """Run a command and return its stdout, raising ``error_cls`` on failure."""

    @abstractmethod
    def list_modules(self) -> List[str]:
        """Return the names of the kernel modules currently loaded."""

    @abstractmethod
    def service_exists(self, name: str) -> bool:
        """Return True when systemd knows a unit with this name."""

    @abstractmethod
    def selinux_mode(self) -> str:
        """Return the current SELinux mode (Enforcing, Permissive or Disabled)."""

    @abstractmethod
    def fetch_url(self, url: str) -> str:
        """Download a text resource over HTTPS."""

    # Operations below are expressed through run() so every implementation
    # shares the same command lines.

    def update_packages(self) -> None:
        self.run(['dnf', 'update', '-y'], PackageInstallError)

    def install_packages(self, packages: Iterable[str], extra_args: Sequence[str] = ()) -> None:
        self.run(['dnf', 'install', '-y', *packages, *extra_args], PackageInstallError)

    def clean_package_cache(self) -> None:
        self.run(['dnf', 'clean', 'all'], PackageInstallError)

    def load_module(self, name: str) -> None:
        self.run(['modprobe', name])

    def apply_sysctl(self) -> None:
        self.run(['sysctl', '--system'])

    def set_selinux_permissive(self) -> None:
        self.run(['setenforce', '0'])

    def daemon_reload(self) -> None:
        self.run(['systemctl', 'daemon-reload'], ServiceError)

    def enable_service(self, name: str, now: bool = False) -> None:
        args = ['systemctl', 'enable', name]
        if now:
            args.append('--now')
        self.run(args, ServiceError)

    def start_service(self, name: str) -> None:
        self.run(['systemctl', 'start', name], ServiceError)

    def stop_service(self, name: str) -> None:
        self.run(['systemctl', 'stop', name], ServiceError)

    def disable_service(self, name: str) -> None:
        self.run(['systemctl', 'disable', name], ServiceError)


def _parse_lsmod(output: str) -> List[str]:
    lines = output.strip().splitlines()
    # First line is the "Module Size Used by" header
    return [line.split()[0] for line in lines[1:] if line.strip()]


class SystemHost(Host):
    """Provision the local machine. Must run as root."""

    def __init__(self, http_timeout: Optional[float] = None, max_retries: Optional[int] = None):
        self.http_timeout = http_timeout if http_timeout is not None else Config.HTTP_TIMEOUT
        max_retries = max_retries if max_retries is not None else Config.MAX_RETRIES
        self.session = requests.Session()
        retry = Retry(
            total=max_retries,
            backoff_factor=Config.RETRY_DELAY,
            status_forcelist=(500, 502, 503, 504),
        )
        self.session.mount('https://', HTTPAdapter(max_retries=retry))
        self.session.mount('http://', HTTPAdapter(max_retries=retry))

    def query_os_release(self) -> str:
        return self.read_file(OS_RELEASE_PATH) or ''

    def hostname(self) -> str:
        return socket.gethostname()

    def read_file(self, path: str) -> Optional[str]:
        file_path = Path(path).expanduser()
        if not file_path.exists():
            return None
        return file_path.read_text(encoding='utf-8', errors='replace')

    def write_file(self, path: str, content: str, mode: int = 0o644) -> None:
        file_path = Path(path).expanduser()
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(content, encoding='utf-8')
            os.chmod(file_path, mode)
        except OSError as e:
            logger.error(f"Failed to write {file_path}: {e}")
            raise CommandError(f"Failed to write {file_path}: {e}") from e
        logger.debug(f"Wrote {file_path}")

    def append_lines(self, path: str, lines: Sequence[str]) -> None:
        file_path = Path(path).expanduser()
        try:
            with open(file_path, 'a', encoding='utf-8') as f:
                for line in lines:
                    f.write(f'{line}\n')
        except OSError as e:
            raise CommandError(f"Failed to append to {file_path}: {e}") from e

    def run(self, args: Sequence[str], error_cls: Type[CommandError] = CommandError) -> str:
        command = ' '.join(args)
        logger.debug(f"$ {command}")
        try:
            result = subprocess.run(list(args), capture_output=True, text=True, check=False)
        except FileNotFoundError as e:
            raise error_cls(f"Command not found: {args[0]}", returncode=127, command=args) from e
        if result.returncode != 0:
            stderr = result.stderr.strip()
            raise error_cls(
                f"'{command}' failed: {stderr}" if stderr else f"'{command}' failed",
                returncode=result.returncode,
                command=args,
            )
        return result.stdout

    def list_modules(self) -> List[str]:
        return _parse_lsmod(self.run(['lsmod']))

    def service_exists(self, name: str) -> bool:
        args = ['systemctl', 'list-unit-files', f'{name}.service', '--no-legend']
        try:
            result = subprocess.run(args, capture_output=True, text=True, check=False)
        except FileNotFoundError as e:
            raise ServiceError('Command not found: systemctl', returncode=127, command=args) from e
        return result.returncode == 0 and bool(result.stdout.strip())

    def selinux_mode(self) -> str:
        try:
            return self.run(['getenforce']).strip()
        except CommandError:
            # No SELinux userland means SELinux is not active
            return 'Disabled'

    def fetch_url(self, url: str) -> str:
        logger.debug(f"GET {url}")
        try:
            response = self.session.get(url, timeout=self.http_timeout, allow_redirects=True)
            response.raise_for_status()
        except requests.RequestException as e:
            status = getattr(getattr(e, 'response', None), 'status_code', None)
            raise NetworkFetchError(f"Failed to fetch {url}: {e}", returncode=status) from e
        return response.text


class DryRunHost(SystemHost):
    """Read facts from the local machine but only record intended changes."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.actions: List[Tuple[str, ...]] = []
        self.files: Dict[str, str] = {}
        self.loaded: Set[str] = set()

    def _record(self, *action: str) -> None:
        self.actions.append(action)
        logger.info(f"[dry-run] {' '.join(action)}")

    def read_file(self, path: str) -> Optional[str]:
        if path in self.files:
            return self.files[path]
        return super().read_file(path)

    def write_file(self, path: str, content: str, mode: int = 0o644) -> None:
        self.files[path] = content
        self._record('write', path)

    def append_lines(self, path: str, lines: Sequence[str]) -> None:
        existing = self.read_file(path) or ''
        self.files[path] = existing + ''.join(f'{line}\n' for line in lines)
        self._record('append', path, *lines)

    def run(self, args: Sequence[str], error_cls: Type[CommandError] = CommandError) -> str:
        self._record(*args)
        return ''

    def load_module(self, name: str) -> None:
        super().load_module(name)
        self.loaded.add(name)

    def list_modules(self) -> List[str]:
        try:
            live = _parse_lsmod(super().run(['lsmod']))
        except CommandError:
            live = []
        return live + sorted(self.loaded - set(live))

    def selinux_mode(self) -> str:
        try:
            return super().run(['getenforce']).strip()
        except CommandError:
            return 'Disabled'

    def fetch_url(self, url: str) -> str:
        self._record('fetch', url)
        return f'# fetched from {url}\n'
