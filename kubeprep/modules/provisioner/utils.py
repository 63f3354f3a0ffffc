"""Utility functions for the node provisioner."""

import logging
import re
from typing import Any, Dict, Tuple

import yaml

from .errors import ConfigError, VersionMismatchError

logger = logging.getLogger("kubeprep.provisioner.utils")

_VERSION_RE = re.compile(r'^v?(\d+)\.(\d+)(?:\.(\d+))?$')


def parse_version(version: str) -> Tuple[int, ...]:
    """Parse a release string such as '1.29.0' or '1.29'.

    Args:
        version: Release string, optionally prefixed with 'v'

    Returns:
        tuple: Numeric components (two or three of them)

    Raises:
        ConfigError: If the string is not a dotted release number
    """
    match = _VERSION_RE.match(str(version).strip())
    if not match:
        raise ConfigError(f"Invalid version string: {version!r}")
    return tuple(int(part) for part in match.groups() if part is not None)


def minor_series(version: str) -> str:
    """Return the 'major.minor' series of a release, e.g. '1.29.0' -> '1.29'."""
    major, minor = parse_version(version)[:2]
    return f'{major}.{minor}'


def validate_versions(kube_version: str, crio_version: str) -> None:
    """Ensure the CRI-O release tracks the Kubernetes major/minor.

    Raises:
        ConfigError: If the Kubernetes version is not a full X.Y.Z release
        VersionMismatchError: If the two series differ
    """
    if len(parse_version(kube_version)) != 3:
        raise ConfigError(
            f"Kubernetes version must be a full release (X.Y.Z), got {kube_version!r}"
        )
    kube_series = minor_series(kube_version)
    crio_series = minor_series(crio_version)
    if kube_series != crio_series:
        raise VersionMismatchError(
            f"CRI-O {crio_version} does not match Kubernetes {kube_version} "
            f"(expected a {kube_series}.x runtime)"
        )


def read_yaml_file(path: str) -> Dict[str, Any]:
    """Read a YAML file and return its contents as a dictionary.

    Raises:
        FileNotFoundError: If the file does not exist
        yaml.YAMLError: If the file is not valid YAML
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.error(f"YAML file not found: {path}")
        raise
    except yaml.YAMLError as e:
        logger.error(f"Invalid YAML in {path}: {e}")
        raise


def render_sysctl(params: Dict[str, str]) -> str:
    """Render sysctl parameters as aligned 'name = value' lines."""
    width = max(len(name) for name in params)
    return ''.join(f'{name.ljust(width)} = {value}\n' for name, value in params.items())
