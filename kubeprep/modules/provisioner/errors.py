"""Error types raised while provisioning a node."""

from typing import List, Optional, Sequence


class ProvisionError(Exception):
    """Base class for every failure that halts a provisioning run.

    Attributes:
        step: Name of the provisioning phase that failed (set by the orchestrator)
        returncode: Exit status of the underlying tool, if any
        command: The command that failed, if any
    """

    def __init__(
        self,
        message: str,
        step: Optional[str] = None,
        returncode: Optional[int] = None,
        command: Optional[Sequence[str]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.step = step
        self.returncode = returncode
        self.command: List[str] = list(command) if command else []

    def __str__(self) -> str:
        parts = []
        if self.step:
            parts.append(f"[{self.step}]")
        parts.append(self.message)
        if self.returncode is not None:
            parts.append(f"(exit status {self.returncode})")
        return " ".join(parts)


class CommandError(ProvisionError):
    """A host command exited with a non-zero status."""
    pass


class PackageInstallError(CommandError):
    """The package manager failed to update, install or clean."""
    pass


class ServiceError(CommandError):
    """systemctl failed to enable, start, stop or reload a unit."""
    pass


class NetworkFetchError(ProvisionError):
    """A repository descriptor or key could not be downloaded."""
    pass


class UnsupportedOSError(ProvisionError):
    """Host metadata is missing, malformed or names an unsupported distribution."""
    pass


class KernelModuleError(ProvisionError):
    """A required kernel module is not present after the load attempt."""
    pass


class VersionMismatchError(ProvisionError):
    """The runtime version does not track the Kubernetes major/minor."""
    pass


class ConfigError(ProvisionError):
    """The node configuration is invalid."""
    pass
