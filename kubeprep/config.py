"""Configuration management for the kubeprep application."""
import os
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from jsonschema import ValidationError, validate

# Load environment variables from .env file if it exists
load_dotenv()

class Config:
    """Application configuration with sensible defaults."""

    # Release pair installed on the node
    KUBE_VERSION: str = os.getenv("KUBEPREP_KUBE_VERSION", "1.29.0")
    CRIO_VERSION: str = os.getenv("KUBEPREP_CRIO_VERSION", "1.29")

    # Node settings
    NODE_ROLE: str = os.getenv("KUBEPREP_NODE_ROLE", "")
    POD_NETWORK_CIDR: str = os.getenv("KUBEPREP_POD_NETWORK_CIDR", "10.244.0.0/16")
    PROFILE: str = os.getenv("KUBEPREP_PROFILE", "~/.bashrc")

    # Timeouts (in seconds)
    HTTP_TIMEOUT: int = int(os.getenv("HTTP_TIMEOUT", "30"))

    # Retry configuration
    MAX_RETRIES: int = int(os.getenv("MAX_RETRIES", "3"))
    RETRY_DELAY: float = float(os.getenv("RETRY_DELAY", "1.0"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FORMAT: str = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    @classmethod
    def defaults(cls) -> Dict[str, Any]:
        """Node settings from the environment, keyed like a node file."""
        values: Dict[str, Any] = {
            "kube_version": cls.KUBE_VERSION,
            "crio_version": cls.CRIO_VERSION,
            "pod_network_cidr": cls.POD_NETWORK_CIDR,
            "profile": cls.PROFILE,
        }
        if cls.NODE_ROLE:
            values["node_role"] = cls.NODE_ROLE
        return values


NODE_SCHEMA = {
    "type": "object",
    "properties": {
        "kube_version": {"type": "string", "pattern": r"^\d+\.\d+\.\d+$"},
        "crio_version": {"type": "string", "pattern": r"^\d+\.\d+(\.\d+)?$"},
        "node_role": {"type": "string", "enum": ["control-plane", "worker"]},
        "pod_network_cidr": {"type": "string"},
        "profile": {"type": "string"},
        "packages": {"type": "array", "items": {"type": "string"}},
    },
    "additionalProperties": False,
}

VERSION_KEYS = ("kube_version", "crio_version")


def load_node_config(
    path: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
):
    """Build a ProvisionConfig from defaults, an optional node file and overrides.

    Precedence, highest first: overrides, node file, environment, defaults.

    Raises:
        ConfigError: If the merged settings fail schema validation
    """
    from .modules.provisioner.errors import ConfigError
    from .modules.provisioner.models import NodeRole, ProvisionConfig
    from .modules.provisioner.utils import read_yaml_file

    values = Config.defaults()
    if path:
        try:
            file_values = read_yaml_file(path)
        except yaml.YAMLError as e:
            raise ConfigError(f"{path}: invalid YAML: {e}") from e
        if not isinstance(file_values, dict):
            raise ConfigError(f"{path}: top level must be a mapping")
        values.update(file_values)
    values.update({k: v for k, v in (overrides or {}).items() if v is not None})

    try:
        validate(instance=values, schema=NODE_SCHEMA)
    except ValidationError as ve:
        key = ve.path[0] if ve.path else None
        if key in VERSION_KEYS and ve.validator == "type":
            # YAML reads 1.30 as the float 1.3
            raise ConfigError(
                f"Invalid node configuration: {key} must be a quoted string "
                f"(got {ve.instance!r}; write {key}: \"1.30\", not {key}: 1.30)"
            ) from ve
        raise ConfigError(f"Invalid node configuration: {ve.message}") from ve

    role = values.pop("node_role", None)
    return ProvisionConfig(node_role=NodeRole(role) if role else None, **values)
