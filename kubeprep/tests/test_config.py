import pytest

from kubeprep.config import Config, load_node_config
from kubeprep.modules.provisioner import ConfigError, NodeRole, VersionMismatchError, validate_versions
from kubeprep.modules.provisioner.models import DEFAULT_PACKAGES
from kubeprep.modules.provisioner.utils import minor_series


def test_defaults():
    config = load_node_config()
    assert config.kube_version == Config.KUBE_VERSION
    assert config.crio_version == Config.CRIO_VERSION
    assert config.packages == list(DEFAULT_PACKAGES)


def test_node_file_and_overrides(tmp_path):
    node_yaml = tmp_path / "node.yaml"
    node_yaml.write_text("""
kube_version: 1.30.2
crio_version: "1.30"
node_role: worker
packages: [socat, conntrack]
""")
    config = load_node_config(str(node_yaml), overrides={"node_role": "control-plane", "profile": None})
    assert config.kube_version == "1.30.2"
    assert config.crio_version == "1.30"
    assert config.node_role == NodeRole.CONTROL_PLANE
    assert config.packages == ["socat", "conntrack"]
    assert config.profile == Config.PROFILE


def test_unknown_key_is_rejected(tmp_path):
    node_yaml = tmp_path / "node.yaml"
    node_yaml.write_text("kube_verison: 1.29.0\n")
    with pytest.raises(ConfigError):
        load_node_config(str(node_yaml))


def test_bad_role_is_rejected():
    with pytest.raises(ConfigError):
        load_node_config(overrides={"node_role": "master"})


def test_invalid_yaml_is_config_error(tmp_path):
    node_yaml = tmp_path / "node.yaml"
    node_yaml.write_text("kube_version: [unclosed\n")
    with pytest.raises(ConfigError):
        load_node_config(str(node_yaml))


def test_minor_series():
    assert minor_series("1.29.0") == "1.29"
    assert minor_series("v1.30") == "1.30"


@pytest.mark.parametrize("kube,crio", [("1.29.0", "1.29"), ("1.30.4", "1.30.1")])
def test_matching_versions(kube, crio):
    validate_versions(kube, crio)


def test_mismatched_versions():
    with pytest.raises(VersionMismatchError):
        validate_versions("1.29.0", "1.28")


def test_kube_version_needs_patch_release():
    with pytest.raises(ConfigError):
        validate_versions("1.29", "1.29")


def test_unquoted_version_asks_for_quotes(tmp_path):
    node_yaml = tmp_path / "node.yaml"
    node_yaml.write_text("kube_version: 1.30.2\ncrio_version: 1.30\n")
    with pytest.raises(ConfigError, match='crio_version must be a quoted string') as exc_info:
        load_node_config(str(node_yaml))
    assert "1.3" in str(exc_info.value)
