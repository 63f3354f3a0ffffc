import pytest

from kubeprep.modules.provisioner.errors import UnsupportedOSError
from kubeprep.modules.provisioner.resolver import kubernetes_repo, parse_os_release, resolve_crio_repos
from conftest import RHEL8_OS_RELEASE, RHEL9_OS_RELEASE


@pytest.mark.parametrize("major", [9, 10, 39])
def test_release_9_and_newer_use_centos_9(major):
    repos = resolve_crio_repos(major, "1.29")
    assert repos.os_flavor == "CentOS_9"
    assert "/CentOS_9/" in repos.base_url
    assert "/CentOS_9/" in repos.runtime_url
    assert "CentOS_8" not in repos.base_url + repos.runtime_url


@pytest.mark.parametrize("major", [8, 7, 0, -1])
def test_older_releases_use_centos_8(major):
    repos = resolve_crio_repos(major, "1.29")
    assert repos.os_flavor == "CentOS_8"
    assert "/CentOS_8/" in repos.base_url
    assert "/CentOS_8/" in repos.runtime_url


def test_crio_urls_match_published_layout():
    repos = resolve_crio_repos(9, "1.29")
    assert repos.base_url == (
        "https://download.opensuse.org/repositories/devel:/kubic:/libcontainers:/stable/"
        "CentOS_9/devel:kubic:libcontainers:stable.repo"
    )
    assert repos.runtime_url == (
        "https://download.opensuse.org/repositories/devel:/kubic:/libcontainers:/stable:/cri-o:/1.29/"
        "CentOS_9/devel:kubic:libcontainers:stable:cri-o:1.29.repo"
    )
    assert repos.files() == {
        "/etc/yum.repos.d/devel:kubic:libcontainers:stable.repo": repos.base_url,
        "/etc/yum.repos.d/devel:kubic:libcontainers:stable:cri-o:1.29.repo": repos.runtime_url,
    }


def test_parse_os_release():
    release = parse_os_release(RHEL9_OS_RELEASE)
    assert release.distro_id == "rocky"
    assert release.major == 9
    assert release.version_id == "9.3"
    assert "rhel" in release.id_like

    assert parse_os_release(RHEL8_OS_RELEASE).major == 8


def test_fedora_is_accepted():
    release = parse_os_release('ID=fedora\nVERSION_ID=39\n')
    assert release.major == 39
    assert resolve_crio_repos(release.major, "1.29").os_flavor == "CentOS_9"


@pytest.mark.parametrize("text", [
    "",
    "garbage without equals signs",
    'ID="rhel"\n',
    'ID="rhel"\nVERSION_ID=""\n',
    'ID="rhel"\nVERSION_ID="stream"\n',
])
def test_unparseable_metadata_is_an_error(text):
    with pytest.raises(UnsupportedOSError):
        parse_os_release(text)


def test_non_redhat_distribution_is_rejected():
    with pytest.raises(UnsupportedOSError, match="ubuntu"):
        parse_os_release('ID=ubuntu\nID_LIKE=debian\nVERSION_ID="22.04"\n')


def test_rhel7_is_rejected():
    with pytest.raises(UnsupportedOSError):
        parse_os_release('ID="centos"\nVERSION_ID="7"\n')


def test_kubernetes_repo_uses_minor_series():
    repo = kubernetes_repo("1.29.0")
    assert repo.filename == "/etc/yum.repos.d/kubernetes.repo"
    assert repo.render() == (
        "[kubernetes]\n"
        "name=Kubernetes\n"
        "baseurl=https://pkgs.k8s.io/core:/stable:/v1.29/rpm/\n"
        "enabled=1\n"
        "gpgcheck=1\n"
        "gpgkey=https://pkgs.k8s.io/core:/stable:/v1.29/rpm/repodata/repomd.xml.key\n"
    )
