import logging
from typing import Optional

import typer

from kubeprep.config import Config
from kubeprep.modules.provisioner import (
    ProvisionError,
    SystemHost,
    kubernetes_repo,
    parse_os_release,
    resolve_crio_repos,
)

app = typer.Typer()
logger = logging.getLogger("kubeprep.commands.repos")


@app.command("show")
def show_repos(
    major: Optional[int] = typer.Option(None, help="OS major release; detected from the host when omitted"),
    os_release_file: str = typer.Option("/etc/os-release", help="os-release file to detect the OS from"),
    crio_version: str = typer.Option(Config.CRIO_VERSION, help="CRI-O release"),
    kube_version: str = typer.Option(Config.KUBE_VERSION, help="Kubernetes release"),
):
    """Show the repositories a node would be configured with."""
    try:
        if major is None:
            text = SystemHost().read_file(os_release_file) or ""
            major = parse_os_release(text).major
        crio = resolve_crio_repos(major, crio_version)
        kube = kubernetes_repo(kube_version)
    except ProvisionError as e:
        logger.error(f"❌ {e}")
        raise typer.Exit(code=1)

    typer.echo(f"📦 CRI-O repositories ({crio.os_flavor}):")
    for path, url in crio.files().items():
        typer.echo(f"  {path}")
        typer.echo(f"    <- {url}")
    typer.echo(f"📄 {kube.filename}:")
    typer.echo(kube.render())
