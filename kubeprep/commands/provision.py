import logging
import os
from typing import Optional

import typer

from kubeprep.config import load_node_config
from kubeprep.modules.provisioner import DryRunHost, NodeRole, Provisioner, ProvisionError, SystemHost

app = typer.Typer()
logger = logging.getLogger("kubeprep.commands.provision")


@app.command("node")
def provision_node(
    config_file: Optional[str] = typer.Option(None, "--config", "-c", help="YAML node file (quote versions, e.g. crio_version: \"1.30\")"),
    kube_version: Optional[str] = typer.Option(None, help="Kubernetes release to install (X.Y.Z)"),
    crio_version: Optional[str] = typer.Option(None, help="CRI-O release matching the Kubernetes minor (X.Y)"),
    role: Optional[NodeRole] = typer.Option(None, help="Node role; inferred from the hostname when omitted"),
    pod_network_cidr: Optional[str] = typer.Option(None, help="Pod network CIDR suggested for kubeadm init"),
    profile: Optional[str] = typer.Option(None, help="Shell profile that receives kubectl completion"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Only log the changes that would be made"),
):
    """Provision this host: packages, kernel settings, CRI-O and kubeadm/kubelet/kubectl."""
    try:
        config = load_node_config(config_file, overrides={
            "kube_version": kube_version,
            "crio_version": crio_version,
            "node_role": role.value if role else None,
            "pod_network_cidr": pod_network_cidr,
            "profile": profile,
        })
    except (ProvisionError, FileNotFoundError) as e:
        logger.error(f"❌ {e}")
        raise typer.Exit(code=1)

    if not dry_run and os.geteuid() != 0:
        logger.error("❌ Provisioning must run as root (try sudo, or --dry-run)")
        raise typer.Exit(code=1)

    host = DryRunHost() if dry_run else SystemHost()
    provisioner = Provisioner(host, config)
    try:
        report = provisioner.run()
    except ProvisionError as e:
        logger.error(f"❌ {e}")
        raise typer.Exit(code=1)

    typer.echo(report)
    if dry_run:
        typer.echo(f"🧪 Dry run: {len(host.actions)} actions recorded, nothing was changed.")
