import logging

import typer

from kubeprep.config import load_node_config
from kubeprep.modules.provisioner import ProvisionError, validate_versions

app = typer.Typer()
logger = logging.getLogger("kubeprep.commands.config")


@app.command("validate")
def validate_config(
    file: str = typer.Option(..., "--file", "-f", help="YAML node file"),
):
    """Validate a node file and its Kubernetes/CRI-O version pair."""
    try:
        config = load_node_config(file)
        validate_versions(config.kube_version, config.crio_version)
    except (ProvisionError, FileNotFoundError) as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(code=1)

    role = config.node_role.value if config.node_role else "inferred from hostname"
    typer.echo(f"✅ {file} is valid")
    typer.echo(f"  Kubernetes v{config.kube_version}, CRI-O v{config.crio_version}, role: {role}")
