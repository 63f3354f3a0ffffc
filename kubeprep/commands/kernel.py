import logging

import typer

from kubeprep.modules.provisioner import ProvisionError, SystemHost, verify_modules

app = typer.Typer()
logger = logging.getLogger("kubeprep.commands.kernel")


@app.command("check")
def check_kernel(
    module: str = typer.Option("br_netfilter", help="Kernel module that must be loaded"),
):
    """Verify that a kernel module required by Kubernetes networking is loaded."""
    try:
        verify_modules(SystemHost(), module)
    except ProvisionError as e:
        logger.error(f"❌ {e}")
        raise typer.Exit(code=1)
    typer.echo(f"✅ {module} is loaded")
