import logging
import sys

import typer

from kubeprep.commands import config, kernel, provision, repos
from kubeprep.logging import setup_logger

app = typer.Typer(help="Prepare Red Hat family hosts to run Kubernetes with CRI-O.")

# Global debug flag
debug_mode = False

# Add all command groups
app.add_typer(provision.app, name="provision")
app.add_typer(repos.app, name="repos")
app.add_typer(kernel.app, name="kernel")
app.add_typer(config.app, name="config")

# Global options callback
@app.callback()
def main(
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug logging"),
):
    """kubeprep - Kubernetes node provisioning CLI."""
    global debug_mode
    debug_mode = debug
    setup_logger("kubeprep", debug=debug)
    if debug:
        logging.getLogger("kubeprep").debug("Debug mode enabled")

def run():
    """Console script entry point: report unexpected errors without a traceback."""
    try:
        app()
    except Exception as e:
        if debug_mode:
            logging.getLogger("kubeprep").exception(f"Unhandled exception: {e}")
        else:
            logging.getLogger("kubeprep").error(f"❌ Error: {e}")
        sys.exit(1)

if __name__ == "__main__":
    run()
