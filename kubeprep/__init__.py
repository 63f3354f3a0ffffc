"""kubeprep - prepare Red Hat family hosts to run Kubernetes with CRI-O."""

__version__ = "0.1.0"
