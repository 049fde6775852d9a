"""k8s-demo hello-world service."""

__version__ = "0.1.0"
