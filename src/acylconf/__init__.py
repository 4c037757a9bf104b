"""acylconf — validated provisioning configuration for Kubernetes environments."""

__version__ = "0.1.0"
