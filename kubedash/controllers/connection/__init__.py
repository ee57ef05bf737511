"""Connection domain - kubeconfig contexts and the active provider."""

from kubedash.controllers.connection.manager import ConnectionManager, ProviderFactory

__all__ = ["ConnectionManager", "ProviderFactory"]
