"""Controllers module for the dashboard core.

This module provides domain-driven controllers for connecting to a
Kubernetes context and fetching the data each dashboard screen shows.
"""

from __future__ import annotations

# Base classes
from kubedash.controllers.base import ActionResult, BaseController

# Cluster domain
from kubedash.controllers.cluster.controller import ClusterController

# Connection domain
from kubedash.controllers.connection import ConnectionManager

__all__ = [
    "ActionResult",
    "BaseController",
    "ClusterController",
    "ConnectionManager",
]
