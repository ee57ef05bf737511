"""YAML rendering for resource detail views."""

from __future__ import annotations

import copy
from typing import Any

import yaml

# Server-side bookkeeping that only adds noise to a detail view.
_NOISY_METADATA_KEYS = ("managedFields",)


def render_resource_yaml(resource: dict[str, Any], *, strip_managed_fields: bool = True) -> str:
    """Dump a raw resource as block-style YAML, keeping key order."""
    document = copy.deepcopy(resource)
    if strip_managed_fields:
        metadata = document.get("metadata")
        if isinstance(metadata, dict):
            for key in _NOISY_METADATA_KEYS:
                metadata.pop(key, None)
    return yaml.safe_dump(
        document,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )
