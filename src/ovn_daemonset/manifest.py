"""Manifest serialization.

Converts kubernetes client model objects into plain YAML documents ready
for ``kubectl apply``.
"""

from pathlib import Path
from typing import Any

import yaml
from kubernetes import client


def to_dict(obj: Any) -> dict[str, Any]:
    """Convert a kubernetes model object into a plain dictionary.

    Attribute names are mapped to their camelCase API names and unset
    fields are dropped.
    """
    return client.ApiClient().sanitize_for_serialization(obj)


def to_yaml(obj: Any) -> str:
    """Render a kubernetes model object as a YAML document."""
    return yaml.safe_dump(to_dict(obj), sort_keys=False, default_flow_style=False)


def write_manifest(obj: Any, output_path: Path) -> None:
    """Write a kubernetes model object to a YAML file.

    Args:
        obj: The object to render.
        output_path: Destination file, overwritten if it exists.

    """
    with output_path.open("w") as stream:
        stream.write(to_yaml(obj))
