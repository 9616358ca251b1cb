"""Stack configuration loading.

This module reads an OVNController description from YAML and validates
it into the immutable models used by the builders. Both a bare document
(``name``/``namespace``/``spec`` at the top level) and a full custom
resource (``metadata.name``/``metadata.namespace``) are accepted.
"""

from pathlib import Path
from typing import Any

import yaml
from icecream import ic
from kubernetes import client

from ovn_daemonset.common.tls import Ca, GenericService, TLSSection
from ovn_daemonset.exceptions import ConfigParsingError, InvalidStackConfigError
from ovn_daemonset.models import OVNController, OVNControllerSpec

DEFAULT_NAME = "ovncontroller"
DEFAULT_NAMESPACE = "default"


def parse_key_value_pairs(pairs: tuple[str, ...] | list[str], kind: str) -> dict[str, str]:
    """Parse ``KEY=VALUE`` strings into a mapping.

    Args:
        pairs: Strings in ``KEY=VALUE`` form. The value may be empty.
        kind: What is being parsed, used in error messages.

    Returns:
        The parsed mapping. Later duplicates win.

    Raises:
        InvalidStackConfigError: If an entry has no ``=`` or an empty key.

    """
    result: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise InvalidStackConfigError(f"Invalid {kind} '{pair}': expected KEY=VALUE")
        result[key] = value
    return result


def _scalar_to_string(value: Any) -> str | None:
    # YAML turns bare values like `true`, `1` or an empty value into non-strings
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (str, int, float)):
        return str(value)
    return None


def _string_mapping(value: Any, field_name: str) -> dict[str, str] | None:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise InvalidStackConfigError(f"'{field_name}' must be a mapping of strings")
    mapping: dict[str, str] = {}
    for key, item in value.items():
        text = _scalar_to_string(item)
        if not isinstance(key, str) or text is None:
            raise InvalidStackConfigError(f"'{field_name}' must be a mapping of strings")
        mapping[key] = text
    return mapping


def _required_string(spec: dict[str, Any], key: str) -> str:
    value = spec.get(key)
    if not isinstance(value, str) or not value.strip():
        raise InvalidStackConfigError(f"'spec.{key}' is required and must be a non-empty string")
    return value


def _optional_string(section: dict[str, Any], key: str, field_name: str) -> str | None:
    value = section.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidStackConfigError(f"'{field_name}' must be a string")
    return value


def _tls_section(data: Any) -> TLSSection:
    if data is None:
        return TLSSection()
    if not isinstance(data, dict):
        raise InvalidStackConfigError("'spec.tls' must be a mapping")
    secret_name = _optional_string(data, "secretName", "spec.tls.secretName")
    ca_bundle = _optional_string(data, "caBundleSecretName", "spec.tls.caBundleSecretName")
    return TLSSection(
        generic_service=GenericService(secret_name=secret_name),
        ca=Ca(ca_bundle_secret_name=ca_bundle or ""),
    )


def _resources(data: Any) -> client.V1ResourceRequirements | None:
    if data is None:
        return None
    if not isinstance(data, dict):
        raise InvalidStackConfigError("'spec.resources' must be a mapping")
    unknown = set(data) - {"limits", "requests"}
    if unknown:
        raise InvalidStackConfigError(f"'spec.resources' has unknown keys: {', '.join(sorted(unknown))}")
    return client.V1ResourceRequirements(
        limits=_string_mapping(data.get("limits"), "spec.resources.limits"),
        requests=_string_mapping(data.get("requests"), "spec.resources.requests"),
    )


def stack_config_from_dict(data: dict[str, Any]) -> OVNController:
    """Validate a parsed document into an OVNController.

    Args:
        data: The parsed YAML mapping.

    Returns:
        The validated instance.

    Raises:
        InvalidStackConfigError: If a field is missing or has the wrong type.

    """
    metadata = data.get("metadata") or {}
    if not isinstance(metadata, dict):
        raise InvalidStackConfigError("'metadata' must be a mapping")

    name = data.get("name") or metadata.get("name") or DEFAULT_NAME
    namespace = data.get("namespace") or metadata.get("namespace") or DEFAULT_NAMESPACE
    if not isinstance(name, str) or not isinstance(namespace, str):
        raise InvalidStackConfigError("'name' and 'namespace' must be strings")

    spec = data.get("spec")
    if not isinstance(spec, dict):
        raise InvalidStackConfigError("'spec' is required and must be a mapping")

    instance = OVNController(
        name=name,
        namespace=namespace,
        spec=OVNControllerSpec(
            ovs_container_image=_required_string(spec, "ovsContainerImage"),
            ovn_container_image=_required_string(spec, "ovnContainerImage"),
            tls=_tls_section(spec.get("tls")),
            resources=_resources(spec.get("resources")),
            node_selector=_string_mapping(spec.get("nodeSelector"), "spec.nodeSelector"),
        ),
    )
    ic(instance)
    return instance


def load_stack_config(path: str | Path) -> OVNController:
    """Read and validate a stack configuration file.

    Args:
        path: Path to the YAML file.

    Returns:
        The validated instance.

    Raises:
        ConfigParsingError: If the file is missing, malformed, or not a mapping.
        InvalidStackConfigError: If the document content is invalid.

    """
    try:
        with open(path) as stream:
            data = yaml.safe_load(stream)
    except FileNotFoundError as err:
        raise ConfigParsingError(f"Config file '{path}' does not exist") from err
    except yaml.YAMLError as err:
        raise ConfigParsingError(f"Config file '{path}' contains malformed YAML: {err}") from err

    if not isinstance(data, dict):
        raise ConfigParsingError(f"Config file '{path}' does not contain a YAML mapping")

    return stack_config_from_dict(data)
