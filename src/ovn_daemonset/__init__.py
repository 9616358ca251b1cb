"""ovn-daemonset: DaemonSet builder for the OVN controller networking stack.

This package builds the Kubernetes DaemonSet that runs ovsdb-server,
ovs-vswitchd and ovn-controller on every selected node.

Example usage:
    from ovn_daemonset import build_daemonset, load_stack_config

    instance = load_stack_config("ovncontroller.yaml")
    daemonset = build_daemonset(instance, "abc123", {"service": "ovn-controller"}, {})
"""

__version__ = "0.1.0"

from ovn_daemonset.cli import cli
from ovn_daemonset.common.tls import Ca, GenericService, TLSSection
from ovn_daemonset.config import load_stack_config, stack_config_from_dict
from ovn_daemonset.exceptions import (
    ConfigParsingError,
    InvalidStackConfigError,
    OvnDaemonSetError,
)
from ovn_daemonset.models import OVNController, OVNControllerSpec
from ovn_daemonset.ovncontroller.daemonset import build_daemonset

__all__ = [
    # Version
    "__version__",
    # Main CLI
    "cli",
    # Builder
    "build_daemonset",
    # Configuration
    "load_stack_config",
    "stack_config_from_dict",
    # Models
    "OVNController",
    "OVNControllerSpec",
    "TLSSection",
    "GenericService",
    "Ca",
    # Exceptions
    "OvnDaemonSetError",
    "InvalidStackConfigError",
    "ConfigParsingError",
]
