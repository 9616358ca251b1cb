"""Data models for ovn-daemonset.

This module provides the immutable input types describing an OVN
controller stack instance, plus the well-known names and paths shared
by the builders.
"""

from dataclasses import dataclass, field

from kubernetes import client

from ovn_daemonset.common.tls import TLSSection

SERVICE_NAME_OVN_CONTROLLER = "ovn-controller"

# Where the OVN database client certificate is mounted
OVN_DB_CERT_PATH = "/etc/pki/tls/certs/ovndb.crt"
OVN_DB_KEY_PATH = "/etc/pki/tls/private/ovndb.key"
OVN_DB_CA_CERT_PATH = "/etc/pki/tls/certs/ovndbca.crt"

_RBAC_PREFIX = "ovncontroller"


@dataclass(frozen=True, slots=True)
class OVNControllerSpec:
    """Desired state of the networking stack.

    Attributes:
        ovs_container_image: Image for the ovsdb-server and ovs-vswitchd containers.
        ovn_container_image: Image for the ovn-controller container.
        tls: TLS settings.
        resources: Resource requirements applied to every container.
        node_selector: Node labels restricting where the stack runs.

    """

    ovs_container_image: str
    ovn_container_image: str
    tls: TLSSection = field(default_factory=TLSSection)
    resources: client.V1ResourceRequirements | None = None
    node_selector: dict[str, str] | None = None


@dataclass(frozen=True, slots=True)
class OVNController:
    """A named networking stack instance.

    Attributes:
        name: Instance name.
        namespace: Namespace the workload is created in.
        spec: The desired state.

    """

    name: str
    namespace: str
    spec: OVNControllerSpec

    def rbac_resource_name(self) -> str:
        """Return the service account name used by the workload."""
        return f"{_RBAC_PREFIX}-{self.name}"
