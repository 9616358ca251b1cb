"""Shared test fixtures for ovn-daemonset tests."""

import pytest
from kubernetes import client

from ovn_daemonset.common.tls import Ca, GenericService, TLSSection
from ovn_daemonset.models import OVNController, OVNControllerSpec

OVS_IMAGE = "quay.io/podified-antelope-centos9/openstack-ovn-base:current-podified"
OVN_IMAGE = "quay.io/podified-antelope-centos9/openstack-ovn-controller:current-podified"


def make_instance(
    *,
    secret_name: str | None = None,
    ca_bundle_secret_name: str = "",
    node_selector: dict[str, str] | None = None,
    resources: client.V1ResourceRequirements | None = None,
) -> OVNController:
    """Build an OVNController with the given TLS and scheduling settings."""
    return OVNController(
        name="ovncontroller",
        namespace="openstack",
        spec=OVNControllerSpec(
            ovs_container_image=OVS_IMAGE,
            ovn_container_image=OVN_IMAGE,
            tls=TLSSection(
                generic_service=GenericService(secret_name=secret_name),
                ca=Ca(ca_bundle_secret_name=ca_bundle_secret_name),
            ),
            resources=resources,
            node_selector=node_selector,
        ),
    )


@pytest.fixture
def plain_instance():
    """Instance without any TLS material."""
    return make_instance()


@pytest.fixture
def ca_only_instance():
    """Instance with a CA bundle but service TLS disabled."""
    return make_instance(ca_bundle_secret_name="ca-secret")


@pytest.fixture
def tls_instance():
    """Instance with a CA bundle and service TLS enabled."""
    return make_instance(secret_name="ovn-tls", ca_bundle_secret_name="ca-secret")


@pytest.fixture
def labels():
    """Sample pod labels."""
    return {"service": "ovn-controller"}


@pytest.fixture
def annotations():
    """Sample pod annotations."""
    return {"k8s.v1.cni.cncf.io/networks": "[]"}


@pytest.fixture
def sample_config_yaml():
    """Sample stack configuration YAML content."""
    return """name: ovncontroller
namespace: openstack
spec:
  ovsContainerImage: quay.io/podified-antelope-centos9/openstack-ovn-base:current-podified
  ovnContainerImage: quay.io/podified-antelope-centos9/openstack-ovn-controller:current-podified
  nodeSelector:
    node-role.kubernetes.io/worker: ""
  resources:
    requests:
      cpu: 100m
    limits:
      memory: 500Mi
  tls:
    secretName: ovn-tls
    caBundleSecretName: ca-secret
"""


@pytest.fixture
def sample_config_file(tmp_path, sample_config_yaml):
    """Stack configuration written to a temporary file."""
    path = tmp_path / "ovncontroller.yaml"
    path.write_text(sample_config_yaml)
    return path
