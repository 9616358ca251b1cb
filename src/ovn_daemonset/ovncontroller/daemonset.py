"""DaemonSet builder for the OVN controller stack.

This module turns an OVNController instance into the DaemonSet running
ovsdb-server, ovs-vswitchd and ovn-controller side by side on every
selected node. The builder is a pure function: it performs no I/O and
returns freshly built objects on every call.
"""

import copy

from kubernetes import client

from ovn_daemonset.common.env import merge_envs, set_value
from ovn_daemonset.common.tls import Service
from ovn_daemonset.models import (
    OVN_DB_CA_CERT_PATH,
    OVN_DB_CERT_PATH,
    OVN_DB_KEY_PATH,
    SERVICE_NAME_OVN_CONTROLLER,
    OVNController,
)
from ovn_daemonset.ovncontroller.volumes import (
    SCRIPTS_MOUNT_PATH,
    get_ovn_controller_volume_mounts,
    get_ovsdb_volume_mounts,
    get_volumes,
    get_vswitchd_volume_mounts,
)

CONFIG_HASH_ENV = "CONFIG_HASH"
CAPABILITIES = ("NET_ADMIN", "SYS_ADMIN", "SYS_NICE")
TERMINATION_MESSAGE_POLICY = "FallbackToLogsOnError"
OVSDB_SOCKET = "unix:/run/openvswitch/db.sock"

# sleep is required as workaround for https://github.com/kubernetes/kubernetes/issues/39170
_PRE_STOP_SLEEP = (";", "sleep", "2")

_OVS_CTL = "/usr/share/openvswitch/scripts/ovs-ctl"
_OVN_CTL = "/usr/share/ovn/scripts/ovn-ctl"


def _security_context() -> client.V1SecurityContext:
    return client.V1SecurityContext(
        capabilities=client.V1Capabilities(add=list(CAPABILITIES), drop=[]),
        run_as_user=0,
        privileged=True,
    )


def _liveness_probe(command: list[str]) -> client.V1Probe:
    # TODO: tune timings once vswitchd startup under load is measured
    return client.V1Probe(
        _exec=client.V1ExecAction(command=command),
        timeout_seconds=5,
        period_seconds=3,
        initial_delay_seconds=3,
    )


def _pre_stop(command: list[str]) -> client.V1Lifecycle:
    """Run ``command`` and then stall before the container gets SIGTERM."""
    return client.V1Lifecycle(
        pre_stop=client.V1LifecycleHandler(
            _exec=client.V1ExecAction(command=[*command, *_PRE_STOP_SLEEP]),
        ),
    )


def _container(
    instance: OVNController,
    config_hash: str,
    *,
    name: str,
    image: str,
    command: list[str],
    args: list[str],
    pre_stop: list[str],
    volume_mounts: list[client.V1VolumeMount],
    liveness_probe: client.V1Probe | None = None,
) -> client.V1Container:
    """Build a container with the settings shared by the whole stack."""
    return client.V1Container(
        name=name,
        command=command,
        args=args,
        lifecycle=_pre_stop(pre_stop),
        image=image,
        security_context=_security_context(),
        env=merge_envs([], {CONFIG_HASH_ENV: set_value(config_hash)}),
        volume_mounts=volume_mounts,
        resources=copy.deepcopy(instance.spec.resources),
        liveness_probe=liveness_probe,
        termination_message_policy=TERMINATION_MESSAGE_POLICY,
    )


def ovsdb_server_container(
    instance: OVNController,
    config_hash: str,
    common_mounts: list[client.V1VolumeMount],
) -> client.V1Container:
    """Build the ovsdb-server container.

    dumb-init supervises the start script so that signals reach the
    database server.
    """
    return _container(
        instance,
        config_hash,
        name="ovsdb-server",
        image=instance.spec.ovs_container_image,
        command=["/usr/bin/dumb-init"],
        args=["--single-child", "--", f"{SCRIPTS_MOUNT_PATH}/start-ovsdb-server.sh"],
        pre_stop=[_OVS_CTL, "stop", "--no-ovs-vswitchd"],
        volume_mounts=[*get_ovsdb_volume_mounts(), *common_mounts],
        liveness_probe=_liveness_probe(["/usr/bin/ovs-vsctl", "show"]),
    )


def ovs_vswitchd_container(
    instance: OVNController,
    config_hash: str,
    common_mounts: list[client.V1VolumeMount],
) -> client.V1Container:
    """Build the ovs-vswitchd container."""
    return _container(
        instance,
        config_hash,
        name="ovs-vswitchd",
        image=instance.spec.ovs_container_image,
        command=["/usr/sbin/ovs-vswitchd"],
        args=["--pidfile", "--mlockall"],
        pre_stop=[_OVS_CTL, "stop", "--no-ovsdb-server"],
        volume_mounts=[*get_vswitchd_volume_mounts(), *common_mounts],
        liveness_probe=_liveness_probe(["/usr/bin/ovs-appctl", "bond/show"]),
    )


def ovn_controller_container(
    instance: OVNController,
    config_hash: str,
    volume_mounts: list[client.V1VolumeMount],
    tls_args: list[str],
) -> client.V1Container:
    """Build the ovn-controller container.

    ovn-controller fails with "unrecognized option --pidfile" when it is
    started without a shell, so the network setup script and the daemon
    are chained in a single ``bash -c`` argument. No liveness probe is set.

    Args:
        instance: The stack instance.
        config_hash: Content hash of dependent configuration.
        volume_mounts: Complete mount list for this container.
        tls_args: Certificate flags, empty when TLS is disabled.

    Returns:
        The ovn-controller container.

    """
    script = " ".join(
        [
            f"{SCRIPTS_MOUNT_PATH}/net_setup.sh && ovn-controller",
            *tls_args,
            "--pidfile",
            OVSDB_SOCKET,
        ]
    )
    return _container(
        instance,
        config_hash,
        name="ovn-controller",
        image=instance.spec.ovn_container_image,
        command=["/bin/bash", "-c"],
        args=[script],
        pre_stop=[_OVN_CTL, "stop_controller"],
        volume_mounts=volume_mounts,
    )


def build_daemonset(
    instance: OVNController,
    config_hash: str,
    labels: dict[str, str],
    annotations: dict[str, str],
) -> client.V1DaemonSet:
    """Build the DaemonSet for an OVN controller stack.

    A CA bundle, when named, is mounted into every container. Service TLS,
    when enabled, is mounted into ovn-controller only and passed to it as
    ``--certificate``, ``--private-key`` and ``--ca-cert``. The two
    conditions are checked separately.

    Args:
        instance: The stack instance.
        config_hash: Content hash of dependent configuration, exposed to
            every container as ``CONFIG_HASH`` so that a change rolls the pods.
        labels: Labels for the pod template and the selector.
        annotations: Annotations for the pod template.

    Returns:
        The DaemonSet object.

    Raises:
        InvalidStackConfigError: Reserved for inconsistent stack
            configuration. Instances built through
            ``stack_config_from_dict`` are already validated.

    """
    tls = instance.spec.tls
    volumes = get_volumes(instance.name, instance.namespace)

    if tls.ca_bundle_secret_name:
        volumes.append(tls.create_volume())

    def common_mounts() -> list[client.V1VolumeMount]:
        if tls.ca_bundle_secret_name:
            return tls.create_volume_mounts(None)
        return []

    ovn_controller_mounts = [*get_ovn_controller_volume_mounts(), *common_mounts()]

    tls_args: list[str] = []
    if tls.enabled():
        svc = Service(
            secret_name=tls.generic_service.secret_name,
            cert_mount=OVN_DB_CERT_PATH,
            key_mount=OVN_DB_KEY_PATH,
            ca_mount=OVN_DB_CA_CERT_PATH,
        )
        volumes.append(svc.create_volume(SERVICE_NAME_OVN_CONTROLLER))
        ovn_controller_mounts.extend(svc.create_volume_mounts(SERVICE_NAME_OVN_CONTROLLER))
        tls_args = [
            f"--certificate={OVN_DB_CERT_PATH}",
            f"--private-key={OVN_DB_KEY_PATH}",
            f"--ca-cert={OVN_DB_CA_CERT_PATH}",
        ]

    pod_spec = client.V1PodSpec(
        service_account_name=instance.rbac_resource_name(),
        containers=[
            ovsdb_server_container(instance, config_hash, common_mounts()),
            ovs_vswitchd_container(instance, config_hash, common_mounts()),
            ovn_controller_container(instance, config_hash, ovn_controller_mounts, tls_args),
        ],
        volumes=volumes,
    )

    if instance.spec.node_selector:
        pod_spec.node_selector = dict(instance.spec.node_selector)

    return client.V1DaemonSet(
        api_version="apps/v1",
        kind="DaemonSet",
        metadata=client.V1ObjectMeta(
            name=SERVICE_NAME_OVN_CONTROLLER,
            namespace=instance.namespace,
        ),
        spec=client.V1DaemonSetSpec(
            selector=client.V1LabelSelector(match_labels=dict(labels)),
            template=client.V1PodTemplateSpec(
                metadata=client.V1ObjectMeta(
                    labels=dict(labels),
                    annotations=dict(annotations),
                ),
                spec=pod_spec,
            ),
        ),
    )
