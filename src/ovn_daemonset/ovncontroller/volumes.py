"""Base volume catalog for the OVN controller stack.

The three containers share host directories so that the switch daemon and
the controller can reach the database socket and state written by the
database server. Each getter returns fresh objects.
"""

from kubernetes import client

SCRIPTS_MOUNT_PATH = "/usr/local/bin/container-scripts"

_SCRIPTS_DEFAULT_MODE = 0o755
_DIRECTORY_OR_CREATE = "DirectoryOrCreate"


def _host_path_volume(name: str, path: str) -> client.V1Volume:
    return client.V1Volume(
        name=name,
        host_path=client.V1HostPathVolumeSource(path=path, type=_DIRECTORY_OR_CREATE),
    )


def _scripts_mount() -> client.V1VolumeMount:
    return client.V1VolumeMount(name="scripts", mount_path=SCRIPTS_MOUNT_PATH, read_only=True)


def get_volumes(name: str, namespace: str) -> list[client.V1Volume]:
    """Return the base volumes of the stack.

    Host paths are namespaced so that several stacks on one node do not
    share state.

    Args:
        name: Instance name, used for the scripts ConfigMap.
        namespace: Instance namespace.

    Returns:
        The base volume list.

    """
    return [
        _host_path_volume("etc-ovs", f"/var/home/core/{namespace}/etc/ovs"),
        _host_path_volume("var-run", f"/var/home/core/{namespace}/var/run/openvswitch"),
        _host_path_volume("var-lib", f"/var/home/core/{namespace}/var/lib/openvswitch"),
        _host_path_volume("var-log", f"/var/log/{namespace}/openvswitch"),
        _host_path_volume("var-log-ovn", f"/var/log/{namespace}/ovn"),
        client.V1Volume(
            name="scripts",
            config_map=client.V1ConfigMapVolumeSource(
                name=f"{name}-scripts",
                default_mode=_SCRIPTS_DEFAULT_MODE,
            ),
        ),
    ]


def get_ovsdb_volume_mounts() -> list[client.V1VolumeMount]:
    """Return the mounts of the ovsdb-server container."""
    return [
        client.V1VolumeMount(name="etc-ovs", mount_path="/etc/openvswitch"),
        client.V1VolumeMount(name="var-run", mount_path="/var/run/openvswitch"),
        client.V1VolumeMount(name="var-log", mount_path="/var/log/openvswitch"),
        client.V1VolumeMount(name="var-lib", mount_path="/var/lib/openvswitch"),
        _scripts_mount(),
    ]


def get_vswitchd_volume_mounts() -> list[client.V1VolumeMount]:
    """Return the mounts of the ovs-vswitchd container."""
    return [
        client.V1VolumeMount(name="var-run", mount_path="/var/run/openvswitch"),
        client.V1VolumeMount(name="var-log", mount_path="/var/log/openvswitch"),
        client.V1VolumeMount(name="var-lib", mount_path="/var/lib/openvswitch"),
        _scripts_mount(),
    ]


def get_ovn_controller_volume_mounts() -> list[client.V1VolumeMount]:
    """Return the mounts of the ovn-controller container."""
    return [
        client.V1VolumeMount(name="var-run", mount_path="/var/run/openvswitch"),
        client.V1VolumeMount(name="var-log-ovn", mount_path="/var/log/ovn"),
        _scripts_mount(),
    ]
