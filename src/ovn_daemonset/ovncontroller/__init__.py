"""OVN controller workload subpackage.

This package contains the DaemonSet builder and the base volume catalog
for the ovsdb-server, ovs-vswitchd and ovn-controller containers.
"""

from ovn_daemonset.ovncontroller.daemonset import build_daemonset
from ovn_daemonset.ovncontroller.volumes import (
    get_ovn_controller_volume_mounts,
    get_ovsdb_volume_mounts,
    get_volumes,
    get_vswitchd_volume_mounts,
)

__all__ = [
    # daemonset
    "build_daemonset",
    # volumes
    "get_volumes",
    "get_ovsdb_volume_mounts",
    "get_vswitchd_volume_mounts",
    "get_ovn_controller_volume_mounts",
]
