"""Shared helpers subpackage.

This package contains the TLS descriptors, environment merging and
content hashing used by the workload builders.
"""

from ovn_daemonset.common.env import merge_envs, set_value
from ovn_daemonset.common.hashing import file_hashes, hash_of_input_hashes, object_hash
from ovn_daemonset.common.tls import Ca, GenericService, Service, TLSSection

__all__ = [
    # env
    "merge_envs",
    "set_value",
    # hashing
    "object_hash",
    "hash_of_input_hashes",
    "file_hashes",
    # tls
    "Ca",
    "GenericService",
    "Service",
    "TLSSection",
]
