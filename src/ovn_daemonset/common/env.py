"""Environment variable merging.

Containers receive their environment as a list of V1EnvVar objects. This
module lets callers describe values as named setters and merge them into a
base list.
"""

import copy
from collections.abc import Callable, Mapping

from kubernetes import client

EnvSetter = Callable[[client.V1EnvVar], None]


def set_value(value: str) -> EnvSetter:
    """Return a setter that assigns a literal value.

    Args:
        value: The value to assign.

    Returns:
        A callable that sets ``value`` on the given env var.

    """

    def _setter(env: client.V1EnvVar) -> None:
        env.value = value
        env.value_from = None

    return _setter


def merge_envs(envs: list[client.V1EnvVar], setters: Mapping[str, EnvSetter]) -> list[client.V1EnvVar]:
    """Merge named setters into a list of environment variables.

    Existing entries are updated in place on a copy, missing ones are
    appended. The input list is not modified.

    Args:
        envs: Base environment variables.
        setters: Mapping of variable name to setter.

    Returns:
        The merged list sorted by variable name.

    """
    merged = [copy.deepcopy(env) for env in envs]
    by_name = {env.name: env for env in merged}

    for name, setter in setters.items():
        env = by_name.get(name)
        if env is None:
            env = client.V1EnvVar(name=name)
            merged.append(env)
            by_name[name] = env
        setter(env)

    return sorted(merged, key=lambda env: env.name)
