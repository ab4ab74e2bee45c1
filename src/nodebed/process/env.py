"""Environment construction for daemon processes"""
import os
from pathlib import Path
from typing import Mapping


def derive_environment(
    base: Mapping[str, str],
    overrides: Mapping[str, str],
) -> dict[str, str]:
    """Return a copy of ``base`` with ``overrides`` applied

    Keys already present keep their position and take the new value,
    unknown keys are appended in ``overrides`` order. ``base`` is left
    untouched.

    Args:
        base: Starting environment, usually ``os.environ``
        overrides: Variables to set

    Returns:
        New environment mapping
    """
    env = dict(base)
    env.update(overrides)
    return env


def daemon_environment(
    data_dir_var: str,
    directory: Path | str,
    extra: Mapping[str, str] | None = None,
    base: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Environment for a node's daemon and its helper commands

    Args:
        data_dir_var: Name of the data directory variable (e.g. IPFS_PATH)
        directory: Node directory
        extra: Additional variables set after the data directory
        base: Starting environment, defaults to the current process env

    Returns:
        New environment mapping
    """
    overrides = {data_dir_var: str(directory)}
    if extra:
        overrides.update(extra)
    return derive_environment(os.environ if base is None else base, overrides)
