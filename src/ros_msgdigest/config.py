"""Search path configuration taken from the process environment."""

import os
from collections.abc import Mapping
from pathlib import Path

ROS_PACKAGE_PATH_ENV = "ROS_PACKAGE_PATH"


def split_package_path(value: str) -> tuple[Path, ...]:
    """Split a package path string on the platform path separator."""
    separator = ";" if os.name == "nt" else ":"
    return tuple(Path(p) for p in value.split(separator) if p)


def package_paths_from_env(environ: Mapping[str, str] | None = None) -> tuple[Path, ...]:
    """Get the ROS_PACKAGE_PATH directories, in order."""
    if environ is None:
        environ = os.environ
    return split_package_path(environ.get(ROS_PACKAGE_PATH_ENV, ""))
