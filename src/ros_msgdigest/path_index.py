"""Index of message and service files found under ROS package paths."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from ros_msgdigest.exceptions import DefinitionIOError

logger = logging.getLogger(__name__)

PACKAGE_MANIFEST = "package.xml"
MSG_DIR, MSG_EXT = "msg", ".msg"
SRV_DIR, SRV_EXT = "srv", ".srv"


def is_ros_package(path: Path) -> bool:
    """A directory is a package iff it directly contains a package manifest."""
    return (path / PACKAGE_MANIFEST).is_file()


def _iter_packages(package_paths: Iterable[str | Path]) -> Iterable[Path]:
    for root in package_paths:
        if not str(root):
            continue
        root_path = Path(root)
        if not root_path.is_dir():
            logger.warning(f"Package path {root_path} does not exist, skipping")
            continue
        try:
            candidates = sorted(root_path.iterdir())
        except OSError as e:
            raise DefinitionIOError(root_path, e.strerror or str(e)) from e
        for candidate in candidates:
            if candidate.is_dir() and is_ros_package(candidate):
                yield candidate


def _add_definitions(target: dict[str, Path], package: Path, subdir: str, ext: str) -> None:
    for path in sorted(package.glob(f"{subdir}/*{ext}")):
        full_name = f"{package.name}/{path.stem}"
        # Earlier package paths take precedence
        if full_name in target:
            logger.debug(f"{full_name} at {path} is shadowed by {target[full_name]}")
            continue
        target[full_name] = path


@dataclass(frozen=True)
class PathIndex:
    """Read-only maps from ``package/Name`` to the defining file."""

    msg_paths: Mapping[str, Path] = field(default_factory=dict)
    srv_paths: Mapping[str, Path] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "msg_paths", MappingProxyType(dict(self.msg_paths)))
        object.__setattr__(self, "srv_paths", MappingProxyType(dict(self.srv_paths)))

    @classmethod
    def scan(cls, package_paths: Iterable[str | Path]) -> "PathIndex":
        """
        Scan each package path once and index every ``.msg`` and ``.srv`` file.

        Args:
            package_paths: Ordered root directories whose direct
                sub-directories may be packages

        Returns:
            The populated index
        """
        msgs: dict[str, Path] = {}
        srvs: dict[str, Path] = {}
        for package in _iter_packages(package_paths):
            _add_definitions(msgs, package, MSG_DIR, MSG_EXT)
            _add_definitions(srvs, package, SRV_DIR, SRV_EXT)

        logger.debug(f"Indexed {len(msgs)} messages and {len(srvs)} services")
        return cls(msg_paths=msgs, srv_paths=srvs)

    def find_msg(self, full_name: str) -> Path | None:
        return self.msg_paths.get(full_name)

    def find_srv(self, full_name: str) -> Path | None:
        return self.srv_paths.get(full_name)
