"""Registry that loads, resolves and fingerprints ROS1 definitions."""

import logging
import threading
from collections.abc import Iterable
from pathlib import Path

from ros_msgdigest.exceptions import (
    CyclicDefinitionError,
    DefinitionIOError,
    DefinitionNotFoundError,
    MsgSyntaxError,
)
from ros_msgdigest.fingerprint import compute_msg_md5, compute_srv_md5
from ros_msgdigest.models import MsgSpec, SrvSpec, split_full_name
from ros_msgdigest.parser import parse_message_string, split_service_string
from ros_msgdigest.path_index import PathIndex

logger = logging.getLogger(__name__)

REQUEST_SUFFIX = "Request"
RESPONSE_SUFFIX = "Response"


def _read_text(path: str | Path) -> str:
    try:
        # No newline translation: lines break on "\n" only
        return Path(path).read_bytes().decode("utf-8")
    except OSError as e:
        raise DefinitionIOError(path, e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise DefinitionIOError(path, str(e)) from e


class MsgRegistry:
    """Loads message and service definitions and caches resolved messages.

    Messages are cached by full name for the lifetime of the registry, so
    repeated lookups return the same ``MsgSpec`` object. Services are not
    cached; their request and response messages are.

    All public operations hold one re-entrant lock: a full name is computed
    at most once even when the registry is shared between threads.
    """

    def __init__(
        self,
        package_paths: Iterable[str | Path] = (),
        *,
        path_index: PathIndex | None = None,
    ) -> None:
        """
        Initialize the registry.

        Args:
            package_paths: Ordered package root directories to index
            path_index: Prebuilt index, used instead of scanning ``package_paths``
        """
        self._index = path_index if path_index is not None else PathIndex.scan(package_paths)
        self._msgs: dict[str, MsgSpec] = {}
        # Full names currently being resolved, outermost first
        self._resolving: list[str] = []
        self._lock = threading.RLock()

    @property
    def path_index(self) -> PathIndex:
        return self._index

    def _check_cycle(self, full_name: str) -> None:
        if full_name in self._resolving:
            start = self._resolving.index(full_name)
            raise CyclicDefinitionError([*self._resolving[start:], full_name])

    def register(self, full_name: str, spec: MsgSpec) -> None:
        """Store ``spec`` under ``full_name``, replacing any previous entry."""
        with self._lock:
            self._msgs[full_name] = spec

    def get_msg(self, full_name: str) -> MsgSpec | None:
        """Return the cached definition, without loading anything."""
        with self._lock:
            return self._msgs.get(full_name)

    def load_msg(self, full_name: str) -> MsgSpec:
        """
        Return the resolved message ``full_name``, loading it on first use.

        Raises:
            DefinitionNotFoundError: If no indexed package provides the message
        """
        with self._lock:
            self._check_cycle(full_name)
            spec = self._msgs.get(full_name)
            if spec is not None:
                logger.debug(f"Cache hit for {full_name}")
                return spec

            path = self._index.find_msg(full_name)
            if path is None:
                raise DefinitionNotFoundError(full_name)
            logger.debug(f"Loading {full_name} from {path}")
            return self.load_msg_from_file(path, full_name)

    def load_msg_from_file(self, file_path: str | Path, full_name: str) -> MsgSpec:
        """Load ``full_name`` from an explicit file, overriding any cached entry."""
        return self.load_msg_from_string(_read_text(file_path), full_name)

    def load_msg_from_string(self, text: str, full_name: str) -> MsgSpec:
        """
        Parse and fingerprint ``text`` as the message ``full_name``.

        The result replaces any cached entry for ``full_name``, which lets a
        caller override the on-disk definition.

        Raises:
            MsgSyntaxError: If a line is malformed
            DefinitionNotFoundError: If a referenced type cannot be found
            CyclicDefinitionError: If the definition references itself
        """
        package_name, short_name = split_full_name(full_name)

        with self._lock:
            self._check_cycle(full_name)
            try:
                fields, constants = parse_message_string(text, package_name)
            except MsgSyntaxError as e:
                raise e.with_name(full_name) from e

            spec = MsgSpec(
                package_name=package_name,
                short_name=short_name,
                full_name=full_name,
                fields=fields,
                constants=constants,
                text=text,
            )
            self._resolving.append(full_name)
            try:
                compute_msg_md5(spec, self.load_msg)
            finally:
                self._resolving.pop()

            self.register(full_name, spec)
            return spec

    def load_srv(self, full_name: str) -> SrvSpec:
        """
        Load the service ``full_name`` from the service index.

        Raises:
            DefinitionNotFoundError: If no indexed package provides the service
        """
        with self._lock:
            path = self._index.find_srv(full_name)
            if path is None:
                raise DefinitionNotFoundError(full_name, kind="service")
            logger.debug(f"Loading {full_name} from {path}")
            return self.load_srv_from_file(path, full_name)

    def load_srv_from_file(self, file_path: str | Path, full_name: str) -> SrvSpec:
        return self.load_srv_from_string(_read_text(file_path), full_name)

    def load_srv_from_string(self, text: str, full_name: str) -> SrvSpec:
        """
        Parse a service definition and compute its combined MD5.

        The request and response are registered as the messages
        ``<full_name>Request`` and ``<full_name>Response``.

        Raises:
            MalformedServiceError: Unless there is exactly one ``---`` line
        """
        package_name, short_name = split_full_name(full_name)
        request_text, response_text = split_service_string(text, full_name)

        with self._lock:
            request = self.load_msg_from_string(request_text, full_name + REQUEST_SUFFIX)
            response = self.load_msg_from_string(response_text, full_name + RESPONSE_SUFFIX)
            spec = SrvSpec(
                package_name=package_name,
                short_name=short_name,
                full_name=full_name,
                request=request,
                response=response,
                text=text,
            )
            compute_srv_md5(spec, self.load_msg)
            return spec
