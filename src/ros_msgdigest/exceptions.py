from collections.abc import Sequence
from pathlib import Path


class MsgSpecError(Exception):
    pass


class InvalidNameError(MsgSpecError, ValueError):
    def __init__(self, full_name: str) -> None:
        self.full_name = full_name
        super().__init__(f"invalid resource name {full_name!r}, expected 'package/Name'")


class DefinitionNotFoundError(MsgSpecError, LookupError):
    def __init__(self, full_name: str, *, kind: str = "message") -> None:
        self.full_name = full_name
        self.kind = kind
        super().__init__(f"{kind} definition of `{full_name}` is not found")


class MsgSyntaxError(MsgSpecError):
    """Raised for a malformed declaration line.

    ``lineno`` is 1-based and counts blank and comment lines.
    """

    def __init__(self, lineno: int, reason: str, *, full_name: str | None = None) -> None:
        self.lineno = lineno
        self.reason = reason
        self.full_name = full_name
        location = f"{full_name}:{lineno}" if full_name else str(lineno)
        super().__init__(f"{location}: {reason}")

    def with_name(self, full_name: str) -> "MsgSyntaxError":
        return MsgSyntaxError(self.lineno, self.reason, full_name=full_name)


class MalformedServiceError(MsgSpecError):
    def __init__(self, full_name: str | None, separator_count: int) -> None:
        self.full_name = full_name
        self.separator_count = separator_count
        name = f" `{full_name}`" if full_name else ""
        super().__init__(
            f"service definition{name} must contain exactly one '---' separator line, "
            f"found {separator_count}"
        )


class DefinitionIOError(MsgSpecError):
    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"failed to read {path}: {reason}")


class CyclicDefinitionError(MsgSpecError):
    def __init__(self, chain: Sequence[str]) -> None:
        self.chain = tuple(chain)
        super().__init__(f"cyclic definition: {' -> '.join(self.chain)}")
