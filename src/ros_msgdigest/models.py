"""Data models for ROS1 message and service definitions."""

from dataclasses import dataclass, field
from enum import Enum

from ros_msgdigest.exceptions import InvalidNameError


class PrimitiveType(str, Enum):
    """ROS1 builtin type names.

    ``byte`` and ``char`` are the deprecated aliases of ``int8`` and ``uint8``.
    They are kept as written since the MD5 text uses the source spelling.
    """

    BOOL = "bool"
    BYTE = "byte"
    CHAR = "char"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    INT8 = "int8"
    UINT8 = "uint8"
    INT16 = "int16"
    UINT16 = "uint16"
    INT32 = "int32"
    UINT32 = "uint32"
    INT64 = "int64"
    UINT64 = "uint64"
    STRING = "string"
    TIME = "time"
    DURATION = "duration"


PRIMITIVE_TYPE_NAMES = {member.value for member in PrimitiveType}

# time and duration are builtin but cannot hold constants
CONSTANT_TYPE_NAMES = PRIMITIVE_TYPE_NAMES - {
    PrimitiveType.TIME.value,
    PrimitiveType.DURATION.value,
}

HEADER_TYPE_NAME = "Header"
HEADER_PACKAGE_NAME = "std_msgs"


@dataclass(frozen=True)
class Type:
    """A field type: builtin or ``package/Type``, with optional array suffix."""

    # Base type (e.g., "string", "int32", "Point")
    type_name: str

    # Package name for complex types (None for builtins and unresolved local types)
    package_name: str | None = None

    is_array: bool = False
    array_size: int | None = None  # Fixed size (e.g., [5])

    @property
    def is_primitive(self) -> bool:
        """Check if this is a builtin type based on type name."""
        return self.package_name is None and self.type_name in PRIMITIVE_TYPE_NAMES

    @property
    def is_dynamic_array(self) -> bool:
        """Check if this is a variable-length array."""
        return self.is_array and self.array_size is None

    @property
    def is_fixed_array(self) -> bool:
        """Check if this is a fixed-size array."""
        return self.is_array and self.array_size is not None

    @property
    def base_full_name(self) -> str:
        """Return ``package/Type`` without the array suffix."""
        if self.package_name:
            return f"{self.package_name}/{self.type_name}"
        return self.type_name

    def __str__(self) -> str:
        result = self.base_full_name
        if self.is_array:
            result += f"[{self.array_size}]" if self.array_size is not None else "[]"
        return result


@dataclass
class Field:
    """Represents a field in a ROS1 message."""

    type: Type
    name: str

    def __str__(self) -> str:
        return f"{self.type} {self.name}"


@dataclass
class Constant:
    """Represents a constant definition in a ROS1 message.

    The value is kept as the literal text found in the source; it is not
    converted to a Python value.
    """

    type: Type
    name: str
    value_text: str

    def __post_init__(self) -> None:
        if (
            self.type.type_name not in CONSTANT_TYPE_NAMES
            or self.type.package_name
            or self.type.is_array
        ):
            raise TypeError("Constants must be primitive, non-array types")

    def __str__(self) -> str:
        return f"{self.type} {self.name}={self.value_text}"


@dataclass
class MsgSpec:
    """A parsed and resolved ROS1 message definition."""

    package_name: str
    short_name: str
    full_name: str
    fields: list[Field] = field(default_factory=list)
    constants: list[Constant] = field(default_factory=list)
    # Raw source text
    text: str = ""
    # Filled in once the fingerprint has been computed
    md5sum: str | None = None


@dataclass
class SrvSpec:
    """A ROS1 service: a request and a response message under one name."""

    package_name: str
    short_name: str
    full_name: str
    request: MsgSpec
    response: MsgSpec
    text: str = ""
    md5sum: str | None = None


def split_full_name(full_name: str) -> tuple[str, str]:
    """Split ``package/Name`` into its package and short name.

    A bare ``Name`` yields an empty package.
    """
    parts = full_name.split("/")
    if len(parts) == 1 and parts[0]:
        return "", parts[0]
    if len(parts) == 2 and all(parts):
        return parts[0], parts[1]
    raise InvalidNameError(full_name)
