"""ROS1 message and service definition loader with MD5 fingerprints.

Typical use:
    from ros_msgdigest import MsgRegistry
    from ros_msgdigest.config import package_paths_from_env

    registry = MsgRegistry(package_paths_from_env())
    registry.load_msg("std_msgs/String").md5sum
"""

from .exceptions import (
    CyclicDefinitionError,
    DefinitionIOError,
    DefinitionNotFoundError,
    InvalidNameError,
    MalformedServiceError,
    MsgSpecError,
    MsgSyntaxError,
)
from .fingerprint import compute_md5_text, compute_msg_md5, compute_srv_md5
from .models import (
    PRIMITIVE_TYPE_NAMES,
    Constant,
    Field,
    MsgSpec,
    PrimitiveType,
    SrvSpec,
    Type,
    split_full_name,
)
from .parser import parse_message_string, split_service_string
from .path_index import PathIndex
from .registry import MsgRegistry

__all__ = [
    "PRIMITIVE_TYPE_NAMES",
    "Constant",
    "CyclicDefinitionError",
    "DefinitionIOError",
    "DefinitionNotFoundError",
    "Field",
    "InvalidNameError",
    "MalformedServiceError",
    "MsgRegistry",
    "MsgSpec",
    "MsgSpecError",
    "MsgSyntaxError",
    "PathIndex",
    "PrimitiveType",
    "SrvSpec",
    "Type",
    "compute_md5_text",
    "compute_msg_md5",
    "compute_srv_md5",
    "parse_message_string",
    "split_full_name",
    "split_service_string",
]
