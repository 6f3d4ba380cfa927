"""ROS1 MD5 fingerprints of message and service definitions.

The MD5 text of a message lists its constants, then its fields, in source
order. Fields of builtin type keep their type (array suffix included); fields
referencing another message are written with that message's MD5 instead. The
result must match genmsg byte for byte.
"""

import hashlib
import logging
from collections.abc import Callable

from ros_msgdigest.models import MsgSpec, SrvSpec

logger = logging.getLogger(__name__)

LoadMsgFn = Callable[[str], MsgSpec]


def compute_md5_text(spec: MsgSpec, load_msg: LoadMsgFn) -> str:
    """
    Build the canonical text hashed for ``spec``.

    Args:
        spec: The message definition
        load_msg: Resolves ``package/Type`` to its definition; errors propagate

    Returns:
        Newline separated declarations, without a trailing newline
    """
    lines = [f"{c.type} {c.name}={c.value_text}" for c in spec.constants]
    for f in spec.fields:
        if not f.type.package_name:
            lines.append(f"{f.type} {f.name}")
        else:
            sub_spec = load_msg(f.type.base_full_name)
            lines.append(f"{compute_msg_md5(sub_spec, load_msg)} {f.name}")
    return "\n".join(lines).strip("\n")


def compute_msg_md5(spec: MsgSpec, load_msg: LoadMsgFn) -> str:
    """Return the MD5 of ``spec``, computing and storing it on first use."""
    if spec.md5sum is None:
        md5text = compute_md5_text(spec, load_msg)
        spec.md5sum = hashlib.md5(md5text.encode("utf-8"), usedforsecurity=False).hexdigest()
        logger.debug(f"{spec.full_name}: {spec.md5sum}")
    return spec.md5sum


def compute_srv_md5(spec: SrvSpec, load_msg: LoadMsgFn) -> str:
    """Hash the request text immediately followed by the response text."""
    if spec.md5sum is None:
        hasher = hashlib.md5(usedforsecurity=False)
        hasher.update(compute_md5_text(spec.request, load_msg).encode("utf-8"))
        hasher.update(compute_md5_text(spec.response, load_msg).encode("utf-8"))
        spec.md5sum = hasher.hexdigest()
        logger.debug(f"{spec.full_name}: {spec.md5sum}")
    return spec.md5sum
