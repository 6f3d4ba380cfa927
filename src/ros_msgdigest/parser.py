"""ROS1 message definition parser using Lark.

Definitions are line oriented: every non-blank line (after comment removal)
is parsed on its own against a small LALR grammar, so errors carry the line
number of the offending declaration.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from lark import Lark, Token, Transformer, UnexpectedCharacters, UnexpectedInput, UnexpectedToken

from ros_msgdigest.exceptions import MalformedServiceError, MsgSyntaxError
from ros_msgdigest.models import (
    CONSTANT_TYPE_NAMES,
    HEADER_PACKAGE_NAME,
    HEADER_TYPE_NAME,
    PRIMITIVE_TYPE_NAMES,
    Constant,
    Field,
    PrimitiveType,
    Type,
)

COMMENT_CHAR = "#"
CONST_CHAR = "="
SERVICE_SEPARATOR = "---"

_GRAMMAR = r"""
field_decl: type_spec IDENTIFIER
constant_decl: type_spec IDENTIFIER "=" VALUE?

type_spec: type_name array_spec?
type_name: IDENTIFIER ("/" IDENTIFIER)?
array_spec: "[" SIZE? "]"

IDENTIFIER: /[a-zA-Z][a-zA-Z0-9_]*/
SIZE: /[0-9]+/
VALUE: /\S.*/

%import common.WS_INLINE
%ignore WS_INLINE
"""

_LINE_PARSER = Lark(_GRAMMAR, parser="lalr", start=["field_decl", "constant_decl"])


class LineKind(str, Enum):
    BLANK = "blank"
    FIELD = "field"
    CONSTANT = "constant"


@dataclass(frozen=True)
class _Declaration:
    type: Type
    name: str
    value_text: str | None = None


class _DeclarationTransformer(Transformer[Token, _Declaration]):
    """Transforms the parse tree of a single line into a declaration."""

    def field_decl(self, items: list[Any]) -> _Declaration:
        type_spec, name = items
        return _Declaration(type=type_spec, name=str(name))

    def constant_decl(self, items: list[Any]) -> _Declaration:
        type_spec, name, *value = items
        value_text = str(value[0]) if value else ""
        return _Declaration(type=type_spec, name=str(name), value_text=value_text)

    def type_spec(self, items: list[Any]) -> Type:
        package_name, type_name = items[0]
        if len(items) == 1:
            return Type(type_name=type_name, package_name=package_name)
        return Type(
            type_name=type_name,
            package_name=package_name,
            is_array=True,
            array_size=items[1],
        )

    def type_name(self, items: list[Token]) -> tuple[str | None, str]:
        if len(items) == 2:
            return str(items[0]), str(items[1])
        return None, str(items[0])

    def array_spec(self, items: list[Token]) -> int | None:
        return int(items[0]) if items else None


def split_lines(text: str) -> list[str]:
    """Split definition text on newlines only, dropping a trailing carriage return.

    Other Unicode line boundaries (form feed, U+2028, ...) stay part of the line.
    """
    return [line.removesuffix("\r") for line in text.split("\n")]


def strip_comment(line: str) -> str:
    """Remove the comment part of a line and surrounding whitespace."""
    return line.split(COMMENT_CHAR, 1)[0].strip()


def classify_line(clean_line: str) -> LineKind:
    """Decide how a comment-stripped line is parsed.

    ROS1 fields carry no default values, so an assignment token can only
    belong to a constant declaration.
    """
    if not clean_line:
        return LineKind.BLANK
    if CONST_CHAR in clean_line:
        return LineKind.CONSTANT
    return LineKind.FIELD


def _describe_error(error: UnexpectedInput, kind: LineKind, clean_line: str) -> str:
    what = f"invalid {kind.value} declaration {clean_line!r}"
    if isinstance(error, UnexpectedCharacters):
        return f"{what}: unexpected character {error.char!r} at column {error.column}"
    if isinstance(error, UnexpectedToken):
        if error.token.type == "$END":
            if kind is LineKind.FIELD:
                return f"{what}: expected '<type> <name>'"
            return f"{what}: expected '<type> <name>=<value>'"
        return f"{what}: unexpected {error.token.value!r} at column {error.column}"
    return what


def _resolve_type(type_: Type, package_name: str | None) -> Type:
    if type_.package_name is not None or type_.type_name in PRIMITIVE_TYPE_NAMES:
        return type_
    # Header is always std_msgs/Header in ROS1, regardless of the enclosing package
    if type_.type_name == HEADER_TYPE_NAME:
        resolved_package: str | None = HEADER_PACKAGE_NAME
    else:
        resolved_package = package_name or None
    return Type(
        type_name=type_.type_name,
        package_name=resolved_package,
        is_array=type_.is_array,
        array_size=type_.array_size,
    )


def _parse_line(orig_line: str, clean_line: str, kind: LineKind) -> _Declaration:
    """Parse a classified line, raising ``ValueError`` with a readable reason."""
    start = "constant_decl" if kind is LineKind.CONSTANT else "field_decl"
    try:
        tree = _LINE_PARSER.parse(clean_line, start=start)
    except UnexpectedInput as e:
        raise ValueError(_describe_error(e, kind, clean_line)) from e
    decl = _DeclarationTransformer().transform(tree)

    if decl.type.array_size is not None and decl.type.array_size <= 0:
        raise ValueError(f"array size of field '{decl.name}' must be a positive integer")

    if kind is LineKind.FIELD:
        return decl

    if decl.type.package_name is not None or decl.type.type_name not in CONSTANT_TYPE_NAMES:
        raise ValueError(
            f"constant '{decl.name}' uses type '{decl.type}', "
            "constants must use primitive types only"
        )
    if decl.type.is_array:
        raise ValueError(
            f"constant '{decl.name}' uses array type '{decl.type}', "
            "constants must use primitive types only (no arrays)"
        )

    if decl.type.type_name == PrimitiveType.STRING.value:
        # String constants take everything right of '=', comment characters included
        value_text = orig_line[orig_line.find(CONST_CHAR) + 1 :].strip()
    else:
        value_text = (decl.value_text or "").strip()
    if not value_text:
        raise ValueError(f"constant '{decl.name}' is missing a value")
    return _Declaration(type=decl.type, name=decl.name, value_text=value_text)


def parse_message_string(
    message_string: str, package_name: str | None = None
) -> tuple[list[Field], list[Constant]]:
    """
    Parse a ROS1 message definition.

    Args:
        message_string: The message definition text
        package_name: Enclosing package, used to resolve unqualified types

    Returns:
        Fields and constants, each in source order

    Raises:
        MsgSyntaxError: On the first malformed line (no partial result)
    """
    fields: list[Field] = []
    constants: list[Constant] = []

    for lineno, orig_line in enumerate(split_lines(message_string), start=1):
        clean_line = strip_comment(orig_line)
        kind = classify_line(clean_line)
        if kind is LineKind.BLANK:
            continue
        try:
            decl = _parse_line(orig_line, clean_line, kind)
        except ValueError as e:
            raise MsgSyntaxError(lineno, str(e)) from e

        if kind is LineKind.CONSTANT:
            constants.append(
                Constant(type=decl.type, name=decl.name, value_text=decl.value_text or "")
            )
        else:
            fields.append(Field(type=_resolve_type(decl.type, package_name), name=decl.name))

    return fields, constants


def split_service_string(service_string: str, full_name: str | None = None) -> tuple[str, str]:
    """
    Split a ROS1 service definition into request and response text.

    The separator is a line holding exactly ``---`` (surrounding whitespace
    allowed); exactly one is required.
    """
    lines = split_lines(service_string)
    separator_indices = [i for i, line in enumerate(lines) if line.strip() == SERVICE_SEPARATOR]

    if len(separator_indices) != 1:
        raise MalformedServiceError(full_name, len(separator_indices))

    sep_idx = separator_indices[0]
    request_string = "\n".join(lines[:sep_idx])
    response_string = "\n".join(lines[sep_idx + 1 :])
    return request_string, response_string
