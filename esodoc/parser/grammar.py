"""
Line grammars shared by several parser sections.

- Argument lists: comma separated ``*type* _name_`` pieces
- Function lines: ``* Name[ *access*](args)``
- Event lines: ``* NAME[ (args)]``

Argument lists are split on every comma. There is no escaping, so a type or
name that contains a comma will not parse as intended.
"""

import re
from typing import List, Optional, Tuple

from esodoc.errors import DocumentationParseError
from esodoc.schemas import ApiArgument, ApiEvent, ApiFunction, ApiType, FunctionAccess

ARGUMENT_PATTERN = re.compile(r"\*(.+)\* _(.+)_")
FUNCTION_PATTERN = re.compile(r"^\* (.+)\((.*)\)$")
FUNCTION_NAME_PATTERN = re.compile(r"([^\s]+)( \*(.+)\*)?")
EVENT_PATTERN = re.compile(r"^\* ([^\s]+)(\s\((.+)\))?")
RETURNS_PATTERN = re.compile(r"^\*\* _Returns:_ (.+)$")

FUNCTION_PREFIX = "* "
VARIABLE_RETURNS_PREFIX = "** _Uses variable returns"
RETURNS_PREFIX = "** _Returns:_"


def first_match(pattern: re.Pattern, line: str) -> str:
    """Return the first capture group of ``pattern`` in ``line`` or fail."""
    match = pattern.search(line)
    if not match:
        raise DocumentationParseError(line, f"No match for pattern {pattern.pattern!r}")
    return match.group(1)


def all_matches(pattern: re.Pattern, line: str) -> Tuple[Optional[str], ...]:
    """Return every capture group of ``pattern`` in ``line`` or fail."""
    match = pattern.search(line)
    if not match:
        raise DocumentationParseError(line, f"No match for pattern {pattern.pattern!r}")
    return match.groups()


def parse_argument(raw: str) -> ApiArgument:
    match = ARGUMENT_PATTERN.search(raw)
    if not match:
        raise DocumentationParseError(raw, f"Malformed argument {raw.strip()!r}")
    type_token, name = match.groups()
    return ApiArgument(name=name, type=ApiType.from_token(type_token))


def parse_args(raw: str) -> List[ApiArgument]:
    """Parse an argument list such as ``*integer* _index_, *string* _name_``."""
    return [parse_argument(piece) for piece in raw.split(",")]


def parse_function_line(line: str) -> ApiFunction:
    """Parse a ``* Name *access*(args)`` line into a new function."""
    signature, args = all_matches(FUNCTION_PATTERN, line)
    name, _, access = all_matches(FUNCTION_NAME_PATTERN, signature)

    function = ApiFunction(name=name, access=FunctionAccess.from_value(access))
    if args:
        function.args = parse_args(args)
    return function


def parse_returns_line(line: str) -> List[ApiArgument]:
    return parse_args(first_match(RETURNS_PATTERN, line))


def parse_event_line(line: str) -> ApiEvent:
    name, _, args = all_matches(EVENT_PATTERN, line)
    return ApiEvent(name=name, args=parse_args(args) if args else None)
