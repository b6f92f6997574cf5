"""Documentation page parser."""

from .states import ReaderState, find_next_state
from .context import ParserContext
from .grammar import parse_args, parse_event_line, parse_function_line
from .builtins import inject_builtins
from .doc_parser import DocumentationParser, parse_documentation

__all__ = [
    "ReaderState",
    "find_next_state",
    "ParserContext",
    "parse_args",
    "parse_event_line",
    "parse_function_line",
    "inject_builtins",
    "DocumentationParser",
    "parse_documentation",
]
