"""
Documentation parser.

Reads the wiki-markup API documentation page line by line and populates a
Documentation model. The page is split into sections by ``h2.`` headers; each
section has its own line handler. Parsing is a single forward pass: every
handler only sees the current line plus the scratch references kept in the
ParserContext of the active section.

Sections:
- API_VERSION: ``h1. ... <version>`` title line
- GLOBALS: ``h5.`` enumeration headers followed by ``*`` values
- VM_FUNCTIONS / GAME_API: global function lines
- OBJECT_API: ``h3.`` objects, ``[...]`` child lists and function lines
- EVENTS: ``*`` event lines
- XML_ATTRIBUTES: shared ``*`` attribute definitions
- XML_LAYOUT: ``h5.`` elements with attributes, children and inheritance
"""

import logging
import re
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional

from esodoc.errors import DocumentationParseError
from esodoc.parser.builtins import inject_builtins
from esodoc.parser.context import ParserContext
from esodoc.parser.grammar import (
    FUNCTION_PREFIX,
    RETURNS_PREFIX,
    VARIABLE_RETURNS_PREFIX,
    all_matches,
    first_match,
    parse_event_line,
    parse_function_line,
    parse_returns_line,
)
from esodoc.parser.states import ReaderState, find_next_state
from esodoc.schemas import ApiArgument, ApiFunction, ApiType, Documentation

logger = logging.getLogger(__name__)

TITLE_PREFIX = "h1. "
SECTION_END_PREFIX = "h2. "
LAYOUT_END_PREFIX = "h5. sentinel_element"

API_VERSION_PATTERN = re.compile(r"(\d+)$")
ENUM_NAME_PATTERN = re.compile(r"h5\. (.+)$")
ENUM_VALUE_PATTERN = re.compile(r"\* (.+)$")
OBJECT_NAME_PATTERN = re.compile(r"h3\. (.+)$")
XML_ATTRIBUTE_DEFINITION_PATTERN = re.compile(r"^\* (.+) \*(.+)\*$")
ELEMENT_NAME_PATTERN = re.compile(r"h5\. (.+)$")
ELEMENT_ATTRIBUTE_PATTERN = re.compile(r"\* _attribute:_ (.+)$")
ATTRIBUTE_DECLARATION_PATTERN = re.compile(r"\*(.+)\* _(.+)_")
SCRIPT_ARGUMENTS_PATTERN = re.compile(r"\* ScriptArguments: (.+)$")
ELEMENT_REFERENCE_PATTERN = re.compile(r"^\* \[(.+): (.+)\|#(.+)\]$")


class DocumentationParser:
    """
    Line oriented state machine over the documentation page.

    Usage:
        parser = DocumentationParser()
        documentation = parser.parse(Path("ESOUIDocumentation.txt"))
    """

    def __init__(self):
        self._handlers: Dict[ReaderState, Callable[[str, ParserContext], bool]] = {
            ReaderState.API_VERSION: self._read_api_version,
            ReaderState.GLOBALS: self._read_globals,
            ReaderState.VM_FUNCTIONS: self._read_game_api,
            ReaderState.GAME_API: self._read_game_api,
            ReaderState.OBJECT_API: self._read_object_api,
            ReaderState.EVENTS: self._read_events,
            ReaderState.XML_ATTRIBUTES: self._read_xml_attributes,
            ReaderState.XML_LAYOUT: self._read_xml_layout,
        }
        self.reset()

    def reset(self) -> None:
        """Start over with a fresh model that only holds the built-in API."""
        self.documentation = Documentation()
        inject_builtins(self.documentation)
        self.state = ReaderState.UNDETERMINED
        self.context = ParserContext()
        self.line_number = 0
        self.title_read = False

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def parse(self, path: Path) -> Documentation:
        """Parse a documentation file."""
        path = Path(path)
        logger.info(f"Parsing documentation: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return self.parse_lines(f)

    def parse_text(self, text: str) -> Documentation:
        return self.parse_lines(text.splitlines())

    def parse_lines(self, lines: Iterable[str]) -> Documentation:
        self.reset()
        for line in lines:
            self.feed(line.rstrip("\r\n"))

        documentation = self.documentation
        logger.info(
            f"Parsed API version {documentation.api_version}: "
            f"{len(documentation.globals)} globals, "
            f"{len(documentation.functions)} functions, "
            f"{len(documentation.objects)} objects, "
            f"{len(documentation.events)} events, "
            f"{len(documentation.xml_layout)} XML elements"
        )
        return documentation

    def feed(self, line: str) -> None:
        """Process a single line (without its line terminator)."""
        self.line_number += 1

        if self._is_bare_title(line):
            self.state = ReaderState.API_VERSION

        handler = self._handlers.get(self.state)
        if handler is None:
            self._transition(line)
            return

        try:
            finished = handler(line, self.context)
        except DocumentationParseError as e:
            raise DocumentationParseError(line, e.reason, self.line_number) from e

        if finished:
            self._transition(line)

    def _is_bare_title(self, line: str) -> bool:
        """A versioned page title with no table of contents in front of it."""
        return (
            self.state is ReaderState.UNDETERMINED
            and not self.title_read
            and line.startswith(TITLE_PREFIX)
            and API_VERSION_PATTERN.search(line) is not None
        )

    def _transition(self, line: str) -> None:
        next_state = find_next_state(line, self.state)
        if next_state is not self.state:
            logger.debug(f"Line {self.line_number}: {self.state.name} -> {next_state.name}")
        self.state = next_state
        self.context = ParserContext()

    # ------------------------------------------------------------------
    # Section handlers; each returns True when its section has ended
    # ------------------------------------------------------------------

    def _read_api_version(self, line: str, context: ParserContext) -> bool:
        if line.startswith(TITLE_PREFIX):
            self.documentation.api_version = int(first_match(API_VERSION_PATTERN, line))
            self.title_read = True
            return True
        return False

    def _read_globals(self, line: str, context: ParserContext) -> bool:
        if line.startswith(SECTION_END_PREFIX):
            return True

        if line.startswith("h5. "):
            name = first_match(ENUM_NAME_PATTERN, line)
            context.current_enum = self.documentation.get_or_create_global(name)
        elif line.startswith("* "):
            if context.current_enum is None:
                raise DocumentationParseError(line, "Enumeration value outside of an enumeration")
            context.current_enum.append(first_match(ENUM_VALUE_PATTERN, line))
        return False

    def _read_game_api(self, line: str, context: ParserContext) -> bool:
        if line.startswith(SECTION_END_PREFIX):
            return True

        self._read_function(line, context, self.documentation.functions)
        return False

    def _read_function(
        self,
        line: str,
        context: ParserContext,
        functions: Dict[str, ApiFunction],
    ) -> None:
        if line.startswith(FUNCTION_PREFIX):
            function = parse_function_line(line)
            functions[function.name] = function
            context.current_function = function
        elif line.startswith(VARIABLE_RETURNS_PREFIX):
            self._require_function(line, context).has_variable_returns = True
        elif line.startswith(RETURNS_PREFIX):
            self._require_function(line, context).returns = parse_returns_line(line)

    @staticmethod
    def _require_function(line: str, context: ParserContext) -> ApiFunction:
        if context.current_function is None:
            raise DocumentationParseError(line, "Function modifier without a function")
        return context.current_function

    def _read_object_api(self, line: str, context: ParserContext) -> bool:
        if line.startswith(SECTION_END_PREFIX):
            return True

        if line.startswith("h3. "):
            name = first_match(OBJECT_NAME_PATTERN, line)
            context.current_object = self.documentation.get_or_create_object(name)
        elif line.startswith("["):
            parent = context.current_object
            if parent is None:
                raise DocumentationParseError(line, "Child object list without an object")
            for token in line.split(", "):
                child = self.documentation.get_or_create_object(ApiType.from_token(token).type)
                parent.children.append(child.name)
                child.parent = parent.name
        elif context.current_object is not None and line != "":
            self._read_function(line, context, context.current_object.functions)
        return False

    def _read_events(self, line: str, context: ParserContext) -> bool:
        if line.startswith(SECTION_END_PREFIX):
            return True

        if line.startswith("* "):
            event = parse_event_line(line)
            self.documentation.events[event.name] = event
        return False

    def _read_xml_attributes(self, line: str, context: ParserContext) -> bool:
        if line.startswith("h4. Attributes"):
            return False
        if not line.startswith("* "):
            return True

        name, type_token = all_matches(XML_ATTRIBUTE_DEFINITION_PATTERN, line)
        self.documentation.xml_attributes[name] = ApiArgument(
            name=name, type=ApiType.from_token(type_token)
        )
        return False

    def _read_xml_layout(self, line: str, context: ParserContext) -> bool:
        if line.startswith(LAYOUT_END_PREFIX):
            return True

        if line.startswith("h5. "):
            name = first_match(ELEMENT_NAME_PATTERN, line)
            context.current_element = self.documentation.get_or_create_element(name)
        elif line.startswith("* _attr"):
            declaration = first_match(ELEMENT_ATTRIBUTE_PATTERN, line)
            type_token, name = all_matches(ATTRIBUTE_DECLARATION_PATTERN, declaration)
            self._require_element(line, context).add_attribute(
                ApiArgument(name=name, type=ApiType.from_token(type_token))
            )
        elif line.startswith("* ScriptArguments"):
            self._require_element(line, context).documentation = first_match(
                SCRIPT_ARGUMENTS_PATTERN, line
            )
        elif line.startswith("* ["):
            kind, name, type_name = all_matches(ELEMENT_REFERENCE_PATTERN, line)
            element = self._require_element(line, context)
            if kind == "Child":
                if type_name == "Attributes":
                    element.add_shared_attribute(name)
                else:
                    element.children.append(ApiType.from_token(name, type_name))
            elif kind == "Inherits":
                element.parent = ApiType.from_token(type_name)
            else:
                logger.warning(f"Unhandled element reference {kind!r} (line {self.line_number}): {line}")
        return False

    @staticmethod
    def _require_element(line: str, context: ParserContext):
        if context.current_element is None:
            raise DocumentationParseError(line, "Element detail without an element")
        return context.current_element


def parse_documentation(path: Path, parser: Optional[DocumentationParser] = None) -> Documentation:
    """
    Convenience function to parse a documentation file.

    Args:
        path: Path to the documentation page
        parser: Optional parser instance to reuse

    Returns:
        Parsed Documentation
    """
    parser = parser or DocumentationParser()
    return parser.parse(path)
