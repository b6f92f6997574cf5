"""
Lua documentation stub writer.

Renders the parsed documentation as ``.doclua`` execution environment files:
- global.doclua: global functions and events
- globals.doclua: enumeration types and their values
- <Object>.doclua: one module per object with its methods
"""

import logging
from typing import List, Optional

from esodoc.schemas import ApiArgument, ApiEvent, ApiFunction, ApiObject, Documentation

logger = logging.getLogger(__name__)

INDENT = "    "
EOL = "\r\n"
SEPARATOR = "-" * 79
GLOBAL_PARENT = "global"
# Values are not part of the documentation page
UNKNOWN_VALUE = "unknown"


class LuaStubWriter:
    """Accumulate doclua lines and return them as file content."""

    def __init__(self, documentation: Documentation):
        self.documentation = documentation
        self.lines: List[str] = []

    def _start(self) -> None:
        self.lines = []

    def _finish(self) -> str:
        self.write_line("return nil")
        content = "".join(self.lines)
        self.lines = []
        return content

    def write_line(self, line: str, indent: int = 0) -> None:
        self.lines.append(INDENT * indent + line + EOL)

    def start_section(self) -> None:
        self.write_line(SEPARATOR)

    def end_section(self) -> None:
        self.write_line("")

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    def render_global_api(self) -> str:
        """Global functions followed by events."""
        self._start()
        for function in self.documentation.functions.values():
            self.write_function(function)
        for event in self.documentation.events.values():
            self.write_event(event)
        return self._finish()

    def render_globals(self) -> str:
        self._start()
        self.start_section()
        self.write_line("-- @module globals")
        self.end_section()

        for type_name, values in self.documentation.globals.items():
            self.start_section()
            self.write_line(f"-- {type_name} type.")
            self.write_line(f"-- @type {type_name}")
            self.end_section()
            for name in values:
                self.start_section()
                self.write_line(f"-- `{name}` = {UNKNOWN_VALUE}")
                self.write_line(
                    f"-- This is a global variable which holds one of the possible values for @{{{type_name}}}."
                )
                self.write_line(f"-- @field[parent=#globals] #{type_name} {name}")
                self.end_section()
        return self._finish()

    def render_object(self, obj: ApiObject) -> str:
        self._start()
        self.start_section()
        self.write_line(f"-- @module {obj.name}")
        parent = self.documentation.parent_of(obj)
        if parent is not None:
            self.write_line(f"-- @extends {parent.name}#{parent.name}")
        self.end_section()

        for function in obj.functions.values():
            self.write_function(function, obj.name)
        return self._finish()

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def write_function(self, function: ApiFunction, parent: Optional[str] = None) -> None:
        parent = parent or GLOBAL_PARENT
        self.start_section()
        self.write_line(f"-- {function.access.value} `{function.name}`")
        if function.has_variable_returns:
            self.write_line("-- This function uses variable return values.")
        self.write_line(f"-- @function [parent=#{parent}] {function.name}")
        if parent != GLOBAL_PARENT:
            self.write_line(f"-- @param #{parent} self")
        self.write_arguments(function.args or [])
        self.write_returns(function.returns or [])
        self.end_section()

    def write_arguments(self, args: List[ApiArgument]) -> None:
        for arg in args:
            self.write_line(f"-- @param #{arg.type.type} {arg.name}")

    def write_returns(self, returns: List[ApiArgument]) -> None:
        for ret in returns:
            self.write_line(f"-- @return {ret.type.type}#{ret.type.type} {ret.name}")

    def write_event(self, event: ApiEvent) -> None:
        self.start_section()
        self.write_line(f"-- `{event.name}` = {UNKNOWN_VALUE}")
        self.write_line("-- ")
        self.write_line("-- This is one of the available event types which can be used with the @{EVENT_MANAGER}.")
        self.write_line("-- <b>Callback Parameters</b>")
        self.write_line("-- <ul>")
        self.write_line("-- <li>#Event eventType</li>")
        for arg in event.args or []:
            self.write_line(f"-- <li>#{arg.type.type} {arg.name}</li>")
        self.write_line("-- </ul>")
        self.write_line(f"-- @field[parent=#global] #Event {event.name}")
        self.end_section()
