"""Reader states of the documentation parser and the section transition rule."""

from enum import Enum
from typing import List, Tuple


class ReaderState(Enum):
    UNDETERMINED = "undetermined"
    API_VERSION = "api_version"
    VM_FUNCTIONS = "vm_functions"
    GLOBALS = "globals"
    GAME_API = "game_api"
    OBJECT_API = "object_api"
    EVENTS = "events"
    XML_LAYOUT = "xml_layout"
    XML_ATTRIBUTES = "xml_attributes"


# Section headers, checked in order against the start of a line
SECTION_HEADERS: List[Tuple[str, ReaderState]] = [
    ("{TOC:maxLevel", ReaderState.API_VERSION),
    ("h2. VM Functions", ReaderState.VM_FUNCTIONS),
    ("h2. Global Variables", ReaderState.GLOBALS),
    ("h2. Game API", ReaderState.GAME_API),
    ("h2. Object API", ReaderState.OBJECT_API),
    ("h2. Events", ReaderState.EVENTS),
    ("h2. UI XML Layout", ReaderState.XML_ATTRIBUTES),
]


def find_next_state(line: str, current: ReaderState) -> ReaderState:
    """
    Determine the state that follows ``current`` for the given line.

    The attributes sub-section of the UI XML layout is always followed by the
    layout itself, so leaving XML_ATTRIBUTES without a new header moves on to
    XML_LAYOUT.
    """
    for prefix, state in SECTION_HEADERS:
        if line.startswith(prefix):
            return state
    if current is ReaderState.XML_ATTRIBUTES:
        return ReaderState.XML_LAYOUT
    return ReaderState.UNDETERMINED
