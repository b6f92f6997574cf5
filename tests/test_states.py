import random

import pytest

from esodoc.parser.states import SECTION_HEADERS, ReaderState, find_next_state


@pytest.mark.parametrize("line, expected", [
    ("{TOC:maxLevel=2}", ReaderState.API_VERSION),
    ("h2. VM Functions", ReaderState.VM_FUNCTIONS),
    ("h2. Global Variables", ReaderState.GLOBALS),
    ("h2. Game API", ReaderState.GAME_API),
    ("h2. Object API", ReaderState.OBJECT_API),
    ("h2. Events", ReaderState.EVENTS),
    ("h2. UI XML Layout", ReaderState.XML_ATTRIBUTES),
])
def test_header_selects_state(line, expected):
    assert find_next_state(line, ReaderState.UNDETERMINED) is expected


def test_headers_in_any_order_land_in_their_state():
    headers = list(SECTION_HEADERS)
    random.Random(7).shuffle(headers)
    current = ReaderState.UNDETERMINED
    for prefix, expected in headers:
        current = find_next_state(prefix, current)
        assert current is expected


def test_unknown_line_is_undetermined():
    assert find_next_state("h2. Something Else", ReaderState.UNDETERMINED) is ReaderState.UNDETERMINED
    assert find_next_state("", ReaderState.GLOBALS) is ReaderState.UNDETERMINED


def test_xml_attributes_always_move_on_to_layout():
    assert find_next_state("", ReaderState.XML_ATTRIBUTES) is ReaderState.XML_LAYOUT
    assert find_next_state("h5. Control", ReaderState.XML_ATTRIBUTES) is ReaderState.XML_LAYOUT


def test_header_wins_over_forced_layout_transition():
    assert find_next_state("h2. Events", ReaderState.XML_ATTRIBUTES) is ReaderState.EVENTS
