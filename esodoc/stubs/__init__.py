"""Lua documentation stub generation and packaging."""

from .lua_writer import LuaStubWriter
from .packager import StubPackager, generate_stubs, replace_tokens, zip_directory

__all__ = [
    "LuaStubWriter",
    "StubPackager",
    "generate_stubs",
    "replace_tokens",
    "zip_directory",
]
