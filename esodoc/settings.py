"""
Runtime settings.

Values come from ``ESODOC_*`` environment variables; a ``.env`` file found
from the working directory upwards is loaded first. Command line options take
precedence over these settings.

Environment:
- ESODOC_OUTPUT_DIR: directory for generated files (default: target)
- ESODOC_XSD_CONFIG: schema configuration JSON (default: bundled)
- ESODOC_LUA_TEMPLATE_DIR: Lua stub template tree (default: bundled)
- ESODOC_LOG_LEVEL: root log level (default: WARNING)
"""

import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv(find_dotenv(usecwd=True))

ENV_PREFIX = "ESODOC_"


class Settings(BaseModel):
    output_dir: Path = Field(default=Path("target"), description="Directory for generated files")
    xsd_config: Optional[Path] = Field(None, description="Schema configuration file")
    lua_template_dir: Optional[Path] = Field(None, description="Lua stub template directory")
    log_level: str = Field(default="WARNING", description="Root log level")

    @field_validator("log_level")
    @classmethod
    def _upper(cls, value: str) -> str:
        return value.upper()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        environ = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            value = environ.get(f"{ENV_PREFIX}{name.upper()}")
            if value:
                values[name] = value
        return cls(**values)


def get_settings() -> Settings:
    return Settings.from_env()
