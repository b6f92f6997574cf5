"""
Schema engine configuration.

Loaded from a JSON document using the camelCase keys of the
``xsdConfig.json`` format. Every key is optional: a missing rename table or
list simply means "no rename" / "no match".
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator

from esodoc.errors import ConfigurationError

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent.parent / "data"
DEFAULT_CONFIG_FILE = DATA_DIR / "xsd_config.json"
DEFAULT_TEMPLATE_FILE = DATA_DIR / "xsd_template.xsd"


class XsdConfig(BaseModel):
    """Rename tables, element ordering and ignore lists for the schema engine."""

    model_config = ConfigDict(populate_by_name=True)

    element_name_rename: Dict[str, str] = Field(default_factory=dict, alias="elementNameRename")
    attribute_type_rename: Dict[str, str] = Field(default_factory=dict, alias="attributeTypeRename")
    parent_type_rename: Dict[str, str] = Field(default_factory=dict, alias="parentTypeRename")
    enum_prefixes: Dict[str, str] = Field(default_factory=dict, alias="enumPrefixes")
    ignored_elements: Set[str] = Field(default_factory=set, alias="ignoredElements")
    ignored_child_elements: Set[str] = Field(default_factory=set, alias="ignoredChildElements")
    containers: List[str] = Field(default_factory=list, alias="containers")
    others: List[str] = Field(default_factory=list, alias="others")
    template_file: Path = Field(default=DEFAULT_TEMPLATE_FILE, alias="templateFile")

    @field_validator("ignored_elements", "ignored_child_elements", mode="before")
    @classmethod
    def _keys_as_set(cls, value: Any) -> Any:
        # xsdConfig.json stores these as {"Name": true} objects
        if isinstance(value, dict):
            return set(value.keys())
        if value is None:
            return set()
        return value

    @field_validator(
        "element_name_rename",
        "attribute_type_rename",
        "parent_type_rename",
        "enum_prefixes",
        "containers",
        "others",
        mode="before",
    )
    @classmethod
    def _none_as_empty(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return [] if info.field_name in ("containers", "others") else {}
        return value

    def element_name(self, name: str) -> str:
        return self.element_name_rename.get(name, name)

    def attribute_type(self, name: str) -> str:
        return self.attribute_type_rename.get(name, name)

    def parent_type(self, name: str) -> str:
        return self.parent_type_rename.get(name, name)

    def strip_enum_prefix(self, enum_name: str, value: str) -> str:
        prefix = self.enum_prefixes.get(enum_name)
        if prefix and value.startswith(prefix):
            return value[len(prefix):]
        return value


def load_config(path: Optional[Path] = None) -> XsdConfig:
    """
    Load the schema configuration.

    Args:
        path: JSON configuration file (default: bundled xsd_config.json)

    Returns:
        XsdConfig with ``template_file`` resolved relative to the config file

    Raises:
        ConfigurationError: If the file cannot be read or is not a JSON object
    """
    path = Path(path) if path else DEFAULT_CONFIG_FILE
    logger.info(f"Loading schema configuration: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot read schema configuration {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Schema configuration {path} must be a JSON object")

    try:
        config = XsdConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid schema configuration {path}: {e}") from e

    if "templateFile" in data and not config.template_file.is_absolute():
        config.template_file = (path.parent / config.template_file).resolve()
    return config
