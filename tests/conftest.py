import os
import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path for imports like `import esodoc`
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Keep a developer's .env from leaking into the tests
for name in ("ESODOC_OUTPUT_DIR", "ESODOC_XSD_CONFIG", "ESODOC_LUA_TEMPLATE_DIR", "ESODOC_LOG_LEVEL"):
    os.environ.pop(name, None)

from esodoc.parser import DocumentationParser  # noqa: E402
from esodoc.xsd import XsdConfig  # noqa: E402


SAMPLE_DOC = """\
{TOC:maxLevel=2}
h1. Elder Scrolls Online API Version 101

h2. VM Functions

* zo_strformat(*string* _formatString_, *types* _arguments_)
** _Returns:_ *string* _formattedString_

h2. Global Variables

h5. Align
* ALIGN_LEFT
* ALIGN_RIGHT

h5. ControlType
* CT_CONTROL
* CT_LABEL

h2. Game API

* GetDisplayName()
** _Returns:_ *string* _displayName_

* GetUnitName(*string* _unitTag_)
** _Uses variable returns..._
** _Returns:_ *string* _name_

* RequestJumpToHouse *private* (*integer* _houseId_)

h2. Object API

h3. Control
[Label|#LabelControl], [Texture|#TextureControl]
* SetHidden(*bool* _hidden_)
* GetAlpha()
** _Returns:_ *number* _alpha_

h3. LabelControl
* SetText(*string* _text_)

h2. Events

* EVENT_ADD_ON_LOADED (*string* _addonName_)
* EVENT_PLAYER_ACTIVATED

h2. UI XML Layout
h4. Attributes
* hidden *bool*
* alpha *number*

h5. GuiXml
* [Child: Controls|#Controls]
* [Child: Font|#Font]

h5. Controls
* [Child: Control|#Control]
* [Child: Label|#Label]

h5. Font
* _attribute:_ *string* _name_
* _attribute:_ *string* _font_

h5. Anchor
* _attribute:_ *[Align|#Align]* _point_
* _attribute:_ *integer* _offsetX_

h5. Control
* [Child: hidden|#Attributes]
* [Child: Anchor|#Anchor]
* [Child: Controls|#Controls]

h5. Label
* [Inherits: Control|#Control]
* _attribute:_ *[Align|#Align]* _horizontalAlignment_
* [Child: Anchor|#Anchor]

h5. Texture
* [Inherits: Control|#Control]
* [Child: alpha|#Attributes]

h5. ScriptBase
* _attribute:_ *string* _name_

h5. OnShow
* ScriptArguments: self, hidden
* [Inherits: ScriptBase|#ScriptBase]

h5. sentinel_element
"""


@pytest.fixture
def sample_text():
    return SAMPLE_DOC


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "ESOUIDocumentation.txt"
    path.write_text(SAMPLE_DOC.replace("\n", "\r\n"), encoding="utf-8", newline="")
    return path


@pytest.fixture
def documentation():
    return DocumentationParser().parse_text(SAMPLE_DOC)


@pytest.fixture
def xsd_config():
    return XsdConfig(
        attribute_type_rename={"bool": "xs:boolean", "integer": "xs:integer", "number": "xs:decimal", "string": "xs:string"},
        enum_prefixes={"Align": "ALIGN_"},
        ignored_elements={"sentinel_element"},
        containers=["Controls", "Animations", "Font"],
        others=["Anchor", "Dimensions"],
    )
