"""
Packaging of the Lua documentation stubs.

Stages the stub template tree in a temporary directory, writes the generated
``.doclua`` files into its ``api/`` folder, substitutes ``##TOKEN##``
placeholders, and produces ``esolua<version>.zip``:

    esolua<version>.zip
    ├── esolua.rockspec
    └── api.zip
        ├── global.doclua
        ├── globals.doclua
        └── <Object>.doclua
"""

import logging
import shutil
import tempfile
import zipfile
from pathlib import Path
from typing import Dict, Optional

from esodoc.errors import ConfigurationError
from esodoc.schemas import Documentation
from esodoc.stubs.lua_writer import LuaStubWriter

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent.parent / "data"
DEFAULT_TEMPLATE_DIR = DATA_DIR / "lua_template"
ROCKSPEC_FILE = "esolua.rockspec"
API_DIR = "api"


def replace_tokens(path: Path, replacements: Dict[str, str]) -> None:
    """Replace every ``##KEY##`` placeholder in ``path``."""
    content = path.read_text(encoding="utf-8")
    for key, value in replacements.items():
        logger.debug(f"Replace ##{key}## with {value!r} in {path.name}")
        content = content.replace(f"##{key}##", value)
    path.write_text(content, encoding="utf-8")


def zip_directory(source_dir: Path, target_file: Path) -> Path:
    """Zip the contents of ``source_dir`` (without the directory itself)."""
    with zipfile.ZipFile(target_file, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for path in sorted(source_dir.rglob("*")):
            if path.is_file() and path != target_file:
                archive.write(path, path.relative_to(source_dir).as_posix())
    logger.info(f"Archived {source_dir} to {target_file} ({target_file.stat().st_size} bytes)")
    return target_file


class StubPackager:
    """
    Build the Lua stub archive for a parsed documentation.

    Usage:
        packager = StubPackager(documentation)
        archive = packager.package(Path("target"))
    """

    def __init__(self, documentation: Documentation, template_dir: Optional[Path] = None):
        self.documentation = documentation
        self.template_dir = Path(template_dir) if template_dir else DEFAULT_TEMPLATE_DIR
        self.writer = LuaStubWriter(documentation)

    def output_file_name(self) -> str:
        return f"esolua{self.documentation.api_version}.zip"

    def write_stubs(self, api_dir: Path) -> None:
        """Write all doclua files into ``api_dir``."""
        api_dir.mkdir(parents=True, exist_ok=True)

        # The template may already provide the head of global.doclua
        with open(api_dir / "global.doclua", "a", encoding="utf-8", newline="") as f:
            f.write(self.writer.render_global_api())

        with open(api_dir / "globals.doclua", "w", encoding="utf-8", newline="") as f:
            f.write(self.writer.render_globals())

        for obj in self.documentation.objects.values():
            with open(api_dir / f"{obj.name}.doclua", "w", encoding="utf-8", newline="") as f:
                f.write(self.writer.render_object(obj))

        logger.info(f"Wrote {len(self.documentation.objects) + 2} doclua files to {api_dir}")

    def stage(self, staging_dir: Path) -> Path:
        """Copy the template into ``staging_dir`` and fill it in."""
        if not self.template_dir.is_dir():
            raise ConfigurationError(f"Stub template directory not found: {self.template_dir}")

        logger.info(f"Copying {self.template_dir} to {staging_dir}")
        shutil.copytree(self.template_dir, staging_dir)

        api_dir = staging_dir / API_DIR
        self.write_stubs(api_dir)

        rockspec = staging_dir / ROCKSPEC_FILE
        if rockspec.exists():
            replace_tokens(rockspec, {"APIVERSION": str(self.documentation.api_version)})

        zip_directory(api_dir, staging_dir / "api.zip")
        shutil.rmtree(api_dir)
        return staging_dir

    def package(self, output_dir: Path) -> Path:
        """
        Create ``esolua<version>.zip`` in ``output_dir``.

        Returns:
            Path to the archive
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        archive = output_dir / self.output_file_name()

        with tempfile.TemporaryDirectory(prefix="esodoc-") as temp_dir:
            staging_dir = self.stage(Path(temp_dir) / "esolua")
            zip_directory(staging_dir, archive)

        return archive


def generate_stubs(
    documentation: Documentation,
    output_dir: Path,
    template_dir: Optional[Path] = None,
) -> Path:
    """Convenience function to build the Lua stub archive."""
    return StubPackager(documentation, template_dir).package(output_dir)
