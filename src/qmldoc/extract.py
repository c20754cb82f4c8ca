import logging
from dataclasses import dataclass, field
from pathlib import Path

from qmldoc.binder import DeclarationBinder
from qmldoc.config import ExtractConfig
from qmldoc.database import DocDatabase
from qmldoc.diagnostics import Diagnostic, Diagnostics
from qmldoc.models import Entity, Status
from qmldoc.parsers import get_parser_for_file

logger = logging.getLogger(__name__)


@dataclass
class ExtractionResult:
    """Entities documented in one file and the warnings raised doing so."""
    path: str
    entities: list[Entity] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    has_error: bool = False

    def visible_entities(self, include_internal: bool = False) -> list[Entity]:
        if include_internal:
            return list(self.entities)
        return [entity for entity in self.entities if entity.status is not Status.INTERNAL]


def register_enums(database: DocDatabase, enums: dict[str, list[str]]) -> None:
    """Register configured enumerations; ``A::B::Name`` keeps ``A::B`` as qualifier."""
    for name, values in enums.items():
        qualifier, _, bare_name = name.rpartition("::")
        database.register_enum(bare_name, values, qualifier)


def extract_file(
    file_path: str | Path,
    database: DocDatabase | None = None,
    config: ExtractConfig | None = None,
) -> ExtractionResult:
    """Extract documentation entities from a QML file.

    Args:
        file_path: Path to the file
        database: Database receiving the entities (a fresh one if None)
        config: Extraction configuration (defaults if None)

    Returns:
        ExtractionResult for the file

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If file type not supported or the file cannot be read as QML
    """
    if database is None:
        database = DocDatabase()
    if config is None:
        config = ExtractConfig()

    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    parser = get_parser_for_file(path)
    if parser is None:
        raise ValueError(f"Unsupported file type: {file_path}")

    register_enums(database, config.enums)

    source_code = path.read_text(encoding="utf-8")
    outline = parser.parse(source_code)

    diagnostics = Diagnostics()
    binder = DeclarationBinder(
        file_path=str(file_path),
        source=source_code,
        comments=outline.comments,
        database=database,
        diagnostics=diagnostics,
        max_depth=config.max_depth,
    )
    if not binder.bind(outline.program):
        logger.warning(f"Output for {file_path} is incomplete")

    return ExtractionResult(
        path=str(file_path),
        entities=binder.touched,
        diagnostics=diagnostics.items,
        has_error=binder.has_error,
    )
