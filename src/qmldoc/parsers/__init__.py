from pathlib import Path

from qmldoc.parsers.base import BaseParser
from qmldoc.parsers.qml import QmlOutlineParser, QmlSyntaxError

__all__ = ["BaseParser", "QmlOutlineParser", "QmlSyntaxError", "get_parser_for_file"]

_PARSERS = {
    ".qml": QmlOutlineParser,
}


def get_parser_for_file(file_path: Path) -> BaseParser | None:
    """Return a parser for the file's extension, or None if unsupported."""
    parser_class = _PARSERS.get(file_path.suffix.lower())
    if parser_class is None:
        return None
    return parser_class()
