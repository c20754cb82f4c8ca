"""Declaration tree of a QML file.

The tree only carries what documentation extraction needs. Each node spans
a ``SourceRange`` from its first to its last token; offsets index the
source text the tree was read from.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


@dataclass(frozen=True)
class SourceRange:
    """Offsets are 0-indexed, ``end`` exclusive. Lines and columns are 1-indexed."""
    begin: int
    end: int
    start_line: int = 0
    start_column: int = 0


@dataclass
class Import:
    """``import QtQuick 2.15 as QQ`` or ``import "dir" as D``."""
    span: SourceRange
    file_name: SourceRange
    version: SourceRange | None = None
    uri: list[str] = field(default_factory=list)  # Empty for file imports
    alias: str = ""


@dataclass
class ObjectDefinition:
    """``Type { members }``."""
    span: SourceRange
    type_name: list[str]
    members: list["Declaration"] = field(default_factory=list)


@dataclass
class ObjectBinding:
    """``name: Type { members }`` or ``Type on name { members }``."""
    span: SourceRange
    name: list[str]
    type_name: list[str]
    members: list["Declaration"] = field(default_factory=list)
    on_syntax: bool = False


@dataclass
class ArrayBinding:
    """``name: [ Type {}, Type {} ]``."""
    span: SourceRange
    name: list[str]
    members: list["Declaration"] = field(default_factory=list)


@dataclass
class ScriptBinding:
    """``name: expression``."""
    span: SourceRange
    name: list[str]


class MemberKind(Enum):
    PROPERTY = "property"
    SIGNAL = "signal"


@dataclass
class SignalParameter:
    type: str
    name: str


@dataclass
class PublicMember:
    """A custom ``property`` or ``signal`` declaration."""
    span: SourceRange
    kind: MemberKind
    name: str
    member_type: list[str] = field(default_factory=list)
    type_modifier: str = ""  # "list" for list<T> properties
    is_readonly: bool = False
    is_default: bool = False
    is_required: bool = False
    parameters: list[SignalParameter] = field(default_factory=list)
    members: list["Declaration"] = field(default_factory=list)  # Object-valued initializer


@dataclass
class FormalParameter:
    name: str
    initializer: SourceRange | None = None


@dataclass
class FunctionDeclaration:
    span: SourceRange
    name: str
    formals: list[FormalParameter] = field(default_factory=list)


@dataclass
class Program:
    """Root of the tree: the import headers followed by the top-level objects."""
    imports: list[Import] = field(default_factory=list)
    members: list["Declaration"] = field(default_factory=list)


Declaration = Union[
    Import,
    ObjectDefinition,
    ObjectBinding,
    ArrayBinding,
    ScriptBinding,
    PublicMember,
    FunctionDeclaration,
]


def qualified_id(parts: list[str]) -> str:
    """Join a qualified identifier with dots."""
    return ".".join(parts)
