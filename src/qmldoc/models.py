from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Iterator

if TYPE_CHECKING:
    from qmldoc.doc import Doc


@dataclass
class Location:
    """Represents a position in a source file (1-indexed line, 0 if unknown)."""
    path: str
    line: int = 0
    column: int = 0

    def __str__(self) -> str:
        if self.line <= 0:
            return self.path
        if self.column <= 0:
            return f"{self.path}:{self.line}"
        return f"{self.path}:{self.line}:{self.column}"


@dataclass(frozen=True)
class CommentSpan:
    """Location of one comment's content in the source text.

    ``begin`` is the offset of the first character after the opening
    delimiter and ``end`` the offset one past the last content character.
    """
    begin: int
    end: int
    start_line: int = 0
    start_column: int = 0


class Status(Enum):
    ACTIVE = "active"
    INTERNAL = "internal"
    DEPRECATED = "deprecated"
    PRELIMINARY = "preliminary"


class FunctionKind(Enum):
    METHOD = "method"
    SIGNAL = "signal"


@dataclass
class Parameter:
    """Represents a function/signal parameter."""
    type: str = ""
    name: str = ""
    default: str = ""  # Empty if no default value


@dataclass
class Parameters:
    """Ordered, mutable parameter list owned by a function entity."""
    items: list[Parameter] = field(default_factory=list)

    def append(self, type: str, name: str, default: str = "") -> None:
        self.items.append(Parameter(type=type, name=name, default=default))

    def clear(self) -> None:
        self.items.clear()

    def __iter__(self) -> Iterator[Parameter]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> Parameter:
        return self.items[index]


@dataclass
class ImportRecord:
    """One import statement of a QML file."""
    name: str
    version: str = ""
    uri: str = ""
    alias: str = ""


@dataclass(eq=False)
class Entity:
    """Fields shared by every documentation entity.

    ``parent`` is the qualified name of the owning entity, or an empty
    string for the module root. Entities compare by identity.
    """
    name: str
    parent: str = ""
    location: Location | None = None
    status: Status = Status.ACTIVE
    read_only: bool = False
    is_default: bool = False
    is_list: bool = False
    required: bool = False
    wrapper: bool = False
    since: str = ""
    deprecated_since: str = ""
    deprecation_note: str = ""
    doc: "Doc | None" = None

    kind: ClassVar[str] = "entity"

    @property
    def qualified_name(self) -> str:
        if self.parent:
            return f"{self.parent}::{self.name}"
        return self.name

    def set_deprecated(self, since: str = "", note: str = "") -> None:
        self.status = Status.DEPRECATED
        self.deprecated_since = since
        self.deprecation_note = note

    def to_dict(self) -> dict[str, Any]:
        """Build a JSON-ready mapping of this entity."""
        result: dict[str, Any] = {
            "kind": self.kind,
            "name": self.name,
            "qualified_name": self.qualified_name,
            "status": self.status.value,
        }
        if self.location is not None:
            result["location"] = str(self.location)
        for flag in ("read_only", "is_default", "is_list", "required", "wrapper"):
            if getattr(self, flag):
                result[flag] = True
        for text in ("since", "deprecated_since", "deprecation_note"):
            if getattr(self, text):
                result[text] = getattr(self, text)
        if self.doc is not None:
            if self.doc.brief:
                result["brief"] = self.doc.brief
            if self.doc.body:
                result["body"] = self.doc.body
        return result


@dataclass(eq=False)
class TypeEntity(Entity):
    """A QML component type."""
    title: str = ""
    base_name: str = ""
    abstract: bool = False
    imports: list[ImportRecord] = field(default_factory=list)

    kind: ClassVar[str] = "type"

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.title:
            result["title"] = self.title
        if self.base_name:
            result["inherits"] = self.base_name
        if self.abstract:
            result["abstract"] = True
        if self.imports:
            result["imports"] = [
                {"name": rec.name, "version": rec.version, "uri": rec.uri, "alias": rec.alias}
                for rec in self.imports
            ]
        return result


@dataclass(eq=False)
class PropertyEntity(Entity):
    """A QML property, possibly attached."""
    data_type: str = ""
    attached: bool = False
    default_value: str = ""
    enum_name: str = ""

    kind: ClassVar[str] = "property"

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["type"] = self.data_type
        if self.attached:
            result["attached"] = True
        if self.default_value:
            result["default_value"] = self.default_value
        if self.enum_name:
            result["enum"] = self.enum_name
        return result


@dataclass(eq=False)
class FunctionEntity(Entity):
    """A QML method or signal."""
    metaness: FunctionKind = FunctionKind.METHOD
    return_type: str = ""
    parameters: Parameters = field(default_factory=Parameters)

    kind: ClassVar[str] = "function"

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["kind"] = self.metaness.value
        if self.return_type:
            result["return_type"] = self.return_type
        result["parameters"] = [
            {"type": p.type, "name": p.name, "default": p.default} for p in self.parameters
        ]
        return result
