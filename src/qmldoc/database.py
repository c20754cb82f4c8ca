"""In-memory documentation database.

Owns every entity created during a documentation run and answers lookups
by name. Components receive the database as an explicit handle.
"""

import logging
from dataclasses import dataclass, field

from qmldoc.models import Entity, PropertyEntity, TypeEntity

logger = logging.getLogger(__name__)


@dataclass
class EnumRecord:
    """A C++ enumeration that QML properties can take their values from."""
    name: str
    qualifier: str = ""
    values: list[str] = field(default_factory=list)

    @property
    def qualified_name(self) -> str:
        if self.qualifier:
            return f"{self.qualifier}::{self.name}"
        return self.name


class DocDatabase:
    """Entities plus the module, group and enumeration registries."""

    def __init__(self):
        self._entities: list[Entity] = []
        self._modules: dict[str, list[Entity]] = {}
        self._groups: dict[str, list[Entity]] = {}
        self._enums: dict[str, EnumRecord] = {}

    def add(self, entity: Entity) -> Entity:
        """Take ownership of a newly created entity."""
        if not any(existing is entity for existing in self._entities):
            self._entities.append(entity)
        return entity

    def entities(self) -> list[Entity]:
        return list(self._entities)

    def children(self, parent: str) -> list[Entity]:
        """Entities whose parent has the qualified name ``parent``."""
        return [entity for entity in self._entities if entity.parent == parent]

    def find_qml_type(self, module: str, name: str) -> TypeEntity | None:
        """Find a QML type by name, restricted to ``module`` when one is given."""
        for entity in self._entities:
            if not isinstance(entity, TypeEntity) or entity.name != name:
                continue
            if module and entity not in self._modules.get(module, []):
                continue
            return entity
        return None

    def find_property(self, parent: str, name: str, attached: bool = False) -> PropertyEntity | None:
        for entity in self.children(parent):
            if isinstance(entity, PropertyEntity) and entity.name == name and entity.attached == attached:
                return entity
        return None

    def add_to_module(self, module: str, entity: Entity) -> None:
        members = self._modules.setdefault(module, [])
        if entity not in members:
            members.append(entity)

    def module_members(self, module: str) -> list[Entity]:
        return list(self._modules.get(module, []))

    def modules_of(self, entity: Entity) -> list[str]:
        return [module for module, members in self._modules.items() if entity in members]

    def add_to_group(self, group: str, entity: Entity) -> None:
        members = self._groups.setdefault(group, [])
        if entity not in members:
            members.append(entity)

    def group_members(self, group: str) -> list[Entity]:
        return list(self._groups.get(group, []))

    def groups_of(self, entity: Entity) -> list[str]:
        return [group for group, members in self._groups.items() if entity in members]

    def register_enum(self, name: str, values: list[str] | None = None, qualifier: str = "") -> EnumRecord:
        record = EnumRecord(name=name, qualifier=qualifier, values=list(values or []))
        self._enums[record.qualified_name] = record
        logger.debug(f"Registered enumeration {record.qualified_name}")
        return record

    def find_enum(self, name: str, qualifier: str = "") -> EnumRecord | None:
        """Look up an enumeration, accepting ``Qualifier::Name`` in ``name`` too."""
        if qualifier:
            return self._enums.get(f"{qualifier}::{name}")
        record = self._enums.get(name)
        if record is not None:
            return record
        # Unqualified lookup falls back to a unique match on the bare name
        matches = [record for record in self._enums.values() if record.name == name]
        if len(matches) == 1:
            return matches[0]
        return None
