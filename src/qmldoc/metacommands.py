"""Application of metacommands to documentation entities."""

from typing import Iterable

from qmldoc.commands import (
    COMMAND_ABSTRACT,
    COMMAND_DEFAULT,
    COMMAND_DEPRECATED,
    COMMAND_INGROUP,
    COMMAND_INHERITS,
    COMMAND_INQMLMODULE,
    COMMAND_INTERNAL,
    COMMAND_OBSOLETE,
    COMMAND_PRELIMINARY,
    COMMAND_QMLABSTRACT,
    COMMAND_QMLDEFAULT,
    COMMAND_QMLENUMERATORSFROM,
    COMMAND_QMLPROPERTY,
    COMMAND_QMLREADONLY,
    COMMAND_QMLREQUIRED,
    COMMAND_SINCE,
    COMMAND_WRAPPER,
    QML_TOPICS,
)
from qmldoc.database import DocDatabase
from qmldoc.diagnostics import Diagnostics
from qmldoc.doc import Argument, Doc
from qmldoc.models import Entity, PropertyEntity, Status, TypeEntity


def _first(args: list[Argument]) -> Argument:
    return args[0] if args else Argument("")


class MetacommandProcessor:
    """Interprets the metacommands of a parsed comment.

    Each metacommand is applied independently; a misapplied one produces a
    warning and leaves the entity unchanged.
    """

    def __init__(self, database: DocDatabase, diagnostics: Diagnostics, topics: Iterable[str] = QML_TOPICS):
        self.database = database
        self.diagnostics = diagnostics
        self.topics = frozenset(topics)

    def apply(self, entity: Entity, doc: Doc) -> None:
        for command in doc.metacommands_used():
            if command in self.topics:
                continue
            self._apply_command(command, doc.metacommand_args(command), entity, doc)

    def _apply_command(self, command: str, args: list[Argument], entity: Entity, doc: Doc) -> None:
        location = doc.location

        if command in (COMMAND_QMLABSTRACT, COMMAND_ABSTRACT):
            if isinstance(entity, TypeEntity):
                entity.abstract = True
        elif command == COMMAND_DEPRECATED:
            argument = _first(args)
            entity.set_deprecated(since=argument.bracketed, note=argument.value)
        elif command == COMMAND_INQMLMODULE:
            self.database.add_to_module(_first(args).value, entity)
        elif command == COMMAND_INHERITS:
            base = _first(args).value
            if entity.name == base:
                self.diagnostics.warning(location, f"{base} tries to inherit itself")
            elif isinstance(entity, TypeEntity):
                entity.base_name = base
        elif command == COMMAND_DEFAULT:
            if not isinstance(entity, PropertyEntity):
                self.diagnostics.warning(
                    location, f"Ignored '\\{command}', applies only to '\\{COMMAND_QMLPROPERTY}'"
                )
            elif not args or not args[0].value:
                self.diagnostics.warning(
                    location,
                    f"Expected an argument for '\\{command}' (maybe you meant '\\{COMMAND_QMLDEFAULT}'?)",
                )
            else:
                entity.default_value = args[0].value
        elif command == COMMAND_QMLDEFAULT:
            entity.is_default = True
        elif command == COMMAND_QMLENUMERATORSFROM:
            argument = _first(args)
            if not isinstance(entity, PropertyEntity):
                self.diagnostics.warning(
                    location, f"Ignored '\\{command}', applies only to '\\{COMMAND_QMLPROPERTY}'"
                )
            else:
                record = self.database.find_enum(argument.value, argument.bracketed)
                if record is None:
                    self.diagnostics.warning(
                        location,
                        f"Failed to find C++ enumeration '{argument.value}' passed to \\{command}",
                        "Use \\value commands instead",
                    )
                else:
                    entity.enum_name = record.qualified_name
        elif command == COMMAND_QMLREADONLY:
            entity.read_only = True
        elif command == COMMAND_QMLREQUIRED:
            if isinstance(entity, PropertyEntity):
                entity.required = True
        elif command == COMMAND_INGROUP and args:
            for argument in args:
                self.database.add_to_group(argument.value, entity)
        elif command == COMMAND_INTERNAL:
            entity.status = Status.INTERNAL
        elif command == COMMAND_OBSOLETE:
            entity.status = Status.DEPRECATED
        elif command == COMMAND_PRELIMINARY:
            entity.status = Status.PRELIMINARY
        elif command == COMMAND_SINCE:
            entity.since = _first(args).value
        elif command == COMMAND_WRAPPER:
            entity.wrapper = True
        else:
            self.diagnostics.warning(location, f"The \\{command} command is ignored in QML files")
