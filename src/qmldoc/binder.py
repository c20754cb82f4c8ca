"""Binding of QML declarations to documentation entities.

``DeclarationBinder`` walks the declaration tree of one file in document
order. For every documentable declaration it creates or finds the matching
entity, looks up the documentation comment above it and applies the
comment's topics and metacommands.

The walk tracks the object nesting level: the public API of a component is
declared at level 1, directly inside its top-level object definition.
"""

import logging
from pathlib import Path
from typing import Iterable

from qmldoc.comments import CommentLocator
from qmldoc.commands import COMMAND_INQMLMODULE, COMMAND_QMLSIGNAL, QML_METACOMMANDS, QML_TOPICS
from qmldoc.database import DocDatabase
from qmldoc.declarations import (
    ArrayBinding,
    Declaration,
    FunctionDeclaration,
    Import,
    MemberKind,
    ObjectBinding,
    ObjectDefinition,
    Program,
    PublicMember,
    ScriptBinding,
    SourceRange,
    qualified_id,
)
from qmldoc.diagnostics import Diagnostics
from qmldoc.doc import PropertyArguments, parse_doc
from qmldoc.metacommands import MetacommandProcessor
from qmldoc.models import (
    CommentSpan,
    Entity,
    FunctionEntity,
    FunctionKind,
    ImportRecord,
    Location,
    PropertyEntity,
    TypeEntity,
)
from qmldoc.signature import parse_signature

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 1000


class DeclarationBinder:
    """Single forward pass over one file's declaration tree.

    All state (used comments, the end-offset cursor, pending imports and
    the nesting level) is private to one file.
    """

    def __init__(
        self,
        file_path: str | Path,
        source: str,
        comments: list[CommentSpan],
        database: DocDatabase,
        diagnostics: Diagnostics | None = None,
        commands: Iterable[str] = QML_METACOMMANDS,
        topics: Iterable[str] = QML_TOPICS,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        self.file_path = str(file_path)
        # Component name is the file name up to its first dot
        self.name = Path(file_path).name.split(".")[0]
        self.source = source
        self.database = database
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.commands = frozenset(commands)
        self.topics = frozenset(topics)
        self.max_depth = max_depth

        self.locator = CommentLocator(source, comments)
        self.processor = MetacommandProcessor(database, self.diagnostics, self.topics)
        self.nesting_level = 0
        self.current: TypeEntity | None = None  # None while at the module root
        self.import_list: list[ImportRecord] = []
        self.touched: list[Entity] = []
        self._has_recursion_depth_error = False

    @property
    def has_error(self) -> bool:
        """True once the nesting depth limit was exceeded."""
        return self._has_recursion_depth_error

    def bind(self, program: Program) -> bool:
        """Walk the whole tree.

        Returns:
            False if the walk was abandoned because of the depth limit.
        """
        for node in [*program.imports, *program.members]:
            self._accept(node, 1)
        return not self.has_error

    def _accept(self, root: Declaration, depth: int) -> None:
        # Work stack of (node, depth, children already pushed)
        stack = [(root, depth, False)]
        while stack:
            if self._has_recursion_depth_error:
                return
            node, depth, entered = stack.pop()
            if entered:
                self._end_visit(node)
                continue
            if depth > self.max_depth:
                self._throw_recursion_depth_error(node)
                return

            stack.append((node, depth, True))
            if self._visit(node):
                stack.extend((child, depth + 1, False) for child in reversed(self._children(node)))

    def _throw_recursion_depth_error(self, node: Declaration) -> None:
        self._has_recursion_depth_error = True
        logger.error(
            f"{self.file_path}: maximum nesting depth {self.max_depth} exceeded "
            f"at offset {node.span.begin}, abandoning file"
        )

    @staticmethod
    def _children(node: Declaration) -> list[Declaration]:
        if isinstance(node, (ObjectDefinition, ObjectBinding, ArrayBinding, PublicMember)):
            return node.members
        return []

    def _visit(self, node: Declaration) -> bool:
        if isinstance(node, ObjectDefinition):
            return self._visit_object_definition(node)
        if isinstance(node, ObjectBinding):
            self.nesting_level += 1
            return True
        if isinstance(node, ArrayBinding):
            return True
        if isinstance(node, Import):
            return self._visit_import(node)
        if isinstance(node, PublicMember):
            return self._visit_public_member(node)
        if isinstance(node, FunctionDeclaration):
            return self._visit_function_declaration(node)
        if isinstance(node, ScriptBinding):
            return True
        raise TypeError(f"Unsupported declaration node: {type(node).__name__}")

    def _end_visit(self, node: Declaration) -> None:
        if isinstance(node, ObjectDefinition):
            if self.nesting_level > 0:
                self.nesting_level -= 1
            self.locator.advance(node.span.end)
        elif isinstance(node, ObjectBinding):
            if self.nesting_level > 0:
                self.nesting_level -= 1
        elif isinstance(node, (Import, PublicMember, FunctionDeclaration, ScriptBinding)):
            self.locator.advance(node.span.end)

    def _touch(self, entity: Entity) -> None:
        if not any(existing is entity for existing in self.touched):
            self.touched.append(entity)

    def _create_type(self) -> TypeEntity:
        parent = self.current.qualified_name if self.current is not None else ""
        entity = TypeEntity(name=self.name, parent=parent)
        self.database.add(entity)
        self._touch(entity)
        return entity

    def _create_property(self, parent: str, name: str, data_type: str, attached: bool = False) -> PropertyEntity:
        entity = PropertyEntity(name=name, parent=parent, data_type=data_type, attached=attached)
        self.database.add(entity)
        self._touch(entity)
        return entity

    def apply_documentation(self, span: SourceRange, entity: Entity | None) -> Entity:
        """Find the comment above ``span`` and apply it to ``entity``.

        When ``entity`` is None a QML type is looked up by the module named
        in ``\\inqmlmodule`` and the file's component name, or constructed.

        Returns:
            The entity that was documented, found or constructed.
        """
        comment = self.locator.find_preceding(span.begin)

        if comment is None:
            if entity is None:
                entity = self._create_type()
            entity.location = Location(self.file_path, span.start_line)
            self._touch(entity)
            return entity

        location = Location(self.file_path, comment.start_line, comment.start_column)
        doc = parse_doc(self.locator.text(comment), location, self.commands, self.topics)

        if entity is None:
            args = doc.metacommand_args(COMMAND_INQMLMODULE)
            module = args[0].value if args else ""
            entity = self.database.find_qml_type(module, self.name)
            if entity is None:
                entity = self._create_type()
                entity.location = location
        if entity.location is None:
            entity.location = Location(self.file_path, span.start_line, span.start_column)

        parent = entity.parent
        entity.doc = doc
        self._touch(entity)
        documented = [entity]

        for topic in doc.topics:
            if topic.name.endswith("property"):
                arguments = PropertyArguments.parse(topic.args)
                if arguments is None:
                    logger.debug(f"Failed to parse QML property: {topic.name} {topic.args}")
                    continue
                if arguments.name == entity.name:
                    # The topic may override the declared data type
                    if isinstance(entity, PropertyEntity):
                        entity.data_type = arguments.type
                    continue

                attached = "attached" in topic.name
                other = self.database.find_property(parent, arguments.name, attached)
                if other is None:
                    other = self._create_property(parent, arguments.name, arguments.type, attached)
                other.is_list = arguments.is_list
                other.location = doc.location
                other.doc = doc
                other.read_only = entity.read_only and not attached
                if entity.is_default:
                    other.is_default = True
                self._touch(other)
                documented.append(other)
            elif topic.name.endswith("method") or topic.name == COMMAND_QMLSIGNAL:
                if isinstance(entity, FunctionEntity):
                    parse_signature(topic.args, entity, doc.location)

        for documented_entity in documented:
            self.processor.apply(documented_entity, doc)

        self.locator.mark_used(comment)
        return entity

    def _visit_object_definition(self, definition: ObjectDefinition) -> bool:
        type_name = qualified_id(definition.type_name)
        self.nesting_level += 1
        if self.current is None:
            component = self.apply_documentation(definition.span, None)
            if component.doc is not None and not component.doc.is_empty():
                component.base_name = type_name
            component.title = self.name
            component.imports = list(self.import_list)
            self.import_list.clear()
            self.current = component
        return True

    def _visit_import(self, node: Import) -> bool:
        name = self.source[node.file_name.begin:node.file_name.end]
        if name.startswith('"'):
            name = name[1:-1]
        version = ""
        if node.version is not None:
            version = self.source[node.version.begin:node.version.end]
        self.import_list.append(
            ImportRecord(name=name, version=version, uri=qualified_id(node.uri), alias=node.alias)
        )
        return True

    def _visit_public_member(self, member: PublicMember) -> bool:
        if self.nesting_level > 1:
            return True
        if not isinstance(self.current, TypeEntity):
            return True

        parent = self.current.qualified_name
        if member.kind is MemberKind.SIGNAL:
            signal = FunctionEntity(name=member.name, parent=parent, metaness=FunctionKind.SIGNAL)
            for parameter in member.parameters:
                if parameter.type and parameter.name:
                    signal.parameters.append(parameter.type, parameter.name)
            self.database.add(signal)
            self._touch(signal)
            self.apply_documentation(member.span, signal)
        else:
            prop = self.database.find_property(parent, member.name)
            if prop is None:
                prop = self._create_property(parent, member.name, qualified_id(member.member_type))
            prop.read_only = member.is_readonly
            if member.is_default:
                prop.is_default = True
            if member.is_required:
                prop.required = True
            prop.is_list = member.type_modifier == "list"
            self.apply_documentation(member.span, prop)
        return True

    def _visit_function_declaration(self, declaration: FunctionDeclaration) -> bool:
        if self.nesting_level > 1 or not isinstance(self.current, TypeEntity):
            return True

        method = FunctionEntity(
            name=declaration.name,
            parent=self.current.qualified_name,
            metaness=FunctionKind.METHOD,
        )
        for formal in declaration.formals:
            default = ""
            if formal.initializer is not None:
                default = self.source[formal.initializer.begin:formal.initializer.end]
            method.parameters.append("", formal.name, default)
        self.database.add(method)
        self._touch(method)
        self.apply_documentation(declaration.span, method)
        return True
