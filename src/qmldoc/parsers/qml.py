"""Outline reader for QML files.

Parses with the tree-sitter QML grammar and keeps only the declarations
documentation extraction cares about: imports, object definitions and
bindings, custom properties and signals, and functions.
"""

from bisect import bisect_right

import tree_sitter_qmljs
from tree_sitter import Language, Parser

from qmldoc.declarations import (
    ArrayBinding,
    Declaration,
    FormalParameter,
    FunctionDeclaration,
    Import,
    MemberKind,
    ObjectBinding,
    ObjectDefinition,
    Program,
    PublicMember,
    ScriptBinding,
    SignalParameter,
    SourceRange,
)
from qmldoc.models import CommentSpan
from qmldoc.parsers.base import BaseParser, Outline

_OBJECT_TYPES = ("ui_object_definition", "ui_annotated_object", "ui_annotated_object_member")
_FORMAL_TYPES = ("required_parameter", "optional_parameter", "identifier", "assignment_pattern", "rest_pattern")


class QmlSyntaxError(ValueError):
    """Raised when a QML file cannot be outlined."""


class QmlOutlineParser(BaseParser):
    """Declaration reader for QML source code using tree-sitter."""

    def __init__(self):
        self.language = Language(tree_sitter_qmljs.language())
        self.parser = Parser(self.language)

    def parse(self, source_code: str) -> Outline:
        """Read the declarations and comments of a QML file.

        Args:
            source_code: QML source code to parse

        Returns:
            Outline with the declaration tree and the comments in file order

        Raises:
            QmlSyntaxError: If the file does not parse cleanly
        """
        tree = self.parser.parse(bytes(source_code, "utf8"))
        reader = _TreeReader(source_code)
        if tree.root_node.has_error:
            raise QmlSyntaxError(reader.describe_error(tree.root_node))
        return Outline(
            program=reader.read_program(tree.root_node),
            comments=reader.read_comments(tree.root_node),
        )


class _TreeReader:
    """Converts tree-sitter nodes into declarations.

    tree-sitter reports byte offsets into the UTF-8 encoding; declarations
    and comment spans carry character offsets into the source string.
    """

    def __init__(self, source: str):
        self.source = source
        self.line_starts = [0] + [index + 1 for index, char in enumerate(source) if char == "\n"]
        self.char_at_byte = None
        if not source.isascii():
            self.char_at_byte = []
            for index, char in enumerate(source):
                self.char_at_byte.extend([index] * len(char.encode("utf8")))
            self.char_at_byte.append(len(source))

    # Positions

    def offset(self, byte_offset: int) -> int:
        if self.char_at_byte is None:
            return byte_offset
        return self.char_at_byte[byte_offset]

    def position(self, offset: int) -> tuple[int, int]:
        line = bisect_right(self.line_starts, offset)
        return line, offset - self.line_starts[line - 1] + 1

    def range_of(self, node) -> SourceRange:
        begin = self.offset(node.start_byte)
        line, column = self.position(begin)
        return SourceRange(begin, self.offset(node.end_byte), line, column)

    def text(self, node) -> str:
        return self.source[self.offset(node.start_byte):self.offset(node.end_byte)]

    def qualified_id(self, node) -> list[str]:
        return [part.strip() for part in self.text(node).split(".")]

    # Errors

    def describe_error(self, root) -> str:
        """Describe the first error or missing node in file order."""
        stack = [root]
        while stack:
            node = stack.pop()
            if node.is_missing or node.is_error:
                begin = self.offset(node.start_byte)
                if node.is_missing:
                    message = f"expected '{node.type}'"
                else:
                    message = "unexpected input"
                if begin >= len(self.source.rstrip()):
                    return f"{message} at end of file"
                line, column = self.position(begin)
                return f"{message} at line {line}, column {column}"
            stack.extend(child for child in reversed(node.children) if child.has_error)
        return "syntax error"

    # Comments

    def read_comments(self, root) -> list[CommentSpan]:
        """Collect every comment, excluding its delimiters, in file order."""
        comments = []
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == "comment":
                comments.append(self.comment_span(node))
            else:
                stack.extend(reversed(node.children))
        return comments

    def comment_span(self, node) -> CommentSpan:
        begin = self.offset(node.start_byte)
        end = self.offset(node.end_byte)
        text = self.source[begin:end]
        if text.startswith("/*") and text.endswith("*/") and len(text) >= 4:
            end -= 2
        line, column = self.position(begin + 2)
        return CommentSpan(begin + 2, end, line, column)

    # Declarations

    def read_program(self, root) -> Program:
        """Convert the parse tree into a declaration tree.

        Nested objects are converted with an explicit work stack, so deeply
        nested files do not exhaust the interpreter's recursion limit.
        """
        program = Program()
        pending = []
        for child in root.named_children:
            if child.type == "ui_import":
                program.imports.append(self.read_import(child))
            elif child.type in _OBJECT_TYPES:
                pending.append((child, program.members))

        stack = list(reversed(pending))
        while stack:
            node, members = stack.pop()
            declaration, nested = self.read_member(node)
            if declaration is None:
                continue
            members.append(declaration)
            stack.extend(reversed(nested))
        return program

    def read_import(self, node) -> Import:
        source = node.child_by_field_name("source")
        version = node.child_by_field_name("version")
        alias = node.child_by_field_name("alias")
        return Import(
            span=self.range_of(node),
            file_name=self.range_of(source),
            version=self.range_of(version) if version is not None else None,
            uri=[] if source.type == "string" else self.qualified_id(source),
            alias=self.text(alias) if alias is not None else "",
        )

    def read_member(self, node) -> tuple[Declaration | None, list]:
        """Convert one object member.

        Returns the declaration, or None for members documentation ignores,
        and the (node, members) pairs still to be converted into it.
        """
        kind = node.type
        if kind in ("ui_annotated_object", "ui_annotated_object_member"):
            return self.read_member(node.child_by_field_name("definition"))
        if kind == "ui_inline_component":
            return self.read_member(node.child_by_field_name("component"))
        if kind == "ui_object_definition":
            declaration = ObjectDefinition(
                span=self.range_of(node),
                type_name=self.qualified_id(node.child_by_field_name("type_name")),
            )
            return declaration, self.object_members(node, declaration.members)
        if kind == "ui_object_definition_binding":
            declaration = ObjectBinding(
                span=self.range_of(node),
                name=self.qualified_id(node.child_by_field_name("name")),
                type_name=self.qualified_id(node.child_by_field_name("type_name")),
                on_syntax=True,
            )
            return declaration, self.object_members(node, declaration.members)
        if kind == "ui_binding":
            return self.read_binding(node)
        if kind == "ui_property":
            return self.read_property(node)
        if kind == "ui_signal":
            return self.read_signal(node), []
        if kind == "function_declaration":
            return self.read_function(node), []
        # enum declarations, `required name`, comments
        return None, []

    def object_members(self, node, members: list) -> list:
        initializer = node.child_by_field_name("initializer")
        return [(child, members) for child in initializer.named_children if child.type != "comment"]

    def read_binding(self, node) -> tuple[Declaration, list]:
        name = self.qualified_id(node.child_by_field_name("name"))
        value = node.child_by_field_name("value")
        if value.type == "ui_object_definition":
            declaration = ObjectBinding(
                span=self.range_of(node),
                name=name,
                type_name=self.qualified_id(value.child_by_field_name("type_name")),
            )
            return declaration, self.object_members(value, declaration.members)
        if value.type == "ui_object_array":
            declaration = ArrayBinding(span=self.range_of(node), name=name)
            return declaration, [
                (child, declaration.members) for child in value.named_children if child.type in _OBJECT_TYPES
            ]
        return ScriptBinding(span=self.range_of(node), name=name), []

    def read_type(self, node) -> tuple[list[str], str]:
        """Return (type parts, type modifier) for a property type."""
        if node.type == "ui_list_property_type":
            return self.qualified_id(node.named_children[0]), "list"
        return self.qualified_id(node), ""

    def read_property(self, node) -> tuple[PublicMember, list]:
        modifiers = {self.text(child) for child in node.children if child.type == "ui_property_modifier"}
        member_type, type_modifier = self.read_type(node.child_by_field_name("type"))
        declaration = PublicMember(
            span=self.range_of(node),
            kind=MemberKind.PROPERTY,
            name=self.text(node.child_by_field_name("name")),
            member_type=member_type,
            type_modifier=type_modifier,
            is_readonly="readonly" in modifiers,
            is_default="default" in modifiers,
            is_required="required" in modifiers,
        )
        value = node.child_by_field_name("value")
        if value is not None and value.type in _OBJECT_TYPES:
            return declaration, [(value, declaration.members)]
        return declaration, []

    def read_signal(self, node) -> PublicMember:
        parameters = []
        parameter_list = node.child_by_field_name("parameters")
        if parameter_list is not None:
            for child in parameter_list.named_children:
                if child.type == "ui_signal_parameter":
                    parameters.append(SignalParameter(
                        type=self.text(child.child_by_field_name("type")),
                        name=self.text(child.child_by_field_name("name")),
                    ))
        return PublicMember(
            span=self.range_of(node),
            kind=MemberKind.SIGNAL,
            name=self.text(node.child_by_field_name("name")),
            parameters=parameters,
        )

    def read_function(self, node) -> FunctionDeclaration:
        formals = []
        for child in node.child_by_field_name("parameters").named_children:
            if child.type in _FORMAL_TYPES:
                formals.append(self.read_formal(child))
        return FunctionDeclaration(
            span=self.range_of(node),
            name=self.text(node.child_by_field_name("name")),
            formals=formals,
        )

    def read_formal(self, node) -> FormalParameter:
        if node.type == "assignment_pattern":
            pattern, value = node.child_by_field_name("left"), node.child_by_field_name("right")
        elif node.type in ("identifier", "rest_pattern"):
            pattern, value = node, None
        else:
            pattern, value = node.child_by_field_name("pattern"), node.child_by_field_name("value")
        if pattern.type == "rest_pattern":
            pattern = pattern.named_children[0]
        return FormalParameter(
            name=self.text(pattern),
            initializer=self.range_of(value) if value is not None else None,
        )
