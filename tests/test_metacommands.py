"""Tests for metacommands module."""

import pytest

from qmldoc.commands import QML_METACOMMANDS, QML_TOPICS
from qmldoc.database import DocDatabase
from qmldoc.diagnostics import Diagnostics
from qmldoc.doc import parse_doc
from qmldoc.metacommands import MetacommandProcessor
from qmldoc.models import FunctionEntity, Location, PropertyEntity, Status, TypeEntity


@pytest.fixture
def database():
    return DocDatabase()


@pytest.fixture
def diagnostics():
    return Diagnostics()


@pytest.fixture
def processor(database, diagnostics):
    return MetacommandProcessor(database, diagnostics)


def doc_of(text):
    return parse_doc(text, Location("Button.qml", 5, 1), QML_METACOMMANDS, QML_TOPICS)


class TestTypeCommands:
    """Tests for commands that apply to QML types."""

    def test_abstract(self, processor):
        component = TypeEntity(name="Control")
        processor.apply(component, doc_of("\\qmlabstract"))

        assert component.abstract is True

    def test_abstract_ignored_on_property(self, processor, diagnostics):
        prop = PropertyEntity(name="x")
        processor.apply(prop, doc_of("\\abstract"))

        assert len(diagnostics) == 0

    def test_inherits(self, processor):
        component = TypeEntity(name="Button")
        processor.apply(component, doc_of("\\inherits AbstractButton"))

        assert component.base_name == "AbstractButton"

    def test_self_inheritance_is_rejected(self, processor, diagnostics):
        component = TypeEntity(name="Button")
        processor.apply(component, doc_of("\\inherits Button"))

        assert component.base_name == ""
        assert diagnostics.messages() == ["Button tries to inherit itself"]
        assert diagnostics.items[0].location == Location("Button.qml", 5, 1)

    def test_inqmlmodule(self, processor, database):
        component = TypeEntity(name="Button")
        processor.apply(component, doc_of("\\inqmlmodule QtQuick.Controls"))

        assert database.module_members("QtQuick.Controls") == [component]

    def test_wrapper(self, processor):
        component = TypeEntity(name="Button")
        processor.apply(component, doc_of("\\wrapper"))

        assert component.wrapper is True


class TestPropertyCommands:
    """Tests for commands that apply to QML properties."""

    def test_default_value(self, processor):
        prop = PropertyEntity(name="count")
        processor.apply(prop, doc_of("\\default 42"))

        assert prop.default_value == "42"

    def test_default_on_type_warns(self, processor, diagnostics):
        component = TypeEntity(name="Button")
        processor.apply(component, doc_of("\\default 42"))

        assert diagnostics.messages() == ["Ignored '\\default', applies only to '\\qmlproperty'"]

    def test_default_without_argument_warns(self, processor, diagnostics):
        prop = PropertyEntity(name="count")
        processor.apply(prop, doc_of("\\default\n"))

        assert prop.default_value == ""
        assert diagnostics.messages() == [
            "Expected an argument for '\\default' (maybe you meant '\\qmldefault'?)"
        ]

    def test_qmldefault(self, processor):
        prop = PropertyEntity(name="data")
        processor.apply(prop, doc_of("\\qmldefault"))

        assert prop.is_default is True

    def test_enumerators_from(self, processor, database):
        database.register_enum("Alignment", ["AlignLeft"], qualifier="Qt")
        prop = PropertyEntity(name="alignment")
        processor.apply(prop, doc_of("\\qmlenumeratorsfrom [Qt] Alignment"))

        assert prop.enum_name == "Qt::Alignment"

    def test_enumerators_from_unknown_enum_warns(self, processor, diagnostics):
        prop = PropertyEntity(name="alignment")
        processor.apply(prop, doc_of("\\qmlenumeratorsfrom Alignment"))

        assert prop.enum_name == ""
        assert diagnostics.messages() == [
            "Failed to find C++ enumeration 'Alignment' passed to \\qmlenumeratorsfrom"
        ]
        assert diagnostics.items[0].details == "Use \\value commands instead"

    def test_enumerators_from_on_method_warns(self, processor, diagnostics):
        method = FunctionEntity(name="open")
        processor.apply(method, doc_of("\\qmlenumeratorsfrom Alignment"))

        assert len(diagnostics) == 1

    def test_required(self, processor):
        prop = PropertyEntity(name="model")
        processor.apply(prop, doc_of("\\required"))

        assert prop.required is True

    def test_required_ignored_on_type(self, processor):
        component = TypeEntity(name="Button")
        processor.apply(component, doc_of("\\required"))

        assert component.required is False


class TestCommonCommands:
    """Tests for commands that apply to every entity."""

    def test_readonly(self, processor):
        prop = PropertyEntity(name="count")
        processor.apply(prop, doc_of("\\readonly"))

        assert prop.read_only is True

    def test_since(self, processor):
        method = FunctionEntity(name="open")
        processor.apply(method, doc_of("\\since 6.5"))

        assert method.since == "6.5"

    def test_deprecated(self, processor):
        prop = PropertyEntity(name="count")
        processor.apply(prop, doc_of("\\deprecated [6.2] Use size instead."))

        assert prop.status is Status.DEPRECATED
        assert prop.deprecated_since == "6.2"
        assert prop.deprecation_note == "Use size instead."

    def test_status_commands(self, processor):
        prop = PropertyEntity(name="count")
        processor.apply(prop, doc_of("\\internal"))
        assert prop.status is Status.INTERNAL

        processor.apply(prop, doc_of("\\obsolete"))
        assert prop.status is Status.DEPRECATED

        processor.apply(prop, doc_of("\\preliminary"))
        assert prop.status is Status.PRELIMINARY

    def test_last_status_wins(self, processor):
        prop = PropertyEntity(name="count")
        processor.apply(prop, doc_of("\\preliminary\n\\internal"))

        assert prop.status is Status.INTERNAL

    def test_ingroup(self, processor, database):
        component = TypeEntity(name="Button")
        processor.apply(component, doc_of("\\ingroup controls\n\\ingroup buttons"))

        assert database.groups_of(component) == ["controls", "buttons"]

    def test_unhandled_command_warns(self, processor, diagnostics):
        component = TypeEntity(name="Button")
        processor.apply(component, doc_of("\\reentrant"))

        assert diagnostics.messages() == ["The \\reentrant command is ignored in QML files"]

    def test_topics_are_not_applied(self, processor, diagnostics):
        prop = PropertyEntity(name="count")
        processor.apply(prop, doc_of("\\qmlproperty int Button::count"))

        assert len(diagnostics) == 0

    def test_misuse_does_not_stop_other_commands(self, processor, diagnostics):
        component = TypeEntity(name="Button")
        processor.apply(component, doc_of("\\inherits Button\n\\since 6.0\n\\default 1"))

        assert component.since == "6.0"
        assert len(diagnostics) == 2

    def test_reapplication_is_idempotent(self, processor, database):
        prop = PropertyEntity(name="count")
        doc = doc_of("\\readonly\n\\since 6.0\n\\default 3\n\\ingroup g\n\\inqmlmodule M")
        processor.apply(prop, doc)
        processor.apply(prop, doc)

        assert prop.read_only is True
        assert prop.since == "6.0"
        assert prop.default_value == "3"
        assert database.group_members("g") == [prop]
        assert database.module_members("M") == [prop]
