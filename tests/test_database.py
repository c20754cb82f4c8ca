"""Tests for database module."""

from qmldoc.database import DocDatabase
from qmldoc.models import PropertyEntity, TypeEntity


class TestEntities:
    """Tests for entity ownership and lookup."""

    def test_add_returns_entity(self):
        database = DocDatabase()
        component = TypeEntity(name="Button")

        assert database.add(component) is component
        assert database.entities() == [component]

    def test_add_twice_keeps_one(self):
        database = DocDatabase()
        component = TypeEntity(name="Button")
        database.add(component)
        database.add(component)

        assert len(database.entities()) == 1

    def test_children(self):
        database = DocDatabase()
        component = database.add(TypeEntity(name="Button"))
        prop = database.add(PropertyEntity(name="text", parent="Button"))
        database.add(PropertyEntity(name="other", parent="Label"))

        assert database.children(component.qualified_name) == [prop]

    def test_find_qml_type(self):
        database = DocDatabase()
        component = database.add(TypeEntity(name="Button"))

        assert database.find_qml_type("", "Button") is component
        assert database.find_qml_type("", "Label") is None

    def test_find_qml_type_in_module(self):
        database = DocDatabase()
        component = database.add(TypeEntity(name="Button"))
        database.add_to_module("QtQuick.Controls", component)

        assert database.find_qml_type("QtQuick.Controls", "Button") is component
        assert database.find_qml_type("QtQuick", "Button") is None

    def test_find_property_by_attached_flag(self):
        database = DocDatabase()
        plain = database.add(PropertyEntity(name="pressed", parent="Button"))
        attached = database.add(PropertyEntity(name="pressed", parent="Button", attached=True))

        assert database.find_property("Button", "pressed") is plain
        assert database.find_property("Button", "pressed", attached=True) is attached
        assert database.find_property("Button", "missing") is None


class TestMembership:
    """Tests for module and group registries."""

    def test_group_membership_is_a_set(self):
        database = DocDatabase()
        component = database.add(TypeEntity(name="Button"))
        database.add_to_group("controls", component)
        database.add_to_group("controls", component)

        assert database.group_members("controls") == [component]
        assert database.groups_of(component) == ["controls"]

    def test_module_membership(self):
        database = DocDatabase()
        component = database.add(TypeEntity(name="Button"))
        database.add_to_module("QtQuick.Controls", component)

        assert database.module_members("QtQuick.Controls") == [component]
        assert database.modules_of(component) == ["QtQuick.Controls"]

    def test_unknown_group(self):
        assert DocDatabase().group_members("none") == []


class TestEnums:
    """Tests for enumeration registration."""

    def test_find_by_bare_name(self):
        database = DocDatabase()
        record = database.register_enum("Alignment", ["AlignLeft"], qualifier="Qt")

        assert database.find_enum("Alignment") is record
        assert database.find_enum("Alignment", "Qt") is record
        assert record.qualified_name == "Qt::Alignment"

    def test_find_by_qualified_name(self):
        database = DocDatabase()
        record = database.register_enum("Alignment", qualifier="Qt")

        assert database.find_enum("Qt::Alignment") is record

    def test_ambiguous_bare_name(self):
        database = DocDatabase()
        database.register_enum("Mode", qualifier="A")
        database.register_enum("Mode", qualifier="B")

        assert database.find_enum("Mode") is None

    def test_missing(self):
        assert DocDatabase().find_enum("Nothing") is None
