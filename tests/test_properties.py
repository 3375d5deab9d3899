import pytest

from annotool.properties import LabelProperty, PropertyDatabase, SharedPropertyDefinition


def test_definition_round_trip():
    definition = SharedPropertyDefinition("w", a=2.5, b=-4.0)
    for value in (0.0, 1.5, -7.25, 100.0):
        assert definition.from_database_value(definition.to_database_value(value)) == pytest.approx(value)


def test_identity_detection():
    assert SharedPropertyDefinition("x").is_identity()
    assert not SharedPropertyDefinition("x", a=2.0).is_identity()
    assert not SharedPropertyDefinition("x", b=1.0).is_identity()


def test_identity_passes_values_through():
    definition = SharedPropertyDefinition("x")
    assert definition.to_database_value(3.5) == 3.5
    assert definition.from_database_value(3.5) == 3.5


def test_instance_is_singleton():
    before = PropertyDatabase.instance().state_index
    PropertyDatabase.instance().modify()
    assert PropertyDatabase.instance().state_index == before + 1


def test_current_value_default_when_missing():
    db = PropertyDatabase()
    assert db.current_value("missing", 4.0) == 4.0


def test_shared_value_created_once():
    db = PropertyDatabase()
    first = db.shared_value("n", 3.0, False)
    second = db.shared_value("n", 9.0, False)
    assert first is second
    assert second.value == 3.0
    assert db.current_value("n", 0.0) == 3.0


def test_shared_value_injection():
    db = PropertyDatabase()
    shared = db.shared_value("n", 3.0, False)
    shared.iparam = 2
    before = db.state_index
    db.shared_value("n", 5.0, True)
    assert shared.value == 5.0
    assert shared.iparam == 0
    assert shared.update_counter == 1
    assert db.state_index == before + 1


def test_modify_and_clear():
    db = PropertyDatabase()
    db.shared_value("n", 3.0, False)
    db.modify()
    db.modify()
    assert db.state_index == 2
    db.clear()
    assert db.current_value("n", -1.0) == -1.0


def test_unconnected_property():
    prop = LabelProperty()
    prop.set(2.0, 1)
    assert prop.get() == 2.0
    assert not prop.is_shared
    assert prop.iparam == 0
    assert prop.pull_update() == 0


def test_connected_properties_share_value():
    db = PropertyDatabase()
    definition = SharedPropertyDefinition("size")
    p1, p2 = LabelProperty(), LabelProperty()
    p1.set(4.0)
    p1.connect(definition, False, db)
    p2.connect(definition, False, db)
    assert p2.get() == 4.0
    p2.set(7.0, 2)
    assert p1.get() == 7.0
    assert p1.iparam == 2
    assert p1.pull_update() == 1
    assert p1.pull_update() == 0
    assert p2.pull_update() == 0


def test_linear_transform_stored_in_database():
    db = PropertyDatabase()
    definition = SharedPropertyDefinition("s", a=2.0, b=1.0)
    prop = LabelProperty()
    prop.set(3.0)
    prop.connect(definition, False, db)
    assert db.current_value("s", 0.0) == definition.to_database_value(3.0)
    assert prop.get() == pytest.approx(3.0)


def test_inject_overrides_existing():
    db = PropertyDatabase()
    definition = SharedPropertyDefinition("s")
    p1, p2 = LabelProperty(1.0), LabelProperty(5.0)
    p1.connect(definition, False, db)
    p2.connect(definition, True, db)
    assert p1.get() == 5.0


def test_set_modifies_database_state():
    db = PropertyDatabase()
    prop = LabelProperty()
    prop.connect(SharedPropertyDefinition("s"), False, db)
    before = db.state_index
    prop.set(8.0)
    assert db.state_index == before + 1


def test_disconnect_stops_sharing():
    db = PropertyDatabase()
    definition = SharedPropertyDefinition("s")
    prop = LabelProperty(2.0)
    prop.connect(definition, False, db)
    prop.disconnect()
    assert not prop.is_shared
    assert prop.definition is None
    prop.set(9.0)
    assert db.current_value("s", 0.0) == 2.0
    assert prop.get() == 9.0


def test_connect_with_none_unbinds():
    prop = LabelProperty()
    prop.connect(None, False, PropertyDatabase())
    assert not prop.is_shared