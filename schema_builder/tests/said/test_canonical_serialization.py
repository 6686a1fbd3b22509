import pytest

from schema_builder.app.said import UnserializableValue, serialize


def test_insertion_order_is_preserved_not_sorted():
    assert serialize({"b": 1, "a": 2}) == b'{"b":1,"a":2}'
    assert serialize({"a": 2, "b": 1}) == b'{"a":2,"b":1}'


def test_output_is_compact():
    document = {"$id": "x", "required": ["i", "dt"], "nested": {"k": True}}

    assert serialize(document) == (
        b'{"$id":"x","required":["i","dt"],"nested":{"k":true}}'
    )


def test_non_ascii_is_emitted_as_utf8():
    assert serialize({"title": "Café"}) == '{"title":"Café"}'.encode("utf-8")


def test_json_scalars_are_representable():
    document = {"n": None, "t": True, "f": False, "i": 3, "x": 1.5, "s": ""}

    assert serialize(document) == (
        b'{"n":null,"t":true,"f":false,"i":3,"x":1.5,"s":""}'
    )


def test_tuples_serialize_as_arrays():
    assert serialize({"a": ("x", "y")}) == b'{"a":["x","y"]}'


# ---------------------------------------------------------------------------
# Unrepresentable values
# ---------------------------------------------------------------------------

def test_unserializable_value_reports_field_path():
    document = {
        "properties": {
            "a": {"oneOf": [{"type": "string"}, {"properties": {"age": object()}}]}
        }
    }

    with pytest.raises(UnserializableValue) as exc_info:
        serialize(document)

    assert exc_info.value.field_path == "properties.a.oneOf[1].properties.age"
    assert exc_info.value.value_type == "object"
    assert "properties.a.oneOf[1].properties.age" in str(exc_info.value)


@pytest.mark.parametrize(
    "value",
    [float("nan"), float("inf"), {1, 2}, b"raw", object()],
)
def test_non_json_values_are_rejected(value):
    with pytest.raises(UnserializableValue) as exc_info:
        serialize({"field": value})

    assert exc_info.value.field_path == "field"


def test_non_string_keys_are_rejected():
    with pytest.raises(UnserializableValue) as exc_info:
        serialize({"outer": {1: "one"}})

    assert exc_info.value.field_path == "outer.1"
