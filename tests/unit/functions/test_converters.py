import enum
from dataclasses import dataclass
from datetime import date, datetime

from soap_http_client.utilities.functions.converters import object_to_dict, to_xml_text


class ObjWithDict:
    def __init__(self) -> None:
        self.visible = "value"
        self._private = "hidden"
        self.callable_attr = lambda: "ignore"


class ObjWithSlots:
    __slots__ = ("name", "_secret", "counter")

    def __init__(self) -> None:
        self.name = "slot"
        self._secret = "hidden"
        self.counter = 3


@dataclass
class Order:
    number: int
    _internal: str = "x"
    note: str | None = None


class Color(enum.Enum):
    RED = "red"


def test_object_to_dict_for_mapping() -> None:
    payload = {"valid": 1, "_private": 2}
    assert object_to_dict(payload) == {"valid": 1}


def test_object_to_dict_for_dataclass_keeps_field_order() -> None:
    assert list(object_to_dict(Order(number=5)).items()) == [("number", 5), ("note", None)]


def test_object_to_dict_for_object_with___dict__() -> None:
    obj = ObjWithDict()
    assert object_to_dict(obj) == {"visible": "value"}


def test_object_to_dict_for_object_with___slots__() -> None:
    obj = ObjWithSlots()
    assert object_to_dict(obj) == {"name": "slot", "counter": 3}


def test_object_to_dict_returns_primitives_unchanged() -> None:
    assert object_to_dict(5) == 5
    assert object_to_dict([1, 2]) == [1, 2]


def test_to_xml_text() -> None:
    assert to_xml_text(True) == "true"
    assert to_xml_text(False) == "false"
    assert to_xml_text(Color.RED) == "red"
    assert to_xml_text(date(2024, 1, 2)) == "2024-01-02"
    assert to_xml_text(datetime(2024, 1, 2, 3, 4, 5)) == "2024-01-02T03:04:05"
    assert to_xml_text(b"raw") == "raw"
    assert to_xml_text(1.5) == "1.5"
