import enum
from typing import Dict, Any, Union
from collections.abc import Mapping
from dataclasses import fields, is_dataclass
from datetime import date, datetime, time

_SENTINEL = object()


def object_to_dict(obj: Any) -> Union[Dict[str, Any], Any]:
    """
    Best-effort conversion of obj to an ordered `dict` of its public fields.
    Anything that has no fields (primitives, lists, enums) is returned as is.
    """

    # Mappings keep their str keys, without callables or private names
    if isinstance(obj, Mapping):
        return {k: v for k, v in obj.items()
                if not callable(v) and (isinstance(k, str) and not k.startswith("_"))}

    # Dataclass instances keep field declaration order
    if is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: getattr(obj, f.name) for f in fields(obj)
                if not f.name.startswith("_")}

    # If it is generic object with attribute __dict__
    obj_dict: Dict[str, Any] | object = getattr(obj, "__dict__", _SENTINEL)
    if obj_dict is not _SENTINEL:
        clean: Dict[str, Any] = {}
        for key, val in obj_dict.items():
            if key.startswith("_") or callable(val):
                continue
            clean[key] = val
        return clean

    # If class contains __slots__ only
    if hasattr(obj, "__slots__"):
        clean = {}
        slots = obj.__slots__
        if isinstance(slots, str):
            slots = (slots,)

        for slot in slots:
            if slot.startswith("_"):
                continue
            val = getattr(obj, slot, _SENTINEL)
            if val is not _SENTINEL and not callable(val):
                clean[slot] = val
        return clean

    # primitives, lists, tuples, enums, other types
    return obj


def to_xml_text(value: Any) -> str:
    """Converts a scalar to its XML Schema lexical form"""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, enum.Enum):
        return to_xml_text(value.value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)
