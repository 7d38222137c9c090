from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable


def _render(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _append(params: Dict[str, str], key: str, name: str) -> None:
    current = params.get(key)
    params[key] = f"{current},{name}" if current else name


@dataclass
class Field:
    """A selectable attribute of a resource.

    Fields:
        name: Attribute name as the API knows it.
        is_included: Listed in the ``fields`` parameter (explicit selection).
        is_expanded: Listed in the ``expand`` parameter (embed the related resource).
    """
    name: str
    is_included: bool = True
    is_expanded: bool = False

    def contribute(self, params: Dict[str, str]) -> Dict[str, str]:
        """Return a copy of ``params`` with this field's selection applied."""
        out = dict(params)
        if self.is_included:
            _append(out, "fields", self.name)
        if self.is_expanded:
            _append(out, "expand", self.name)
        return out


@dataclass(frozen=True)
class Filter:
    """A comparison applied to a field.

    Fields:
        value: Rendered query value.
        operator: Lookup suffix (``gt``, ``in``, ...); empty means equality.
    """
    value: str
    operator: str = ""

    def key_for(self, field_name: str) -> str:
        if self.operator:
            return f"{field_name}__{self.operator}"
        return field_name

    @classmethod
    def equals(cls, value: object) -> "Filter":
        return cls(value=_render(value))

    @classmethod
    def greater_than(cls, value: object) -> "Filter":
        return cls(value=_render(value), operator="gt")

    @classmethod
    def greater_or_equal(cls, value: object) -> "Filter":
        return cls(value=_render(value), operator="gte")

    @classmethod
    def less_than(cls, value: object) -> "Filter":
        return cls(value=_render(value), operator="lt")

    @classmethod
    def less_or_equal(cls, value: object) -> "Filter":
        return cls(value=_render(value), operator="lte")

    @classmethod
    def is_in(cls, values: Iterable[object]) -> "Filter":
        return cls(value=",".join(_render(v) for v in values), operator="in")

    @classmethod
    def contains(cls, value: object) -> "Filter":
        return cls(value=_render(value), operator="contains")
