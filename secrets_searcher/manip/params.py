"""Named parameters addressing fields of nested dataclasses.

A parameter is a root dataclass instance plus a path of field names that
leads to a field on it or on a dataclass nested inside it. Field metadata
under a tag name may rename a field (``"name"``) or squash a nested
dataclass into its parent (``",squash"``), which drops it from path names.
"""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Callable, Iterator, Sequence
from typing import Any

StructFilter = Callable[[Any], bool]

_SQUASH_FLAG = "squash"
_INT_RE = re.compile(r"[+-]?[0-9]+")
_TRUE_STRINGS = frozenset({"1", "t", "T", "TRUE", "true", "True"})


def _is_struct(value: Any) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class Param:
    """A field reached from ``root`` by following ``path``."""

    def __init__(
        self,
        root: Any,
        path: str | Sequence[str],
        tag_name: str = "",
        struct_filter: StructFilter | None = None,
    ) -> None:
        if not _is_struct(root):
            raise TypeError("root must be a dataclass instance")
        names = tuple(path.split(".")) if isinstance(path, str) else tuple(path)
        if not names:
            raise ValueError("path must name at least one field")
        self.root = root
        self.path = names
        self.tag_name = tag_name
        self._fields = self._resolve(struct_filter)

    def _resolve(self, struct_filter: StructFilter | None) -> tuple[dataclasses.Field, ...]:
        not_found = LookupError(
            "field not found in struct or any of its descendents: " + ".".join(self.path)
        )
        resolved = []
        current = self.root
        for depth, name in enumerate(self.path):
            if depth > 0:
                if not _is_struct(current):
                    raise not_found
                if struct_filter is not None and not struct_filter(current):
                    raise not_found
            field = {f.name: f for f in dataclasses.fields(current)}.get(name)
            if field is None:
                raise not_found
            resolved.append(field)
            current = getattr(current, name)
        return tuple(resolved)

    @property
    def leaf_field(self) -> dataclasses.Field:
        """The dataclass field at the end of the path."""
        return self._fields[-1]

    def _parent(self) -> Any:
        current = self.root
        for name in self.path[:-1]:
            current = getattr(current, name)
        return current

    def leaf_value(self) -> Any:
        """Return the current value of the field at the end of the path."""
        return getattr(self._parent(), self.path[-1])

    def set_from_string(self, value: str) -> None:
        """Set the field from a string, converted to the field's current type.

        Booleans accept the usual true spellings and are False otherwise;
        integers must be a plain decimal number, else ValueError is raised.
        """
        if not isinstance(value, str):
            raise TypeError("currently only strings are supported")

        current = self.leaf_value()
        if isinstance(current, bool):
            converted: Any = value in _TRUE_STRINGS
        elif isinstance(current, str):
            converted = value
        elif isinstance(current, int):
            if not _INT_RE.fullmatch(value):
                raise ValueError(f"invalid integer: {value!r}")
            converted = int(value)
        else:
            raise TypeError(
                f"unsupported kind: {type(current).__name__}; value: {value}"
            )
        setattr(self._parent(), self.path[-1], converted)

    def _tag_data(self, field: dataclasses.Field) -> tuple[str, bool]:
        if not self.tag_name or self.tag_name not in field.metadata:
            return "", False
        parts = str(field.metadata[self.tag_name]).split(",")
        key_name = parts[0] if parts[0] not in ("", "-") else ""
        return key_name, _SQUASH_FLAG in parts[1:]

    def path_name_pieces(self) -> list[str]:
        """Return the names making up the path, leaving out squashed structs."""
        pieces = []
        last = len(self._fields) - 1
        for depth, field in enumerate(self._fields):
            key_name, squash = self._tag_data(field)
            if not squash or depth == last:
                pieces.append(key_name or field.name)
        return pieces

    def path_name(self) -> str:
        """Return the dotted name of the parameter."""
        return ".".join(self.path_name_pieces())

    def __str__(self) -> str:
        text = _format_value(self.leaf_value())
        name = self.path_name()
        return f"{name} ({text})" if text else name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.path_name()!r})"


def basic_param(root: Any, path: str | Sequence[str]) -> Param:
    """Build a parameter without tags or a struct filter."""
    return Param(root, path, "", None)


class StructParams:
    """Every public field of a dataclass and of the dataclasses nested in it."""

    def __init__(
        self,
        root: Any,
        tag_name: str = "",
        struct_filter: StructFilter | None = None,
    ) -> None:
        if not _is_struct(root):
            raise TypeError("root must be a dataclass instance")
        self.params = [
            Param(root, path, tag_name, struct_filter)
            for path in _descendant_paths(root, (), struct_filter)
        ]
        if not self.params:
            raise ValueError("no fields found")

    def __iter__(self) -> Iterator[Param]:
        return iter(self.params)

    def __len__(self) -> int:
        return len(self.params)


def _descendant_paths(
    struct: Any, prefix: tuple[str, ...], struct_filter: StructFilter | None
) -> Iterator[tuple[str, ...]]:
    for field in reversed(dataclasses.fields(struct)):
        if field.name.startswith("_"):
            continue
        path = prefix + (field.name,)
        yield path
        value = getattr(struct, field.name)
        if not _is_struct(value):
            continue
        if struct_filter is not None and not struct_filter(value):
            continue
        yield from _descendant_paths(value, path, struct_filter)