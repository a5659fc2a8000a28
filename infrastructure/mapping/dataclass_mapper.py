"""Document mapper driven by dataclass type hints."""
from __future__ import annotations

import dataclasses
import types
from datetime import date, datetime
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, TypeVar, Union, get_args, get_origin, get_type_hints

from domain.entities import FieldMappingInfo, IndexDocument, SortType
from domain.exceptions import FieldMappingNotFoundError
from domain.interfaces import DocumentMapper

T = TypeVar("T")


class DataclassDocumentMapper(DocumentMapper[T]):
    """Maps each init field of a dataclass to an index field of the same name.

    ``field_names`` renames index fields, ``analyzed`` lists properties whose
    text is tokenized for full-text matching and ``ignored`` skips properties
    entirely (they keep their dataclass defaults when mapped back).
    """

    def __init__(
        self,
        cls: type[T],
        *,
        analyzed: Iterable[str] = (),
        field_names: Mapping[str, str] | None = None,
        ignored: Iterable[str] = (),
    ) -> None:
        if not dataclasses.is_dataclass(cls):
            raise TypeError(f"{cls!r} is not a dataclass")
        self._cls = cls
        analyzed_set = set(analyzed)
        ignored_set = set(ignored)
        renames = dict(field_names or {})
        hints = get_type_hints(cls)

        self._mappings: dict[str, FieldMappingInfo] = {}
        self._required: set[str] = set()
        for dc_field in dataclasses.fields(cls):
            if not dc_field.init or dc_field.name in ignored_set:
                continue
            self._mappings[dc_field.name] = _build_mapping(
                dc_field.name,
                renames.get(dc_field.name, dc_field.name),
                hints.get(dc_field.name, Any),
                dc_field.name in analyzed_set,
            )
            if dc_field.default is dataclasses.MISSING and dc_field.default_factory is dataclasses.MISSING:
                self._required.add(dc_field.name)

        unknown = (analyzed_set | set(renames)) - set(self._mappings)
        if unknown:
            raise ValueError(f"Unknown properties for {cls.__name__}: {', '.join(sorted(unknown))}")

    def get_mapping_info(self, property_name: str) -> FieldMappingInfo:
        try:
            return self._mappings[property_name]
        except KeyError:
            raise FieldMappingNotFoundError(property_name) from None

    def map_document(self, document: IndexDocument) -> T:
        values: dict[str, Any] = {}
        for name, info in self._mappings.items():
            raw = document.get(info.field_name)
            if raw is None:
                if name in self._required:
                    values[name] = None
                continue
            values[name] = info.from_field(raw)
        return self._cls(**values)

    def to_document(self, item: T) -> IndexDocument:
        fields = {
            info.field_name: info.field_value(getattr(item, name))
            for name, info in self._mappings.items()
        }
        analyzed = frozenset(info.field_name for info in self._mappings.values() if info.analyzed)
        return IndexDocument(fields=fields, analyzed=analyzed)


def _build_mapping(property_name: str, field_name: str, hint: Any, analyzed: bool) -> FieldMappingInfo:
    python_type = _unwrap_optional(hint)
    sort_type, to_field, from_field = _converters(python_type)
    return FieldMappingInfo(
        property_name=property_name,
        field_name=field_name,
        sort_type=sort_type,
        analyzed=analyzed,
        to_field=to_field,
        from_field=from_field,
    )


def _unwrap_optional(hint: Any) -> Any:
    if get_origin(hint) in (Union, types.UnionType):
        args = [arg for arg in get_args(hint) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return hint


def _converters(python_type: Any) -> tuple[SortType, Callable[[Any], Any], Callable[[Any], Any]]:
    if get_origin(python_type) is not None or not isinstance(python_type, type):
        return SortType.STRING, _identity, _identity
    if issubclass(python_type, bool):
        return SortType.INT, bool, bool
    if issubclass(python_type, Enum):
        return SortType.STRING, _enum_value, python_type
    if issubclass(python_type, int):
        return SortType.INT, int, int
    if issubclass(python_type, float):
        return SortType.FLOAT, float, float
    if issubclass(python_type, datetime):
        return SortType.STRING, _isoformat, datetime.fromisoformat
    if issubclass(python_type, date):
        return SortType.STRING, _isoformat, date.fromisoformat
    if issubclass(python_type, str):
        return SortType.STRING, str, str
    return SortType.STRING, _identity, _identity


def _identity(value: Any) -> Any:
    return value


def _isoformat(value: date) -> str:
    return value.isoformat()


def _enum_value(value: Enum) -> Any:
    return value.value


__all__ = ["DataclassDocumentMapper"]
