"""Configuración de serialización JSON del cliente.

Reglas fijas para todo el ciclo de vida de un cliente:
- Los campos se escriben por alias (camelCase de `ApiModel`).
- Los enums se escriben como el *nombre* del miembro, no su valor.
- Al leer, los enums se resuelven por nombre para cualquier `Enum`.
"""

from __future__ import annotations

import types
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Annotated, Any, TypeVar, Union, get_args, get_origin

from pydantic import BaseModel, TypeAdapter
from pydantic_core import from_json, to_json

T = TypeVar("T")


@lru_cache(maxsize=256)
def _adapter(tp: Any) -> TypeAdapter[Any]:
    return TypeAdapter(tp)


def _enum_names(obj: Any) -> Any:
    if isinstance(obj, Enum):
        return obj.name
    if isinstance(obj, dict):
        return {key: _enum_names(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple, set, frozenset)):
        return [_enum_names(item) for item in obj]
    return obj


def enum_from_name(enum_type: type[Enum], value: Any) -> Any:
    """Miembro cuyo nombre coincide con `value` (exacto y luego sin mayúsculas).

    Si no hay coincidencia devuelve `value` tal cual para que pydantic lo
    valide por valor.
    """

    if not isinstance(value, str):
        return value
    member = enum_type.__members__.get(value)
    if member is not None:
        return member
    folded = value.casefold()
    for name, candidate in enum_type.__members__.items():
        if name.casefold() == folded:
            return candidate
    return value


def resolve_enum_names(annotation: Any, value: Any) -> Any:
    """Sustituye nombres de enum por miembros según la anotación del destino.

    Recorre `Optional`/`Union`, listas, tuplas, sets y dicts. Los modelos
    anidados se resuelven solos (ver `ApiModel`).
    """

    origin = get_origin(annotation)
    if origin is Annotated:
        return resolve_enum_names(get_args(annotation)[0], value)
    if isinstance(annotation, type) and issubclass(annotation, Enum):
        return enum_from_name(annotation, value)
    if origin is Union or origin is types.UnionType:
        for arg in get_args(annotation):
            resolved = resolve_enum_names(arg, value)
            if resolved is not value:
                return resolved
        return value
    args = get_args(annotation)
    if origin in (list, set, frozenset) and isinstance(value, list) and args:
        return [resolve_enum_names(args[0], item) for item in value]
    if origin is tuple and isinstance(value, list) and args:
        if len(args) == 2 and args[1] is Ellipsis:
            return [resolve_enum_names(args[0], item) for item in value]
        return [resolve_enum_names(arg, item) for arg, item in zip(args, value)] + value[len(args):]
    if origin is dict and isinstance(value, dict) and len(args) == 2:
        key_type, value_type = args
        return {
            resolve_enum_names(key_type, key): resolve_enum_names(value_type, item)
            for key, item in value.items()
        }
    return value


@dataclass(frozen=True)
class SerializationConfig:
    by_alias: bool = True
    enums_as_names: bool = True
    exclude_none: bool = False

    def to_python(self, data: Any) -> Any:
        """Convierte `data` a tipos JSON-friendly respetando la configuración."""

        if isinstance(data, BaseModel):
            dumped = data.model_dump(by_alias=self.by_alias, exclude_none=self.exclude_none)
        else:
            dumped = _adapter(type(data)).dump_python(
                data, by_alias=self.by_alias, exclude_none=self.exclude_none
            )
        return _enum_names(dumped) if self.enums_as_names else dumped

    def dumps(self, data: Any) -> bytes:
        return to_json(self.to_python(data))

    def loads(self, content: bytes | str, tp: type[T]) -> T:
        """Deserializa `content` como `tp`; lanza si el cuerpo no encaja."""

        data = from_json(content)
        if self.enums_as_names:
            data = resolve_enum_names(tp, data)
        return _adapter(tp).validate_python(data)
