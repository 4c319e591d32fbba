"""
Declarative population of dataclass and pydantic model instances from
environment variables.

A field takes part when it is public, settable and carries a binding key::

    @dataclass
    class AppConfig:
        port: int = env_field("APP_PORT", fallback="8080", default=0)
        timeout: Annotated[timedelta, EnvTag("APP_TIMEOUT", "30s")] = timedelta()

Fallback literals stay text and are parsed only when the variable is unusable.
"""

from __future__ import annotations

import dataclasses
import inspect
import sys
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import NoneType, UnionType
from typing import Annotated, Any, Union, get_args, get_origin, get_type_hints

from pydantic import BaseModel, Field

from .config import EnvConfig, Environment, parser_for
from .errors import (
    InvalidFallbackError,
    InvalidFormatError,
    InvalidTargetError,
    NotFoundError,
    UnsupportedTypeError,
)
from .logger import get_logger
from .value_objects import EnvTag

ENV_TAG = "env"
FALLBACK_TAG = "fallback"

log = get_logger("typedenv.loader")


@dataclass(frozen=True)
class FieldBinding:
    name: str
    type: Any
    key: str
    fallback: str = ""


def env_field(key: str, *, fallback: str = "", **kwargs: Any) -> Any:
    """dataclasses.field() carrying env/fallback tags in its metadata."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[ENV_TAG] = key
    metadata[FALLBACK_TAG] = fallback
    return dataclasses.field(metadata=metadata, **kwargs)


def env_model_field(key: str, default: Any = ..., *, fallback: str = "", **kwargs: Any) -> Any:
    """pydantic Field() carrying env/fallback tags in json_schema_extra."""
    extra = dict(kwargs.pop("json_schema_extra", None) or {})
    extra[ENV_TAG] = key
    extra[FALLBACK_TAG] = fallback
    return Field(default, json_schema_extra=extra, **kwargs)


def load(target: Any, env: Environment | None = None, *, config: EnvConfig | None = None) -> None:
    """
    Populates target's tagged fields in declaration order.

    Stops at the first failing field; fields set before it keep their new
    values, fields after it are left untouched.
    """
    cfg = config or EnvConfig(env)
    for binding in iter_bindings(target):
        _set_field(target, binding, cfg)


def iter_bindings(target: Any) -> Iterator[FieldBinding]:
    """Yields the eligible fields of a dataclass or pydantic model instance."""
    if target is None or isinstance(target, type):
        raise InvalidTargetError(f"load expects a dataclass or pydantic model instance, got {target!r}")
    if dataclasses.is_dataclass(target):
        yield from _dataclass_bindings(target)
    elif isinstance(target, BaseModel):
        yield from _model_bindings(target)
    else:
        raise InvalidTargetError(
            f"load expects a dataclass or pydantic model instance, got {type(target).__name__}"
        )


def _dataclass_bindings(target: Any) -> Iterator[FieldBinding]:
    cls = type(target)
    if cls.__dataclass_params__.frozen:
        raise InvalidTargetError(f"load expects a mutable struct, {cls.__name__} is frozen")
    hints = _class_hints(cls)
    for f in dataclasses.fields(target):
        if f.name.startswith("_"):
            continue
        annotation = hints.get(f.name)
        if annotation is None:
            try:
                annotation = _field_hint(cls, f)
            except (NameError, SyntaxError):
                if f.metadata.get(ENV_TAG):
                    raise UnsupportedTypeError(f.type, field=f.name) from None
                continue
        type_, extras = _unwrap(annotation)
        binding = _binding(f.name, type_, f.metadata, extras)
        if binding:
            yield binding


def _class_hints(cls: type) -> dict[str, Any]:
    try:
        return get_type_hints(cls, include_extras=True)
    except (NameError, SyntaxError):
        # some postponed annotation does not resolve; fields are resolved one by one
        return {}


def _field_hint(cls: type, f: dataclasses.Field) -> Any:
    if not isinstance(f.type, str):
        return f.type
    for owner in cls.__mro__:
        if f.name not in inspect.get_annotations(owner):
            continue
        module = sys.modules.get(owner.__module__)
        holder = type(owner.__name__, (), {"__module__": owner.__module__, "__annotations__": {f.name: f.type}})
        hints = get_type_hints(
            holder,
            globalns=vars(module) if module else {},
            localns=dict(vars(owner)),
            include_extras=True,
        )
        return hints[f.name]
    raise NameError(f.type)


def _model_bindings(target: BaseModel) -> Iterator[FieldBinding]:
    cls = type(target)
    if cls.model_config.get("frozen"):
        raise InvalidTargetError(f"load expects a mutable struct, {cls.__name__} is frozen")
    for name, info in cls.model_fields.items():
        if name.startswith("_") or info.frozen:
            continue
        tags = info.json_schema_extra if isinstance(info.json_schema_extra, Mapping) else {}
        type_, extras = _unwrap(info.annotation)
        binding = _binding(name, type_, tags, [*extras, *info.metadata])
        if binding:
            yield binding


def _unwrap(type_: Any) -> tuple[Any, list[Any]]:
    extras: list[Any] = []
    if get_origin(type_) is Annotated:
        type_, *extras = get_args(type_)
    # T | None loads as T
    if get_origin(type_) in (Union, UnionType):
        args = [a for a in get_args(type_) if a is not NoneType]
        if len(args) == 1:
            inner, inner_extras = _unwrap(args[0])
            return inner, [*extras, *inner_extras]
    return type_, extras


def _binding(name: str, type_: Any, tags: Mapping[str, Any], extras: list[Any]) -> FieldBinding | None:
    # explicit metadata tags win over Annotated[..., EnvTag(...)]
    key = tags.get(ENV_TAG) or ""
    fallback = tags.get(FALLBACK_TAG) or ""
    if not key:
        tag = next((e for e in extras if isinstance(e, EnvTag)), None)
        if tag is None or not tag.key:
            return None
        key, fallback = tag.key, tag.fallback
    return FieldBinding(name=name, type=type_, key=str(key), fallback=str(fallback))


def _set_field(target: Any, binding: FieldBinding, cfg: EnvConfig) -> None:
    try:
        kind, parser = parser_for(binding.type)
    except UnsupportedTypeError as err:
        err.with_field(binding.name)
        raise

    source = "env"
    try:
        value = cfg.try_get(binding.key, binding.type)
    except (NotFoundError, InvalidFormatError) as err:
        if not binding.fallback:
            err.with_field(binding.name)
            raise
        try:
            value = parser(binding.fallback)
        except ValueError as exc:
            raise InvalidFallbackError(binding.name, binding.fallback, kind, str(exc)) from exc
        source = "fallback"
        log.debug("env lookup failed, using fallback", extra={"field": binding.name, "key": binding.key, "reason": err.code.value})

    setattr(target, binding.name, value)
    log.debug("field loaded", extra={"field": binding.name, "key": binding.key, "source": source})
