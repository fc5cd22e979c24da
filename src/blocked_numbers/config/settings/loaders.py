"""Config settings – environment and ``.env`` loaders.

A field ``database_url`` on a settings class with ``_prefix = "BLOCKLIST"``
is read from ``BLOCKLIST_DATABASE_URL``. Values arrive as text and are
coerced to the field's declared type (``str``, ``int`` or ``bool``).
"""
from __future__ import annotations

import abc
import dataclasses
import os
import typing
from typing import Any, Mapping, TypeVar

from dotenv import dotenv_values

from blocked_numbers.config.settings.base import Settings
from blocked_numbers.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

T = TypeVar("T", bound=Settings)

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})


def env_key(settings_class: type[Settings], field_name: str) -> str:
    prefix = settings_class._prefix.upper()
    return f"{prefix}_{field_name.upper()}" if prefix else field_name.upper()


def _coerce(raw: str, target: Any) -> Any:
    if target is bool:
        value = raw.strip().lower()
        if value in _TRUE:
            return True
        if value in _FALSE:
            return False
        raise ValueError("expected a boolean")
    if target is int:
        return int(raw.strip())
    return raw


def _has_default(field: dataclasses.Field[Any]) -> bool:
    return field.default is not dataclasses.MISSING or field.default_factory is not dataclasses.MISSING


class SettingsLoader(abc.ABC):
    """Port: build a settings object from some external source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


class EnvSettingsLoader(SettingsLoader):
    """Read settings from a string mapping, ``os.environ`` by default."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def load(self, settings_class: type[T]) -> T:
        environ = os.environ if self._environ is None else self._environ
        hints = typing.get_type_hints(settings_class)
        kwargs: dict[str, Any] = {}
        for field in dataclasses.fields(settings_class):
            key = env_key(settings_class, field.name)
            raw = environ.get(key)
            if raw is None:
                if not _has_default(field):
                    raise MissingRequiredSettingError(key)
                continue
            try:
                kwargs[field.name] = _coerce(raw, hints.get(field.name, str))
            except ValueError as exc:
                raise InvalidSettingValueError(key, raw, str(exc)) from exc
        try:
            return settings_class(**kwargs)
        except ConfigError:
            raise
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Cannot build {settings_class.__name__}: {exc}", cause=exc) from exc


class DotenvSettingsLoader(SettingsLoader):
    """Read a ``.env`` file, with real environment variables taking precedence.

    The process environment is never modified.
    """

    def __init__(self, env_file: str = ".env", environ: Mapping[str, str] | None = None) -> None:
        self._env_file = env_file
        self._environ = environ

    def load(self, settings_class: type[T]) -> T:
        merged = {key: value for key, value in dotenv_values(self._env_file).items() if value is not None}
        merged.update(os.environ if self._environ is None else self._environ)
        return EnvSettingsLoader(merged).load(settings_class)


__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "SettingsLoader", "env_key"]
