#!/usr/bin/env python3
# scopeshell/commands/options.py
from __future__ import annotations

"""
Option descriptor model.

This module defines:
- CliOption: static metadata for one option of a command.
- option(): dataclass field helper declaring an option on a command class.
- options_for(): builds (once per class) the descriptor table of a command class.
- coerce_value(): converts an option string into the field's declared type.
"""

import dataclasses
import json
import types
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import TYPE_CHECKING, Any, Callable, Sequence, Union, get_args, get_origin, get_type_hints

from scopeshell.errors import ParseError

if TYPE_CHECKING:
    from scopeshell.commands.tree import CommandTree

# (tree, prefix, typed tokens) -> suggestions
AutocompleteFn = Callable[["CommandTree", str, Sequence[str]], list[str]]

# Key under which option() stores its spec in dataclass field metadata
OPTION_METADATA_KEY = "scopeshell.option"


@dataclass(frozen=True, slots=True)
class CliOption:
    """
    Metadata describing one configurable option of a command.

    Attributes:
        name: Unique (per command) option name.
        short: Short alias including its dash, e.g. '-n'.
        long: Long alias including its dashes, e.g. '--name'.
        help: One-line help text.
        required: True if the option must be supplied.
        flag: True for boolean flags that take no value.
        type_help: Lowercase display name of the value type.
        field_type: The Python type values are coerced into.
        autocomplete: Optional value completer.
        attribute: Dataclass field receiving the parsed value.
    """

    name: str
    short: str | None = None
    long: str | None = None
    help: str = ""
    required: bool = False
    flag: bool = False
    type_help: str = "str"
    field_type: Any = str
    autocomplete: AutocompleteFn | None = None
    attribute: str = ""

    def short_without_dash(self) -> str | None:
        return self.short[1:] if self.short else None

    def long_without_dashes(self) -> str | None:
        return self.long[2:] if self.long else None

    def aliases(self) -> tuple[str, ...]:
        """Aliases as typed on the command line ('-n', '--name')."""
        return tuple(a for a in (self.short, self.long) if a)

    def keys(self) -> tuple[str, ...]:
        """Dash-stripped aliases, i.e. the keys used in parsed tokens."""
        return tuple(k for k in (self.short_without_dash(), self.long_without_dashes()) if k)

    def matches_key(self, key: str) -> bool:
        return key in self.keys()

    def matches_alias(self, token: str) -> bool:
        return token in self.aliases()

    def replacement(self) -> str:
        """Text inserted when this option is picked from a completion menu."""
        return self.long or self.short or ""


HELP_OPTION = CliOption(
    name="help",
    short="-h",
    long="--help",
    help="Prints help information",
    required=False,
    flag=True,
    type_help="bool",
    field_type=bool,
)


@dataclass(frozen=True, slots=True)
class _OptionSpec:
    name: str | None
    short: str | None
    long: str | None
    help: str
    required: bool | None
    flag: bool
    autocomplete: AutocompleteFn | None


def option(
    *,
    short: str | None = None,
    long: str | None = None,
    help: str = "",
    required: bool | None = None,
    flag: bool = False,
    autocomplete: AutocompleteFn | None = None,
    default: Any = None,
    name: str | None = None,
) -> Any:
    """
    Declare a command option as a dataclass field.

    Aliases are given without dashes ('n', 'name'); they are stored dashed.
    `required` defaults to True for plain fields and False for Optional[...] fields
    and flags. `name` defaults to the field name; set it when the option name
    would shadow a CliCommand method, e.g.

        class_name: str = option(name="name", short="n", long="name")
    """
    spec = _OptionSpec(
        name=name,
        short=f"-{short}" if short else None,
        long=f"--{long}" if long else None,
        help=help,
        required=required,
        flag=flag,
        autocomplete=autocomplete,
    )
    return dataclasses.field(default=default, metadata={OPTION_METADATA_KEY: spec})


def _unwrap_optional(annotation: Any) -> tuple[Any, bool]:
    """Return (inner type, is_optional) for Optional[X] / X | None."""
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) != len(get_args(annotation)):
            return (args[0] if len(args) == 1 else Any), True
    return annotation, False


def type_display_name(annotation: Any) -> str:
    """Lowercase display name for a value type ('str', 'int', 'dict', ...)."""
    origin = get_origin(annotation)
    target = origin if origin is not None else annotation
    if target is Any:
        return "any"
    return str(getattr(target, "__name__", target)).lower()


def _shadows_method(command_cls: type, attribute: str) -> bool:
    return any(callable(vars(base).get(attribute)) for base in command_cls.__mro__[1:])


@lru_cache(maxsize=None)
def options_for(command_cls: type) -> tuple[CliOption, ...]:
    """
    Build the descriptor table for a command class; the help option is appended.

    Raises TypeError when an option field shadows a method of a base class, and
    ValueError when two options share a name or an alias.
    """
    descriptors: list[CliOption] = []
    if dataclasses.is_dataclass(command_cls):
        hints = get_type_hints(command_cls)
        for fld in dataclasses.fields(command_cls):
            spec = fld.metadata.get(OPTION_METADATA_KEY)
            if spec is None:
                continue
            if _shadows_method(command_cls, fld.name):
                raise TypeError(
                    f"{command_cls.__name__}.{fld.name} shadows a method; "
                    f"rename the field and pass option(name={fld.name!r}, ...)"
                )
            inner, is_optional = _unwrap_optional(hints.get(fld.name, str))
            if spec.required is not None:
                required = spec.required
            else:
                required = not (is_optional or spec.flag)
            descriptors.append(
                CliOption(
                    name=spec.name or fld.name,
                    short=spec.short,
                    long=spec.long,
                    help=spec.help,
                    required=required,
                    flag=spec.flag,
                    type_help=type_display_name(inner),
                    field_type=inner,
                    autocomplete=spec.autocomplete,
                    attribute=fld.name,
                )
            )
    descriptors.append(HELP_OPTION)

    names = [opt.name for opt in descriptors]
    aliases = [alias for opt in descriptors for alias in opt.aliases()]
    for label, values in (("option name", names), ("alias", aliases)):
        clashes = sorted({value for value in values if values.count(value) > 1})
        if clashes:
            raise ValueError(f"{command_cls.__name__}: duplicate {label}: {', '.join(clashes)}")
    return tuple(descriptors)


_BOOL_TRUE = {"1", "true", "yes", "y", "on"}
_BOOL_FALSE = {"0", "false", "no", "n", "off"}


def coerce_value(key: str, text_value: str, descriptor: CliOption) -> Any:
    """
    Convert an option string into the descriptor's field type.

    Supported coercions:
        - str/Any -> original text
        - bool -> true/false, yes/no, on/off, 1/0 (case-insensitive)
        - int/float -> constructor
        - dict/list -> JSON text
        - Enum subclasses -> member by value
    Raises ParseError naming the key, the value and the expected type.
    """
    target = descriptor.field_type
    origin = get_origin(target) or target
    try:
        if target in (str, Any):
            return text_value
        if target is bool:
            lowered = text_value.strip().lower()
            if lowered in _BOOL_TRUE:
                return True
            if lowered in _BOOL_FALSE:
                return False
            raise ValueError(text_value)
        if target in (int, float):
            return target(text_value)
        if origin in (dict, list):
            parsed = json.loads(text_value)
            if not isinstance(parsed, origin):
                raise ValueError(text_value)
            return parsed
        if isinstance(target, type) and issubclass(target, Enum):
            return target(text_value)
    except (ValueError, TypeError) as exc:
        raise ParseError(key, text_value, descriptor.type_help) from exc
    # Fallback: let the type's constructor decide
    try:
        return target(text_value)
    except Exception as exc:  # noqa: BLE001
        raise ParseError(key, text_value, descriptor.type_help) from exc


__all__ = [
    "AutocompleteFn",
    "CliOption",
    "HELP_OPTION",
    "option",
    "options_for",
    "coerce_value",
    "type_display_name",
]
