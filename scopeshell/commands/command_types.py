#!/usr/bin/env python3
# scopeshell/commands/command_types.py
from __future__ import annotations

"""
Command data structures and the command capability.

This module defines:
- Candidate: one completion suggestion (display label + replacement text).
- CliCommand: the contract every leaf command satisfies (metadata, validate,
  execute, help, option completions).
- command_info: decorator attaching about/long_about/examples to a command class.
"""

import dataclasses
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Iterable, TypeVar

from scopeshell.commands.options import CliOption, coerce_value, options_for
from scopeshell.errors import DuplicateOptions, InvalidOption, MissingOptions, PopulatedFlagOptions

if TYPE_CHECKING:
    from scopeshell.interface.parser import CommandTokens
    from scopeshell.ui.output import LineSink

logger = logging.getLogger(__name__)

C = TypeVar("C", bound="CliCommand")


@dataclass(frozen=True, slots=True)
class Candidate:
    """
    One completion suggestion.

    Attributes:
        display: Human-readable label shown in the completion menu.
        replacement: Text inserted into the line buffer.
    """

    display: str
    replacement: str

    @classmethod
    def plain(cls, word: str) -> "Candidate":
        return cls(display=word, replacement=word)


class CliCommand(ABC):
    """
    Base class for leaf commands.

    Subclasses are dataclasses whose fields are declared with `option(...)`;
    the descriptor table is derived from those fields once per class.
    Subclasses must implement `execute(client, tokens)`.
    """

    about_text: ClassVar[str | None] = None
    long_about_text: ClassVar[str | None] = None
    examples_text: ClassVar[str | None] = None

    # ---------------- Metadata ----------------

    def options(self) -> list[CliOption]:
        return list(options_for(type(self)))

    def name(self) -> str:
        return type(self).__name__

    def about(self) -> str | None:
        return self.about_text

    def long_about(self) -> str | None:
        return self.long_about_text

    def examples(self) -> str | None:
        return self.examples_text

    # ---------------- Execution ----------------

    @abstractmethod
    def execute(self, client: Any, tokens: CommandTokens) -> None:
        """Run the command body. Called only after `validate` passed."""

    # ---------------- Validation ----------------

    def validate(self, tokens: CommandTokens) -> None:
        """Run the structural checks in order; the first failing check raises."""
        self.validate_missing_options(tokens)
        self.validate_not_both_short_and_long_set(tokens)
        self.validate_flag_options(tokens)

    def validate_missing_options(self, tokens: CommandTokens) -> None:
        present = tokens.get_options()
        missing = [
            opt.name
            for opt in self.options()
            if opt.required and not any(key in present for key in opt.keys())
        ]
        if missing:
            logger.debug("Missing options for %s: %s", self.name(), missing)
            raise MissingOptions(missing)

    def validate_not_both_short_and_long_set(self, tokens: CommandTokens) -> None:
        present = tokens.get_options()
        duplicates = []
        for opt in self.options():
            short, long = opt.short_without_dash(), opt.long_without_dashes()
            if short and long and short in present and long in present:
                duplicates.append(opt.name)
        if duplicates:
            raise DuplicateOptions(duplicates)

    def validate_flag_options(self, tokens: CommandTokens) -> None:
        """
        Flags take no value: the tokenizer stores them as a key with "".
        Any flag key carrying a non-empty value is reported.
        """
        present = tokens.get_options()
        populated = [
            key
            for opt in self.options()
            if opt.flag
            for key in opt.keys()
            if present.get(key)
        ]
        if populated:
            raise PopulatedFlagOptions(populated)

    # ---------------- Population ----------------

    def from_tokens(self: C, tokens: CommandTokens) -> C:
        """
        Validate `tokens` and return a copy of this command with option fields
        populated from them (flags become True, values are coerced).
        """
        self.validate(tokens)
        descriptors = [opt for opt in self.options() if opt.name != "help"]
        values: dict[str, Any] = {}
        for key, value in tokens.get_options().items():
            if key in ("h", "help"):
                continue
            descriptor = next((d for d in descriptors if d.matches_key(key)), None)
            if descriptor is None:
                raise InvalidOption(f"Unknown option '{key}' for {self.name()}")
            values[descriptor.attribute] = True if descriptor.flag else coerce_value(key, value, descriptor)
        if not values:
            return self
        return dataclasses.replace(self, **values)  # type: ignore[type-var]

    # ---------------- Completion ----------------

    def option_completions(self, prefix: str, seen: Iterable[str] = ()) -> list[Candidate]:
        """
        Suggest options not already typed whose short or long alias starts with
        `prefix`. Display text is column-aligned; replacement is the long alias
        (or the short one when there is no long alias).
        """
        seen_names = set(seen)
        picked = [
            opt
            for opt in self.options()
            if opt.name not in seen_names
            and (not prefix or any(alias.startswith(prefix) for alias in opt.aliases()))
        ]
        if not picked:
            return []

        short_width = max(len(opt.short or "") for opt in picked) + 1
        long_width = max(len(opt.long or "") for opt in picked)
        type_width = max(len(opt.type_help) for opt in picked) + 2

        candidates = []
        for opt in picked:
            short = f"{opt.short}," if opt.short and opt.long else (opt.short or "")
            type_hint = f"<{opt.type_help}>"
            display = (
                f"{short:<{short_width}} {opt.long or '':<{long_width}} "
                f"{type_hint:<{type_width}} {opt.help}"
            ).rstrip()
            candidates.append(Candidate(display=display, replacement=opt.replacement()))
        return candidates

    # ---------------- Help ----------------

    def help_lines(self, command_name: str, context: Iterable[str] = ()) -> list[str]:
        """Render help text for this command as a list of lines."""
        fq_name = " ".join([*context, command_name])
        lines: list[str] = []

        about = self.about()
        lines.append(f"{fq_name} - {about}" if about else fq_name)
        lines.append("")

        long_about = self.long_about()
        if long_about:
            lines.extend(long_about.splitlines())
            lines.append("")

        options = self.options()
        if options:
            lines.append("Options:")
            short_width = max(len(opt.short or "") for opt in options) + 1
            long_width = max(len(opt.long or "") for opt in options) + 1
            type_width = max(len(opt.type_help) for opt in options) + 2
            for opt in options:
                short = f"{opt.short}," if opt.short else ""
                long = f"{opt.long}," if opt.long else ""
                type_hint = f"<{opt.type_help}>"
                flag = " (flag)" if opt.flag else ""
                required = " (required)" if opt.required else ""
                lines.append(
                    f"  {short:<{short_width}} {long:<{long_width}} "
                    f"{type_hint:<{type_width}} {opt.help}{required}{flag}".rstrip()
                )
            lines.append("")

        examples = self.examples()
        if examples:
            lines.append("Examples:")
            for example in examples.strip().splitlines():
                lines.append(f"  {fq_name} {example.strip()}")

        return lines

    def help(self, command_name: str, context: Iterable[str], sink: LineSink) -> None:
        """Write help text for this command to `sink`."""
        for line in self.help_lines(command_name, context):
            sink.append_line(line)


def command_info(
    *,
    about: str | None = None,
    long_about: str | None = None,
    examples: str | None = None,
) -> Callable[[type[C]], type[C]]:
    """
    Decorator attaching descriptive text to a command class.

    Example:
        @command_info(about="Create a new class", examples="-n MyClass")
        @dataclass
        class ClassNew(CliCommand): ...
    """

    def wrapper(cls: type[C]) -> type[C]:
        cls.about_text = about
        cls.long_about_text = long_about
        cls.examples_text = examples
        return cls

    return wrapper


__all__ = ["Candidate", "CliCommand", "command_info"]
