#!/usr/bin/env python3
# scopeshell/interface/cli.py
from __future__ import annotations

"""
Interactive input frontends.

Selection order:
    1) prompt_toolkit (rich completion + history)
    2) readline (basic completion + history)
    3) plain input (last resort)
"""

import logging
from pathlib import Path
from typing import Optional

from scopeshell.commands import CommandTree
from scopeshell.interface.completion import complete

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "> "


class BaseCLI:
    """
    Base interface for CLI frontends.

    Subclasses should implement:
        - setup()
        - get_line()
        - teardown()

    The base class reads plain input with no completion or history, and
    provides context manager support to guarantee teardown.
    """

    def __init__(self, prompt_text: str = DEFAULT_PROMPT) -> None:
        self.prompt_text = prompt_text

    def setup(self) -> None:
        ...

    def get_line(self) -> str:
        return input(self.prompt_text)

    def teardown(self) -> None:
        ...

    # Context manager helpers
    def __enter__(self) -> "BaseCLI":
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.teardown()
        except OSError as err:
            logger.debug("Frontend teardown failed: %s", err)


# ===== Preferred: prompt_toolkit =====
class PromptToolkitCLI(BaseCLI):
    """Rich line editor with history and live completion."""

    def __init__(
        self,
        tree: CommandTree,
        history_path: Path,
        prompt_text: str = DEFAULT_PROMPT,
    ) -> None:
        super().__init__(prompt_text)
        from prompt_toolkit import prompt
        from prompt_toolkit.completion import Completer, Completion
        from prompt_toolkit.history import FileHistory
        from prompt_toolkit.key_binding import KeyBindings

        self._prompt = prompt
        self.history_path = history_path
        self._history = FileHistory(str(history_path))

        class _Completer(Completer):
            def get_completions(self, document, complete_event):
                cursor = document.cursor_position
                start, candidates = complete(tree, document.text, cursor)
                for candidate in candidates:
                    # replace exactly the word under the cursor
                    yield Completion(
                        candidate.replacement,
                        start_position=start - cursor,
                        display=candidate.display,
                    )

        self._completer = _Completer()

        # Refresh suggestions when deleting characters.
        kb = KeyBindings()

        @kb.add("backspace")
        def _(event):
            b = event.app.current_buffer
            if b.read_only():
                return
            if b.selection_state:
                b.delete_selection()
            else:
                b.delete_before_cursor(1)
            b.start_completion(select_first=False)

        self._key_bindings = kb

    def setup(self) -> None:
        self.history_path.touch(exist_ok=True)

    def get_line(self) -> str:
        return self._prompt(
            self.prompt_text,
            history=self._history,
            completer=self._completer,
            complete_while_typing=True,
            key_bindings=self._key_bindings,
        )


# ===== Fallback: readline =====
class ReadlineCLI(BaseCLI):
    """Fallback editor with basic completion and history."""

    def __init__(
        self,
        tree: CommandTree,
        history_path: Path,
        prompt_text: str = DEFAULT_PROMPT,
    ) -> None:
        super().__init__(prompt_text)
        import readline

        self.readline = readline
        self.tree = tree
        self.history_path = history_path

    def setup(self) -> None:
        self.history_path.touch(exist_ok=True)
        try:
            self.readline.read_history_file(str(self.history_path))
        except OSError:
            logger.debug("No readable history at %s", self.history_path)

        self.readline.set_completer_delims(" \t\n")

        def _complete(text_fragment: str, state_index: int) -> Optional[str]:
            # Complete against the whole buffer, then return the Nth match
            buffer_text = self.readline.get_line_buffer()
            cursor = self.readline.get_endidx()
            _, candidates = complete(self.tree, buffer_text, cursor)
            matches = [
                c.replacement for c in candidates if c.replacement.startswith(text_fragment)
            ]
            return matches[state_index] if state_index < len(matches) else None

        self.readline.set_completer(_complete)
        self.readline.parse_and_bind("tab: complete")

    def teardown(self) -> None:
        try:
            self.readline.write_history_file(str(self.history_path))
        except OSError as err:
            logger.debug("Could not write history to %s: %s", self.history_path, err)


def make_cli(
    tree: CommandTree,
    history_path: Path,
    prompt_text: str = DEFAULT_PROMPT,
) -> BaseCLI:
    """
    Factory to select the best available CLI frontend at runtime.
    """
    try:
        import prompt_toolkit  # noqa: F401
        return PromptToolkitCLI(tree, history_path, prompt_text)
    except ImportError:
        logger.debug("prompt_toolkit unavailable, trying readline")
    try:
        import readline  # noqa: F401
        return ReadlineCLI(tree, history_path, prompt_text)
    except ImportError:
        # Last resort: plain input with no completion or history
        return BaseCLI(prompt_text)


__all__ = ["BaseCLI", "PromptToolkitCLI", "ReadlineCLI", "make_cli", "DEFAULT_PROMPT"]
