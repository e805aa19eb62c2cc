"""Interactive question helper used by every command.

ConsoleIO reads answers through an injectable input function and writes to
an injectable stream, so commands can be driven by a list of scripted
answers in tests. Validators raise InvalidArgumentError to make the helper
print the message and ask again.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Iterable, Sequence
from typing import Any, TextIO

from site_builder_console.errors import InvalidArgumentError, MissingOptionError

logger = logging.getLogger(__name__)

Validator = Callable[[Any], Any]

_YES = {"y", "yes", "true", "1"}
_NO = {"n", "no", "false", "0"}


class ConsoleIO:
    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        stream: TextIO | None = None,
        *,
        interactive: bool = True,
        max_attempts: int | None = None,
    ) -> None:
        self._input = input_fn
        self._stream = stream
        self.interactive = interactive
        self.max_attempts = max_attempts

    @classmethod
    def scripted(cls, answers: Iterable[str], stream: TextIO | None = None) -> ConsoleIO:
        """Build an IO that answers questions from a fixed list, in order."""
        pending = iter(answers)

        def _next_answer(prompt: str) -> str:
            try:
                return next(pending)
            except StopIteration:
                raise EOFError(f"No scripted answer left for: {prompt!r}") from None

        return cls(_next_answer, stream=stream, max_attempts=3)

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def _write(self, text: str) -> None:
        print(text, file=self.stream)

    def comment(self, text: str) -> None:
        self._write(f" // {text}")

    def info(self, text: str) -> None:
        self._write(text)

    def success(self, text: str) -> None:
        self._write(f" [OK] {text}")

    def warning(self, text: str) -> None:
        self._write(f" [WARNING] {text}")

    def error(self, text: str) -> None:
        print(f" [ERROR] {text}", file=sys.stderr)

    # -- questions ------------------------------------------------------------

    def _prompt(self, question: str, default: Any) -> str:
        suffix = f" [{default}]" if default not in (None, "") else ""
        return self._input(f" {question}{suffix}:\n > ").strip()

    def _loop(
        self,
        question: str,
        default: Any,
        resolve: Callable[[str], Any],
    ) -> Any:
        if not self.interactive:
            return resolve("")

        attempts = 0
        while True:
            answer = self._prompt(question, default)
            try:
                return resolve(answer)
            except InvalidArgumentError as exc:
                attempts += 1
                self.error(str(exc))
                if self.max_attempts is not None and attempts >= self.max_attempts:
                    raise

    def ask(
        self,
        question: str,
        default: Any = None,
        validator: Validator | None = None,
    ) -> Any:
        """Ask a question that needs a non-empty answer."""

        def resolve(answer: str) -> Any:
            value: Any = answer
            if not answer:
                if default is None or default == "":
                    if not self.interactive:
                        raise MissingOptionError(f"No value given for: {question}")
                    raise InvalidArgumentError("A value is required.")
                value = default
            return validator(value) if validator else value

        return self._loop(question, default, resolve)

    def ask_empty(
        self,
        question: str,
        default: Any = None,
        validator: Validator | None = None,
    ) -> Any:
        """Ask a question where an empty answer is acceptable."""

        def resolve(answer: str) -> Any:
            if not answer:
                if default is None or default == "":
                    return default
                value: Any = default
            else:
                value = answer
            return validator(value) if validator else value

        return self._loop(question, default, resolve)

    def confirm(self, question: str, default: bool = True) -> bool:
        hint = "yes" if default else "no"

        def resolve(answer: str) -> bool:
            if not answer:
                return default
            lowered = answer.lower()
            if lowered in _YES:
                return True
            if lowered in _NO:
                return False
            raise InvalidArgumentError('Please answer "yes" or "no".')

        return self._loop(f"{question} (yes/no)", hint, resolve)

    def choice_no_list(
        self,
        question: str,
        choices: Sequence[str],
        default: str | None = None,
    ) -> str:
        """Ask for one of ``choices`` without printing them; ``?`` lists them.

        A unique prefix of a choice is accepted.
        """
        options = list(choices)
        if not options:
            raise InvalidArgumentError(f"There is nothing to choose from for: {question}")

        def resolve(answer: str) -> str:
            if answer == "?":
                self._write("  " + ", ".join(options))
                raise InvalidArgumentError("Pick one of the values listed above.")
            value = answer or (default or "")
            if not value:
                if not self.interactive:
                    raise MissingOptionError(f"No value given for: {question}")
                raise InvalidArgumentError("A value is required.")
            if value in options:
                return value
            matches = [option for option in options if option.startswith(value)]
            if len(matches) == 1:
                return matches[0]
            raise InvalidArgumentError(f'Value "{value}" is invalid (type "?" to list values).')

        if self.interactive:
            attempts = 0
            while True:
                answer = self._prompt(question, default)
                try:
                    return resolve(answer)
                except InvalidArgumentError as exc:
                    # Listing the choices is not a failed attempt.
                    if answer == "?":
                        continue
                    attempts += 1
                    self.error(str(exc))
                    if self.max_attempts is not None and attempts >= self.max_attempts:
                        raise
        return resolve("")
