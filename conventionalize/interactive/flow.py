"""Interactive Flow - Ask for type, scope and breaking change, then confirm.

The flow holds no terminal handles. A driver shows ``prompt()`` and feeds
each reply to ``answer()`` until ``finished`` is set, so tests can run the
whole conversation from a list of strings.
"""

from enum import Enum
from typing import Optional

from conventionalize import COMMIT_TYPE_NAMES
from conventionalize.message import MessageNormalizer

YES_ANSWERS = ('y', 'yes')


class State(Enum):
    SELECTING_TYPE = "selecting_type"
    ENTERING_SCOPE = "entering_scope"
    CONFIRMING_BREAKING = "confirming_breaking"
    CONFIRMING_WRITE = "confirming_write"
    DONE = "done"
    ABORTED = "aborted"


class InteractiveFlow:
    """One prompt, one answer, one transition."""

    def __init__(self, normalizer: MessageNormalizer, message: str, branch_key: str,
                 ticket: Optional[str] = None):
        self.normalizer = normalizer
        self.message = message
        self.ticket = ticket
        self.options = [branch_key] + [t for t in COMMIT_TYPE_NAMES if t != branch_key]

        self.state = State.SELECTING_TYPE
        self.selected_type: Optional[str] = None
        self.scope = ''
        self.breaking = False

    @property
    def finished(self) -> bool:
        return self.state in (State.DONE, State.ABORTED)

    @property
    def result(self) -> str:
        """The message as it would be written with the answers so far."""
        return self.normalizer.compose(
            self.message,
            self.selected_type or self.options[0],
            scope=self.scope,
            breaking=self.breaking,
            ticket=self.ticket,
        )

    def prompt(self) -> str:
        if self.state is State.SELECTING_TYPE:
            menu = [f"{i}) {name}" for i, name in enumerate(self.options, 1)]
            return '\n'.join(menu) + "\nSelect type: "
        if self.state is State.ENTERING_SCOPE:
            return "Enter Scope if any: "
        if self.state is State.CONFIRMING_BREAKING:
            return "Is this a breaking change [yn]? "
        if self.state is State.CONFIRMING_WRITE:
            return f"Ready to commit: '{self.result}' [yn]? "
        return ""

    def answer(self, text: str) -> State:
        text = (text or '').strip()

        if self.state is State.SELECTING_TYPE:
            selected = self._match_option(text)
            if selected is not None:
                self.selected_type = selected
                self.state = State.ENTERING_SCOPE

        elif self.state is State.ENTERING_SCOPE:
            # "(api)" typed with its parentheses is the same answer as "api"
            text = text.strip('()').strip()
            self.scope = f"({text})" if text else ''
            self.state = State.CONFIRMING_BREAKING

        elif self.state is State.CONFIRMING_BREAKING:
            self.breaking = text.lower() in YES_ANSWERS
            self.state = State.CONFIRMING_WRITE

        elif self.state is State.CONFIRMING_WRITE:
            self.state = State.DONE if text.lower() in YES_ANSWERS else State.ABORTED

        return self.state

    def abort(self) -> State:
        self.state = State.ABORTED
        return self.state

    def _match_option(self, text: str) -> Optional[str]:
        """Option for a 1-based number or a type name; Enter picks the first."""
        if not text:
            return self.options[0]
        if text.isdigit():
            idx = int(text) - 1
            if 0 <= idx < len(self.options):
                return self.options[idx]
            return None
        lowered = text.lower()
        return lowered if lowered in self.options else None
