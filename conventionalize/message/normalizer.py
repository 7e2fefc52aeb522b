"""Message Normalizer - Turn a draft commit subject into a conventional commit."""

import re
from typing import Optional

from conventionalize import BRANCH_KEY_ALIASES, COMMIT_TYPE_NAMES, DEFAULT_BRANCH_KEY
from conventionalize.output import print_debug

# Leading "<group>/<word>-<word>_" prefix followed by the first digit run
TICKET_PREFIX_RE = re.compile(r'^(\w+/)?(\w+-)?(\w+[-_])?[0-9]+', re.ASCII)
TICKET_RE = re.compile(r'(\w+-)?[0-9]+', re.ASCII)

KEY_PREFIX_RE = re.compile(r'^([^:]+):')
SCOPE_RE = re.compile(r'^[!(]*(\([^)]*\))')
# Draft prefixes an interactive answer replaces: "fix(api)!:" or a bare "(api):"
CONVENTIONAL_PREFIX_RE = re.compile(
    r'^(' + '|'.join([*COMMIT_TYPE_NAMES, *BRANCH_KEY_ALIASES]) + r')(?P<scope>\([^)]*\))?!?:\s*',
    re.IGNORECASE,
)
SCOPE_PREFIX_RE = re.compile(r'^(?P<scope>\([^)]*\))!?:?\s*')
CONVENTIONAL_RE = re.compile(r'^[^:]+: \[[A-Za-z0-9-]+\] .+$')

BREAKING_MARK = '!'


class MessageNormalizer:
    """Extracts type, scope and ticket and renders the final subject line.

    Configuration is fixed at construction; every operation is a plain
    string transformation that returns an empty value instead of failing.
    """

    def __init__(self, default_key: str = DEFAULT_BRANCH_KEY, debug: bool = False):
        self.default_key = default_key
        self.debug = debug

    def extract_ticket(self, branch: str) -> Optional[str]:
        """Pull a ticket id out of a branch name.

        "feat/TEAM-123-foo-bar" -> "TEAM-123", "fix/readme" -> None
        """
        prefix = TICKET_PREFIX_RE.match(branch or '')
        if not prefix:
            return None
        ticket = TICKET_RE.search(prefix.group(0))
        if not ticket:
            return None
        return ticket.group(0).upper()

    def extract_key(self, branch: str, message: str) -> str:
        """Resolve the commit type keyword.

        A "<prefix>:" already present in the message wins over the branch.
        """
        match = KEY_PREFIX_RE.match(message or '')
        if match:
            return match.group(1)

        lowered = (branch or '').lower()
        key = lowered.split('/', 1)[0]
        if key == lowered:
            key = self.default_key

        key = BRANCH_KEY_ALIASES.get(key, key)
        return key or DEFAULT_BRANCH_KEY

    def extract_scope(self, message: str) -> str:
        """Return the leading "(scope)" of a message, lowercased, or ""."""
        match = SCOPE_RE.match(message or '')
        if not match:
            return ''
        return match.group(1).lower()

    def render_message(self, message: str, key: str, scope: str = '', ticket: Optional[str] = None) -> str:
        """Assemble "<key><scope><!>: [<ticket>] <description>".

        The description is whatever follows the first colon of the message,
        once the breaking mark and the scope have been taken out.
        """
        if self.debug:
            self._debug_inputs(message, key, scope, ticket)

        breaking = message.startswith(BREAKING_MARK)
        if breaking:
            message = message[1:]

        if scope:
            message = message.replace(scope, '', 1)

        _, colon, rest = message.partition(':')
        description = (rest if colon else message).lstrip()
        return self._assemble(key, scope, breaking, ticket, description)

    def compose(self, message: str, key: str, scope: str = '', breaking: bool = False,
                ticket: Optional[str] = None) -> str:
        """Render from separately chosen parts (the interactive answers).

        Only a draft prefix the answers replace is dropped: a leading "!",
        a "type(scope)!:" for a known type or for ``key`` itself, or a bare
        "(scope):". Any other text before a colon is part of the description.
        An empty scope keeps the draft's own scope; "api" and "(api)" both
        become "(api)".
        """
        description = message.lstrip(BREAKING_MARK).lstrip()
        draft_scope = ''
        key_prefix = re.compile(re.escape(key) + r'(?P<scope>\([^)]*\))?!?:\s*', re.IGNORECASE)
        for prefixes in ((key_prefix, CONVENTIONAL_PREFIX_RE), (SCOPE_PREFIX_RE,)):
            for prefix in prefixes:
                match = prefix.match(description)
                if match:
                    draft_scope = draft_scope or (match.group('scope') or '').lower()
                    description = description[match.end():]
                    break

        scope = scope.strip().strip('()').strip() or draft_scope.strip('()')
        scope = f"({scope})" if scope else ''
        if self.debug:
            self._debug_inputs(message, key, scope, ticket)
        return self._assemble(key, scope, breaking, ticket, description)

    def is_conventional(self, message: str) -> bool:
        """True if the message already carries a type prefix and a [TICKET]."""
        if CONVENTIONAL_RE.match(message or ''):
            if self.debug:
                print_debug(f"message = {message}")
                print_debug("The commit message is already a conventional commit: ignoring the hook.")
            return True
        return False

    @staticmethod
    def _assemble(key: str, scope: str, breaking: bool, ticket: Optional[str], description: str) -> str:
        mark = BREAKING_MARK if breaking else ''
        if ticket:
            return f"{key}{scope}{mark}: [{ticket}] {description}"
        return f"{key}{scope}{mark}: {description}"

    @staticmethod
    def _debug_inputs(message: str, key: str, scope: str, ticket: Optional[str]) -> None:
        print_debug(f"message = {message}")
        print_debug(f"key = {key}")
        print_debug(f"scope = {scope}")
        print_debug(f"ticket = {ticket or ''}")
