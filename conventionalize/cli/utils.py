"""CLI Utility Functions"""

import sys
from contextlib import contextmanager

from conventionalize.interactive import InteractiveFlow, State
from conventionalize.output import bold, colorize_commit_type, dim

TTY_PATH = '/dev/tty'


@contextmanager
def terminal_input():
    """Make input() read from the terminal for the duration of the block.

    Git runs hooks with stdin detached, so fall back to /dev/tty; the handle
    is closed and the old stdin restored on exit. Yields False when no
    terminal is available.
    """
    if sys.stdin is not None and sys.stdin.isatty():
        yield True
        return
    try:
        tty = open(TTY_PATH, 'r', encoding='utf-8')
    except OSError:
        yield False
        return
    saved, sys.stdin = sys.stdin, tty
    try:
        yield True
    finally:
        sys.stdin = saved
        tty.close()


def _format_prompt(flow: InteractiveFlow) -> str:
    """Prompt text with the menu dimmed and the preview colored."""
    text = flow.prompt()
    if flow.state is State.SELECTING_TYPE:
        *menu, question = text.split('\n')
        return '\n'.join(dim(line) for line in menu) + '\n' + bold(question)
    if flow.state is State.CONFIRMING_WRITE:
        result = flow.result
        return text.replace(result, colorize_commit_type(result), 1)
    return text


def run_flow(flow: InteractiveFlow) -> State:
    """Drive the flow from the terminal until it is done or aborted."""
    while not flow.finished:
        try:
            reply = input(_format_prompt(flow))
        except (KeyboardInterrupt, EOFError):
            print()
            return flow.abort()
        if flow.answer(reply) is State.SELECTING_TYPE:
            print(f"Enter 1-{len(flow.options)} or a type name")
    return flow.state
