"""Git Integration Package"""

from conventionalize.git.branch import GitError, get_current_branch, resolve_branch, run_git
from conventionalize.git.message_file import CommitMessage, MessageFileError, read_message, write_message

__all__ = [
    "GitError",
    "get_current_branch",
    "run_git",
    "resolve_branch",
    "CommitMessage",
    "MessageFileError",
    "read_message",
    "write_message",
]
