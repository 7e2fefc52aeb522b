"""Branch Lookup - Find the branch the commit is being made on."""

import os
import subprocess
from typing import Mapping, Optional


class GitError(Exception):
    """Raised when git operations fail."""
    pass


def run_git(*args: str) -> str:
    """Run a git command and return stdout."""
    try:
        result = subprocess.run(
            ['git', *args],
            capture_output=True,
            text=True,
            check=True,
            encoding='utf-8',
            errors='replace'
        )
        return result.stdout
    except subprocess.CalledProcessError as e:
        raise GitError(f"Git command failed: git {' '.join(args)}\n{e.stderr}")
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH")


def get_current_branch() -> str:
    """Name of the checked-out branch ("HEAD" when detached)."""
    return run_git('rev-parse', '--abbrev-ref', 'HEAD').strip()


def resolve_branch(cli_branch: Optional[str] = None, env: Optional[Mapping[str, str]] = None) -> str:
    """Resolve the branch name.

    Precedence: --branch > TEST_BRANCH > GIT_BRANCH > git itself.
    A failing git lookup yields "", which downstream means no ticket
    and the default key.
    """
    env = os.environ if env is None else env
    for candidate in (cli_branch, env.get('TEST_BRANCH'), env.get('GIT_BRANCH')):
        if candidate:
            return candidate
    try:
        return get_current_branch()
    except GitError:
        return ''
