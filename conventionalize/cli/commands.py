"""CLI Commands"""

import os
import stat
import sys
from pathlib import Path

from conventionalize.config import load_config, get_config_path
from conventionalize.git import run_git, GitError
from conventionalize.output import bold, dim, info, print_success, print_error

HOOK_NAME = 'prepare-commit-msg'
HOOK_MARKER = '# installed by conventionalize'
HOOK_SCRIPT = f"""#!/bin/sh
{HOOK_MARKER}
exec conventionalize "$@"
"""


def display_config() -> int:
    """Display current configuration."""
    config = load_config()
    config_path = get_config_path()

    print(f"\n{bold('Current Configuration')}\n")

    if config_path:
        print(f"  {dim('Loaded from:')} {config_path}")
    else:
        print(f"  {dim('Loaded from:')} defaults (no .conventionalizerc found)")

    env_overrides = {name: os.environ[name] for name in ('DEBUG', 'TEST', 'TEST_BRANCH', 'GIT_BRANCH') if name in os.environ}
    if env_overrides:
        print(f"  {dim('Environment overrides:')}")
        for name, value in env_overrides.items():
            print(f"    {name}={value}")

    print()
    print(f"  {bold('Settings:')}")
    print(f"    default_branch_key: {info(config.default_branch_key)}")
    print(f"    interactive:        {info(str(config.interactive).lower())}")
    print(f"    embed_ticket:       {info(str(config.embed_ticket).lower())}")
    print(f"    skip_sources:       {info(', '.join(config.skip_sources) or 'none')}")
    print(f"    debug:              {info(str(config.debug).lower())}")
    print(f"    dry_run:            {info(str(config.dry_run).lower())}")

    print(f"\n  {dim('Config locations:')}")
    print(f"    Local:  .conventionalizerc (in current directory)")
    print(f"    Global: ~/.conventionalizerc\n")

    return 0


def _hooks_dir() -> Path:
    """Hooks directory of the current repository (honours core.hooksPath)."""
    return Path(run_git('rev-parse', '--git-path', 'hooks').strip())


def run_install_hook() -> int:
    """Write the prepare-commit-msg hook into the current repository."""
    try:
        hooks_dir = _hooks_dir()
    except GitError as e:
        print_error(str(e))
        return 1

    hook_path = hooks_dir / HOOK_NAME
    if hook_path.exists() and HOOK_MARKER not in hook_path.read_text(encoding='utf-8', errors='replace'):
        print_error(f"{hook_path} already exists and was not installed by conventionalize; not overwriting")
        return 1

    try:
        hooks_dir.mkdir(parents=True, exist_ok=True)
        hook_path.write_text(HOOK_SCRIPT, encoding='utf-8')
        hook_path.chmod(hook_path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    except OSError as e:
        print_error(f"Could not install hook: {e}")
        return 1

    print_success(f"Installed {hook_path}")
    return 0


def run_install_completion() -> int:
    """Install shell tab completion."""
    shell = os.environ.get('SHELL', '')

    print(f"\n{bold('Tab Completion Setup')}\n")

    line = 'eval "$(register-python-argcomplete conventionalize)"'
    if 'zsh' in shell or 'bash' in shell:
        rc_file = os.path.expanduser('~/.zshrc' if 'zsh' in shell else '~/.bashrc')
        print(f"Add this line to {dim(rc_file)}:\n")
        print(f"  {line}\n")
        print(f"Then run: {dim('source ' + rc_file)}")
    elif sys.platform == 'win32':
        print("For PowerShell, run:\n")
        print("  register-python-argcomplete --shell powershell conventionalize | Out-String | Invoke-Expression")
    else:
        print("Run one of these based on your shell:\n")
        print(f"  {dim('# Bash/Zsh')}")
        print(f"  {line}\n")
        print(f"  {dim('# Fish')}")
        print("  register-python-argcomplete --shell fish conventionalize | source")

    print(f"\n{dim('After setup, press TAB to autocomplete flags.')}")
    return 0
