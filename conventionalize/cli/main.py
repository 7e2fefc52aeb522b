"""CLI Main Entry Point"""

from conventionalize.config import Config, load_config
from conventionalize.git import (
    CommitMessage, MessageFileError, read_message, resolve_branch, write_message,
)
from conventionalize.interactive import InteractiveFlow, State
from conventionalize.message import MessageNormalizer
from conventionalize.output import dim, print_debug, print_error, print_success, colorize_commit_type

from conventionalize.cli.args import parse_args
from conventionalize.cli.commands import display_config, run_install_completion, run_install_hook
from conventionalize.cli.utils import run_flow, terminal_input


def _handle_subcommands(args):
    """Handle subcommands that exit early.

    Returns:
        tuple: (exit_code, should_exit) - exit_code if should_exit is True
    """
    if args.install_completion:
        return run_install_completion(), True
    if args.display_config:
        return display_config(), True
    if args.install_hook:
        return run_install_hook(), True
    return 0, False


def _apply_overrides(args, config: Config) -> Config:
    """Layer CLI flags over env and config file.

    Precedence: CLI args > environment variables > config file
    """
    if args.default_key:
        config.default_branch_key = args.default_key
    if args.auto:
        config.interactive = False
    if args.no_ticket:
        config.embed_ticket = False
    if args.dry_run:
        config.dry_run = True
    if args.debug:
        config.debug = True
    return config


def _normalize_automatic(normalizer: MessageNormalizer, subject: str, branch_key: str, ticket):
    """Derive everything from the branch and the draft, no questions asked."""
    scope = normalizer.extract_scope(subject)
    return normalizer.render_message(subject, branch_key, scope, ticket)


def _normalize_interactive(normalizer: MessageNormalizer, subject: str, branch_key: str, ticket):
    """Ask for type, scope and breaking change. Returns None if the user declines."""
    flow = InteractiveFlow(normalizer, subject, branch_key, ticket)
    if run_flow(flow) is not State.DONE:
        return None
    return flow.result


def _emit(args, config: Config, draft: CommitMessage, subject: str) -> int:
    """Print the result (dry run) or rewrite the message file."""
    updated = draft.with_subject(subject)
    if config.dry_run:
        print(updated.render(), end='')
        return 0
    try:
        write_message(args.message_file, updated)
    except MessageFileError as e:
        print_error(str(e))
        return 1
    return 0


def _prepare_message_flow(args, config: Config) -> int:
    """Main prepare-commit-msg flow.

    Returns:
        int: Exit code (non-zero aborts the commit)
    """
    try:
        draft = read_message(args.message_file)
    except MessageFileError as e:
        print_error(str(e))
        return 1

    if args.commit_source and args.commit_source in config.skip_sources:
        if config.debug:
            print_debug(f"commit source '{args.commit_source}' is skipped")
        return 0

    # Nothing typed yet ("git commit" without -m): leave it to the editor
    if draft.is_empty:
        return 0

    normalizer = MessageNormalizer(default_key=config.default_branch_key, debug=config.debug)
    if normalizer.is_conventional(draft.subject):
        return 0

    branch = resolve_branch(args.branch)
    ticket = normalizer.extract_ticket(branch) if config.embed_ticket else None
    branch_key = normalizer.extract_key(branch, draft.subject)
    if config.debug:
        print_debug(f"branch = {branch}")

    if config.interactive:
        with terminal_input() as has_terminal:
            if has_terminal:
                subject = _normalize_interactive(normalizer, draft.subject, branch_key, ticket)
                if subject is None:
                    print(dim("Commit aborted."))
                    return 1
                exit_code = _emit(args, config, draft, subject)
                if exit_code == 0 and not config.dry_run:
                    print_success(colorize_commit_type(subject))
                return exit_code

    subject = _normalize_automatic(normalizer, draft.subject, branch_key, ticket)
    return _emit(args, config, draft, subject)


def main(argv=None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)

    # Handle subcommands that exit early
    exit_code, should_exit = _handle_subcommands(args)
    if should_exit:
        return exit_code

    config = _apply_overrides(args, load_config())
    return _prepare_message_flow(args, config)
