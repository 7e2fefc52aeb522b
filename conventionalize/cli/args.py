"""CLI Argument Parsing"""

import argparse
import argcomplete

from conventionalize import __version__


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='conventionalize',
        description='Rewrite a draft commit message as a conventional commit (git prepare-commit-msg hook)',
        epilog='Example: conventionalize .git/COMMIT_EDITMSG message'
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    # Arguments git passes to prepare-commit-msg
    parser.add_argument('message_file', nargs='?', help='File holding the draft commit message')
    parser.add_argument('commit_source', nargs='?', help='Why the message is being prepared (message, template, merge, squash, commit)')
    parser.add_argument('commit_sha', nargs='?', help='Commit SHA-1 (only for the "commit" source)')

    # Normalization options
    parser.add_argument('-b', '--branch', type=str, metavar='NAME', help='Branch name override (default: TEST_BRANCH, GIT_BRANCH, then git)')
    parser.add_argument('-k', '--default-key', type=str, metavar='TYPE', help='Type used when the branch has no "<type>/" prefix (default: feat)')
    parser.add_argument('--auto', action='store_true', help='Do not prompt; derive type and scope from the branch and message')
    parser.add_argument('--no-ticket', action='store_true', help='Do not embed the [TICKET] parsed from the branch')

    # Output options
    parser.add_argument('-n', '--dry-run', action='store_true', help='Print the result instead of writing the file (same as TEST=true)')
    parser.add_argument('--debug', action='store_true', help='Show intermediate values (same as DEBUG=true)')

    # Setup/config
    parser.add_argument('--display-config', action='store_true', help='Show current configuration')
    parser.add_argument('--install-hook', action='store_true', help='Install as the prepare-commit-msg hook of the current repository')
    parser.add_argument('--install-completion', action='store_true', help='Install shell tab completion')

    argcomplete.autocomplete(parser)
    args = parser.parse_args(argv)

    if not args.message_file and not (args.display_config or args.install_hook or args.install_completion):
        parser.error('the following arguments are required: message_file')

    return args
