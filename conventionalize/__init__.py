"""
Conventionalize

Git prepare-commit-msg hook that rewrites draft messages as conventional commits.
"""

__version__ = "1.0.0"

# Centralized commit types - single source of truth
# Order is the order of the interactive type menu.
COMMIT_TYPES = {
    'fix': 'A bug fix',
    'feat': 'A new feature or capability',
    'build': 'Build system or external dependency changes',
    'chore': 'Maintenance tasks, dependencies, tooling',
    'ci': 'CI/CD configuration changes',
    'docs': 'Documentation only changes',
    'style': 'Formatting, whitespace, no code change',
    'refactor': 'Code restructuring without behavior change',
    'perf': 'Performance improvement',
    'test': 'Adding or updating tests',
}

# List of type names for validation and argparse
COMMIT_TYPE_NAMES = list(COMMIT_TYPES.keys())

# Branch prefixes that map onto a canonical type
BRANCH_KEY_ALIASES = {
    'task': 'feat',
    'feature': 'feat',
    'story': 'feat',
    'bug': 'fix',
    'bugfix': 'fix',
}

DEFAULT_BRANCH_KEY = 'feat'

# Note on breaking changes: "feat!:" or "feat(api)!:" marks a breaking change
