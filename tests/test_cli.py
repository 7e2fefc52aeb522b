"""
End-to-end tests for the prepare-commit-msg hook run.

Run with:
    pytest tests/test_cli.py -v
    pytest tests/test_cli.py -v -s   # see actual terminal output
"""

import io
import os
import re
import stat
import sys
from contextlib import contextmanager

import pytest

from conventionalize.cli import commands
from conventionalize.cli import main as cli_main
from conventionalize.cli import utils as cli_utils
from conventionalize.config import Config

ANSI_RE = re.compile(r'\033\[[0-9;]*m')

BRANCH = "feat/TEAM-123-foo-bar"


def _fake_terminal(attached):
    @contextmanager
    def _terminal_input():
        yield attached
    return _terminal_input


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Known environment: no DEBUG/TEST, fixed branch, config file ignored."""
    for name in ("DEBUG", "TEST", "GIT_BRANCH"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("TEST_BRANCH", BRANCH)
    monkeypatch.setattr(cli_main, "load_config", lambda: Config().apply_env(os.environ))


@pytest.fixture
def message_file(tmp_path):
    """Return a factory writing a draft message file."""
    def _make(text="add login flow\n"):
        path = tmp_path / "COMMIT_EDITMSG"
        path.write_text(text)
        return path
    return _make


@pytest.fixture
def terminal(monkeypatch):
    """Pretend a terminal is attached and answer prompts from a list."""
    def _answers(*replies):
        queue = list(replies)
        prompts = []
        monkeypatch.setattr(cli_main, "terminal_input", _fake_terminal(True))

        def _input(prompt=""):
            prompts.append(ANSI_RE.sub('', prompt))
            if not queue:
                raise EOFError
            return queue.pop(0)

        monkeypatch.setattr("builtins.input", _input)
        return prompts
    return _answers


# ---------------------------------------------------------------------------
# Automatic path
# ---------------------------------------------------------------------------

class TestAutomatic:

    def test_rewrites_file(self, message_file):
        path = message_file()
        assert cli_main.main([str(path), "message", "--auto"]) == 0
        assert path.read_text() == "feat: [TEAM-123] add login flow\n"

    def test_dry_run_flag_prints(self, message_file, capsys):
        path = message_file()
        assert cli_main.main([str(path), "message", "--auto", "--dry-run"]) == 0
        assert capsys.readouterr().out == "feat: [TEAM-123] add login flow\n"
        assert path.read_text() == "add login flow\n"

    def test_test_env_prints(self, message_file, capsys, monkeypatch):
        monkeypatch.setenv("TEST", "true")
        path = message_file()
        assert cli_main.main([str(path), "--auto"]) == 0
        assert capsys.readouterr().out == "feat: [TEAM-123] add login flow\n"

    def test_branch_flag_beats_env(self, message_file):
        path = message_file("(api) add endpoint\n")
        assert cli_main.main([str(path), "--auto", "--branch", "bugfix/OPS-9-x"]) == 0
        assert path.read_text() == "fix(api): [OPS-9] add endpoint\n"

    def test_no_ticket(self, message_file):
        path = message_file()
        assert cli_main.main([str(path), "--auto", "--no-ticket"]) == 0
        assert path.read_text() == "feat: add login flow\n"

    def test_default_key_for_flat_branch(self, message_file, monkeypatch):
        monkeypatch.setenv("TEST_BRANCH", "develop")
        path = message_file()
        assert cli_main.main([str(path), "--auto", "--default-key", "chore"]) == 0
        assert path.read_text() == "chore: add login flow\n"

    def test_body_and_comments_preserved(self, message_file):
        path = message_file("add login flow\n\nUses OAuth.\n\n# Please enter the commit message\n")
        assert cli_main.main([str(path), "template", "--auto"]) == 0
        assert path.read_text() == (
            "feat: [TEAM-123] add login flow\n\nUses OAuth.\n\n# Please enter the commit message\n"
        )

    def test_debug_output(self, message_file, capsys):
        path = message_file()
        assert cli_main.main([str(path), "--auto", "--debug", "--dry-run"]) == 0
        out = capsys.readouterr().out
        assert f"branch = {BRANCH}" in out
        assert "ticket = TEAM-123" in out
        assert out.endswith("feat: [TEAM-123] add login flow\n")


# ---------------------------------------------------------------------------
# Early exits
# ---------------------------------------------------------------------------

class TestEarlyExit:

    def test_already_conventional(self, message_file, capsys):
        path = message_file("feat: [TEAM-1] already done\n")
        assert cli_main.main([str(path), "message", "--auto"]) == 0
        assert path.read_text() == "feat: [TEAM-1] already done\n"
        assert capsys.readouterr().out == ""

    def test_conventional_without_ticket_is_rewritten(self, message_file):
        path = message_file("feat: not yet annotated\n")
        assert cli_main.main([str(path), "message", "--auto"]) == 0
        assert path.read_text() == "feat: [TEAM-123] not yet annotated\n"

    @pytest.mark.parametrize("source", ["merge", "squash"])
    def test_skipped_sources(self, message_file, source):
        path = message_file("Merge branch 'main'\n")
        assert cli_main.main([str(path), source, "--auto"]) == 0
        assert path.read_text() == "Merge branch 'main'\n"

    def test_empty_draft_left_to_editor(self, message_file):
        text = "\n# Please enter the commit message\n"
        path = message_file(text)
        assert cli_main.main([str(path), "--auto"]) == 0
        assert path.read_text() == text

    def test_missing_file(self, tmp_path, capsys):
        assert cli_main.main([str(tmp_path / "missing"), "--auto"]) == 1
        assert "Could not read" in capsys.readouterr().err

    def test_undecodable_file(self, tmp_path, capsys):
        path = tmp_path / "COMMIT_EDITMSG"
        path.write_bytes(b"add \xff\xfe thing\n")
        assert cli_main.main([str(path), "message", "--auto"]) == 1
        assert "not valid UTF-8" in capsys.readouterr().err
        assert path.read_bytes() == b"add \xff\xfe thing\n"

    def test_message_file_required(self, capsys):
        with pytest.raises(SystemExit) as exc:
            cli_main.main([])
        assert exc.value.code == 2


# ---------------------------------------------------------------------------
# Interactive path
# ---------------------------------------------------------------------------

class TestInteractive:

    def test_accept_writes_file(self, message_file, terminal):
        path = message_file()
        prompts = terminal("2", "auth", "n", "y")
        assert cli_main.main([str(path), "message"]) == 0
        assert path.read_text() == "fix(auth): [TEAM-123] add login flow\n"
        assert prompts[0].startswith("1) feat\n2) fix")
        assert prompts[-1] == "Ready to commit: 'fix(auth): [TEAM-123] add login flow' [yn]? "

    def test_decline_aborts_commit(self, message_file, terminal):
        path = message_file()
        terminal("1", "", "y", "n")
        assert cli_main.main([str(path), "message"]) == 1
        assert path.read_text() == "add login flow\n"

    def test_eof_aborts_commit(self, message_file, terminal):
        path = message_file()
        terminal("1")
        assert cli_main.main([str(path), "message"]) == 1
        assert path.read_text() == "add login flow\n"

    def test_invalid_choice_asks_again(self, message_file, terminal, capsys):
        path = message_file()
        prompts = terminal("99", "3", "", "n", "y")
        assert cli_main.main([str(path), "message"]) == 0
        assert path.read_text() == "build: [TEAM-123] add login flow\n"
        assert len(prompts) == 5
        assert "Enter 1-10 or a type name" in capsys.readouterr().out

    def test_dry_run_prints_result(self, message_file, terminal, capsys):
        path = message_file()
        terminal("", "", "y", "y")
        assert cli_main.main([str(path), "message", "--dry-run"]) == 0
        assert capsys.readouterr().out.endswith("feat!: [TEAM-123] add login flow\n")
        assert path.read_text() == "add login flow\n"

    def test_prose_before_colon_kept(self, message_file, terminal):
        path = message_file("add login: handle timeout\n")
        terminal("feat", "", "n", "y")
        assert cli_main.main([str(path), "message"]) == 0
        assert path.read_text() == "feat: [TEAM-123] add login: handle timeout\n"

    def test_declined_breaking_drops_draft_mark(self, message_file, terminal):
        path = message_file("!drop v1\n")
        terminal("1", "", "n", "y")
        assert cli_main.main([str(path), "message", "--branch", "feat/cleanup"]) == 0
        assert path.read_text() == "feat: drop v1\n"

    def test_no_terminal_falls_back_to_automatic(self, message_file, monkeypatch):
        monkeypatch.setattr(cli_main, "terminal_input", _fake_terminal(False))
        path = message_file()
        assert cli_main.main([str(path), "message"]) == 0
        assert path.read_text() == "feat: [TEAM-123] add login flow\n"


# ---------------------------------------------------------------------------
# Terminal attachment
# ---------------------------------------------------------------------------

class FakeTty(io.StringIO):
    def isatty(self):
        return True


class TestTerminalInput:

    @pytest.fixture
    def detached(self, monkeypatch):
        """stdin as git leaves it for hooks: not a terminal."""
        stdin = io.StringIO()
        monkeypatch.setattr(sys, "stdin", stdin)
        return stdin

    def test_reopens_tty_and_closes_it(self, detached, monkeypatch):
        opened = []

        def _open(path, *args, **kwargs):
            opened.append(FakeTty("y\n"))
            assert path == cli_utils.TTY_PATH
            return opened[-1]

        monkeypatch.setattr(cli_utils, "open", _open, raising=False)
        with cli_utils.terminal_input() as attached:
            assert attached is True
            assert sys.stdin is opened[0]
            assert input() == "y"
        assert sys.stdin is detached
        assert opened[0].closed

    def test_restores_stdin_on_error(self, detached, monkeypatch):
        tty = FakeTty()
        monkeypatch.setattr(cli_utils, "open", lambda *a, **kw: tty, raising=False)
        with pytest.raises(KeyboardInterrupt):
            with cli_utils.terminal_input():
                raise KeyboardInterrupt
        assert sys.stdin is detached
        assert tty.closed

    def test_no_tty_yields_false(self, detached, monkeypatch):
        def _open(*args, **kwargs):
            raise OSError(6, "No such device or address")

        monkeypatch.setattr(cli_utils, "open", _open, raising=False)
        with cli_utils.terminal_input() as attached:
            assert attached is False
            assert sys.stdin is detached

    def test_interactive_stdin_used_as_is(self, monkeypatch):
        stdin = FakeTty()
        monkeypatch.setattr(sys, "stdin", stdin)
        monkeypatch.setattr(cli_utils, "open", lambda *a, **kw: pytest.fail("tty reopened"), raising=False)
        with cli_utils.terminal_input() as attached:
            assert attached is True
            assert sys.stdin is stdin
        assert not stdin.closed


# ---------------------------------------------------------------------------
# Hook installation
# ---------------------------------------------------------------------------

class TestInstallHook:

    @pytest.fixture
    def hooks_dir(self, tmp_path, monkeypatch):
        hooks = tmp_path / "hooks"
        monkeypatch.setattr(commands, "_hooks_dir", lambda: hooks)
        return hooks

    def test_installs_executable_hook(self, hooks_dir):
        assert cli_main.main(["--install-hook"]) == 0
        hook = hooks_dir / commands.HOOK_NAME
        assert commands.HOOK_MARKER in hook.read_text()
        assert hook.stat().st_mode & stat.S_IXUSR

    def test_reinstall_over_own_hook(self, hooks_dir):
        assert cli_main.main(["--install-hook"]) == 0
        assert cli_main.main(["--install-hook"]) == 0

    def test_refuses_foreign_hook(self, hooks_dir, capsys):
        hooks_dir.mkdir()
        hook = hooks_dir / commands.HOOK_NAME
        hook.write_text("#!/bin/sh\necho custom\n")
        assert cli_main.main(["--install-hook"]) == 1
        assert hook.read_text() == "#!/bin/sh\necho custom\n"
        assert "not overwriting" in capsys.readouterr().err


class TestDisplayConfig:

    def test_shows_settings(self, capsys, monkeypatch):
        monkeypatch.setattr(commands, "load_config", lambda: Config())
        assert cli_main.main(["--display-config"]) == 0
        out = ANSI_RE.sub('', capsys.readouterr().out)
        assert "default_branch_key: feat" in out
        assert "TEST_BRANCH=" in out
