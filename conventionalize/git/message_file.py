"""Commit Message File - Read and rewrite the file git hands to the hook."""

from dataclasses import dataclass, field
from pathlib import Path

COMMENT_CHAR = "#"
SCISSORS = "------------------------ >8 ------------------------"


class MessageFileError(Exception):
    """Raised when the commit message file cannot be read or written."""
    pass


@dataclass
class CommitMessage:
    """Draft message split into the subject line, the body and git's comments."""
    subject: str = ""
    body: list[str] = field(default_factory=list)
    comments: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.subject.strip()

    @classmethod
    def parse(cls, text: str) -> 'CommitMessage':
        lines = text.splitlines()
        # Everything below the scissors line (git commit -v) is kept verbatim
        cut = next((i for i, line in enumerate(lines) if line.startswith(COMMENT_CHAR) and SCISSORS in line), len(lines))
        lines, verbatim = lines[:cut], lines[cut:]
        comments = [line for line in lines if line.startswith(COMMENT_CHAR)] + verbatim
        content = [line for line in lines if not line.startswith(COMMENT_CHAR)]
        # Git leaves blank lines ahead of the comment block on "git commit" without -m
        while content and not content[-1].strip():
            content.pop()
        subject = content[0].strip() if content else ""
        return cls(subject=subject, body=content[1:], comments=comments)

    def with_subject(self, subject: str) -> 'CommitMessage':
        return CommitMessage(subject=subject, body=list(self.body), comments=list(self.comments))

    def render(self) -> str:
        """Full file contents: subject, body, then git's comment block."""
        lines = [self.subject, *self.body]
        if self.comments:
            lines.append("")
            lines.extend(self.comments)
        return '\n'.join(lines) + '\n'


def read_message(path: Path) -> CommitMessage:
    try:
        text = Path(path).read_text(encoding='utf-8')
    except OSError as e:
        raise MessageFileError(f"Could not read commit message file {path}: {e.strerror or e}")
    except UnicodeDecodeError as e:
        raise MessageFileError(
            f"Could not read commit message file {path}: not valid UTF-8 ({e.reason} at byte {e.start})"
        )
    return CommitMessage.parse(text)


def write_message(path: Path, message: CommitMessage) -> None:
    """Single truncating write; not atomic."""
    try:
        Path(path).write_text(message.render(), encoding='utf-8')
    except OSError as e:
        raise MessageFileError(f"Could not write commit message file {path}: {e.strerror or e}")
