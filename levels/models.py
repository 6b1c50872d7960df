"""Value types shared by the template library, generator and catalog."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum


class Language(str, Enum):
    """Languages a level can be written in."""

    JAVASCRIPT = "javascript"
    PYTHON = "python"
    HTML = "html"
    CSS = "css"
    CPP = "cpp"
    JAVA = "java"
    RUST = "rust"
    GO = "go"
    SWIFT = "swift"
    PHP = "php"
    CSHARP = "csharp"
    RUBY = "ruby"
    TYPESCRIPT = "typescript"
    KOTLIN = "kotlin"
    SCALA = "scala"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


def count_lines(code: str) -> int:
    return len(code.split("\n"))


@dataclass(frozen=True)
class Level:
    """One playable exercise: a snippet plus the 1-based line holding the bug."""

    id: int
    language: Language
    difficulty: Difficulty
    title: str
    description: str
    code: str
    bug_line: int
    solution: str
    explanation: str

    def __post_init__(self):
        lines = count_lines(self.code)
        if not 1 <= self.bug_line <= lines:
            raise ValueError(
                f"level {self.id}: bug line {self.bug_line} outside 1..{lines}"
            )

    @property
    def lines(self) -> list[str]:
        return self.code.split("\n")

    def to_dict(self, include_answer: bool = True) -> dict:
        """Serialize with the camelCase keys the view layer expects."""
        d = asdict(self)
        d["language"] = self.language.value
        d["difficulty"] = self.difficulty.value
        d["bugLine"] = d.pop("bug_line")
        if not include_answer:
            for key in ("bugLine", "solution", "explanation"):
                d.pop(key)
        return d
