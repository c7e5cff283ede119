from dataclasses import dataclass, field
from enum import StrEnum


class LineKind(StrEnum):
    CONTEXT = " "
    ADDED = "+"
    REMOVED = "-"


@dataclass(frozen=True)
class HunkLine:
    kind: LineKind
    text: str = ""

    @property
    def in_original(self) -> bool:
        return self.kind is not LineKind.ADDED

    @property
    def in_new(self) -> bool:
        return self.kind is not LineKind.REMOVED


@dataclass(frozen=True)
class Hunk:
    """
    One contiguous changed region of a single-file diff.

    Line numbers are 1-indexed, as in a unified diff header
    (`@@ -orig_start_line,orig_line_count +new_start_line,new_line_count @@`).
    """

    orig_start_line: int
    orig_line_count: int
    new_start_line: int
    new_line_count: int
    body: tuple[HunkLine, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if self.orig_line_count < 0 or self.new_line_count < 0:
            raise ValueError(f"{self.header} has a negative line count")

    @property
    def orig_end_line(self) -> int:
        return self.orig_start_line + self.orig_line_count

    @property
    def new_end_line(self) -> int:
        return self.new_start_line + self.new_line_count

    @property
    def line_delta(self) -> int:
        return self.new_end_line - self.orig_end_line

    @property
    def header(self) -> str:
        return (
            f"@@ -{self.orig_start_line},{self.orig_line_count} "
            f"+{self.new_start_line},{self.new_line_count} @@"
        )
