"""
CodeWriter - indented line accumulator used by the section emitters.
"""

from typing import List


class CodeWriter:
    """Simple indented string accumulator."""

    INDENT = "    "

    def __init__(self, indent: int = 0):
        self._lines: List[str] = []
        self._indent = indent

    def writeln(self, line: str = "") -> "CodeWriter":
        if line:
            self._lines.append(self.INDENT * self._indent + line)
        else:
            self._lines.append("")
        return self

    def blank(self) -> "CodeWriter":
        return self.writeln()

    def comment(self, text: str) -> "CodeWriter":
        return self.writeln(f"# {text}")

    def push(self) -> "CodeWriter":
        self._indent += 1
        return self

    def pop(self) -> "CodeWriter":
        self._indent = max(0, self._indent - 1)
        return self

    def block(self, text: str) -> "CodeWriter":
        """Write pre-formatted text line by line; blank lines pass through as-is."""
        for line in text.split("\n"):
            if line.strip():
                self.writeln(line)
            else:
                self._lines.append(line)
        return self

    def result(self) -> str:
        return "\n".join(self._lines)
