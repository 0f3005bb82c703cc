"""Coverage map model.

A coverage string holds one marker per physical source line, so that
character i (0-based) describes line i + 1:

- C: statement executed at least once
- U: statement never executed
- N: not a statement, or not instrumented at all
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

COVERED = "C"
UNCOVERED = "U"
NOT_EXECUTABLE = "N"

MARKERS = frozenset({COVERED, UNCOVERED, NOT_EXECUTABLE})


class CoverageMap(Mapping[str, str]):
    """Read-only mapping of project-relative path -> coverage string.

    Built once per run and shared by every result of that run.
    """

    __slots__ = ("_files",)

    def __init__(self, files: Mapping[str, str] | None = None) -> None:
        self._files: Mapping[str, str] = MappingProxyType(dict(files or {}))

    @classmethod
    def empty(cls) -> CoverageMap:
        """Coverage map for runs with coverage disabled."""
        return cls()

    def __getitem__(self, path: str) -> str:
        return self._files[path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._files)

    def __len__(self) -> int:
        return len(self._files)

    def __repr__(self) -> str:
        return f"CoverageMap({dict(self._files)!r})"

    def covered_lines(self, path: str) -> list[int]:
        """1-based line numbers executed at least once."""
        return [i for i, m in enumerate(self[path], start=1) if m == COVERED]

    def uncovered_lines(self, path: str) -> list[int]:
        """1-based statement lines never executed."""
        return [i for i, m in enumerate(self[path], start=1) if m == UNCOVERED]

    def line_rate(self, path: str) -> float:
        """Fraction of statement lines covered (0.0 to 1.0)."""
        markers = self[path]
        covered = markers.count(COVERED)
        statements = covered + markers.count(UNCOVERED)
        if statements == 0:
            return 0.0
        return covered / statements

    def to_dict(self) -> dict[str, str]:
        return dict(self._files)
