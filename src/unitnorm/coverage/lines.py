"""File-backed line counting for coverage synthesis."""

from pathlib import Path


def count_lines(data: bytes) -> int:
    """Count physical lines: every newline ends one, plus any unterminated tail."""
    if not data:
        return 0
    return data.count(b"\n") + (0 if data.endswith(b"\n") else 1)


def count_file_lines(path: str) -> int:
    """Line count of the source file at ``path``.

    Raises:
        OSError: If the file cannot be read.
    """
    return count_lines(Path(path).read_bytes())
