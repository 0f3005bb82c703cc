"""Clover coverage synthesis into dense per-line coverage strings.

Usage:
    from unitnorm.coverage import synthesize

    coverage = synthesize(
        clover_xml,
        files_of_interest={"/repo/src/Foo.php": "/repo/tests/FooTest.php"},
        project_root="/repo",
    )
    coverage["src/Foo.php"]  # "NNCCUNN..."
"""

from unitnorm.coverage.clover import LineCounter, synthesize, synthesize_file
from unitnorm.coverage.lines import count_file_lines, count_lines
from unitnorm.coverage.models import (
    COVERED,
    MARKERS,
    NOT_EXECUTABLE,
    UNCOVERED,
    CoverageMap,
)

__all__ = [
    "COVERED",
    "MARKERS",
    "NOT_EXECUTABLE",
    "UNCOVERED",
    "CoverageMap",
    "LineCounter",
    "count_file_lines",
    "count_lines",
    "synthesize",
    "synthesize_file",
]
