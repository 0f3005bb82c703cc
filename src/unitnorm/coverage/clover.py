"""Clover XML coverage synthesis.

Clover reports only list instrumented lines:

<coverage generated="...">
  <project timestamp="...">
    <file name="/path/to/Foo.php">
      <class name="Foo" .../>
      <line num="5" type="method" name="bar" count="1"/>
      <line num="6" type="stmt" count="1"/>
      <line num="9" type="stmt" count="0"/>
      <metrics .../>
    </file>
  </project>
</coverage>

Synthesis expands that into a dense string covering every line of the
source file, with gaps filled by N (see unitnorm.coverage.models).
Line types other than stmt (method, cond) are marked N.
"""

from __future__ import annotations

import os
import xml.etree.ElementTree as ET
from collections.abc import Callable, Container

from unitnorm.core.errors import CoverageParseError, EmptyCoverageError
from unitnorm.core.logging import get_logger
from unitnorm.coverage.lines import count_file_lines
from unitnorm.coverage.models import COVERED, NOT_EXECUTABLE, UNCOVERED, CoverageMap

logger = get_logger(__name__)

LineCounter = Callable[[str], int]

STATEMENT = "stmt"


def synthesize(
    raw: bytes | str,
    files_of_interest: Container[str],
    project_root: str,
    line_counter: LineCounter = count_file_lines,
) -> CoverageMap:
    """Build a CoverageMap from a Clover XML report.

    Args:
        raw: Clover XML document.
        files_of_interest: Absolute source paths to keep; all other
            <file> elements are skipped.
        project_root: Prefix stripped from paths to form map keys.
        line_counter: Returns the physical line count of a source file.

    Returns:
        CoverageMap keyed by project-relative path.

    Raises:
        EmptyCoverageError: If the document is empty.
        CoverageParseError: On invalid XML or line data beyond end of file.
    """
    if not raw or not raw.strip():
        raise EmptyCoverageError.create()

    try:
        root = ET.fromstring(raw)
    except ET.ParseError as e:
        raise CoverageParseError.invalid_xml(str(e)) from e

    prefix = project_root.rstrip(os.sep) + os.sep
    files: dict[str, str] = {}

    for file_elem in root.iter("file"):
        file_path = file_elem.get("name", "")
        if not file_path or file_path not in files_of_interest:
            continue

        markers = synthesize_file(file_elem, file_path, line_counter(file_path))
        key = file_path[len(prefix) :] if file_path.startswith(prefix) else file_path
        files[key] = markers

    logger.debug("coverage_synthesized", files=len(files))
    return CoverageMap(files)


def synthesize_file(file_elem: ET.Element, file_path: str, line_count: int) -> str:
    """Coverage string of length ``line_count`` for one <file> element."""
    markers: list[str] = []
    pos = 1

    for line in file_elem.iter("line"):
        num = _int_attr(line, "num", file_path)
        if num <= 0:
            raise CoverageParseError.invalid_attribute(file_path, "num", line.get("num"))
        if num > line_count:
            raise CoverageParseError.line_out_of_range(file_path, num, line_count)
        if num < pos:
            # Duplicate or out-of-order entry; the marker is already written.
            logger.debug("coverage_line_ignored", path=file_path, line=num)
            continue

        markers.append(NOT_EXECUTABLE * (num - pos))
        if line.get("type") != STATEMENT:
            markers.append(NOT_EXECUTABLE)
        elif _int_attr(line, "count", file_path) > 0:
            markers.append(COVERED)
        else:
            markers.append(UNCOVERED)
        pos = num + 1

    markers.append(NOT_EXECUTABLE * (line_count - pos + 1))
    return "".join(markers)


def _int_attr(elem: ET.Element, name: str, file_path: str) -> int:
    value = elem.get(name)
    if value is None and name == "count":
        return 0
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise CoverageParseError.invalid_attribute(file_path, name, value) from e
