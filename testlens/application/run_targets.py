"""
Run targets - where entries point in the source and how to run them.

Converts character offsets to line/column locations for display, and turns
module and test paths into test-runner filters and URLs.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from pathlib import PurePosixPath
from urllib.parse import quote

from ..config.models import RunnerConfig
from ..domain.models import TEST_SEPARATOR, SourceLocation

# Characters encodeURIComponent leaves alone besides alphanumerics
_URI_COMPONENT_SAFE = "-_.!~*'()"


@dataclass(frozen=True)
class RunTarget:
    """A runner filter plus the file name it applies to."""

    filter: str
    file_name: str


class LineIndex:
    """Maps character offsets of one text to zero-based line/column pairs."""

    def __init__(self, text: str) -> None:
        self._line_starts = [0]
        for index, char in enumerate(text):
            if char == "\n":
                self._line_starts.append(index + 1)
        self._length = len(text)

    def location(self, offset: int) -> SourceLocation:
        if offset < 0 or offset > self._length:
            raise ValueError(f"Offset {offset} is outside the text (0..{self._length})")
        line = bisect_right(self._line_starts, offset) - 1
        return SourceLocation(line=line, column=offset - self._line_starts[line])


def location_of(text: str, offset: int) -> SourceLocation:
    """Zero-based line and column of ``offset`` in ``text``."""
    return LineIndex(text).location(offset)


def _file_name(file_path: str) -> str:
    return PurePosixPath(file_path.replace("\\", "/")).name


def target_for_module(module_path: str, file_path: str) -> RunTarget:
    """Target running every test in a module (nested path included)."""
    return RunTarget(filter=module_path, file_name=_file_name(file_path))


def target_for_test(module_path: str, test_name: str, file_path: str) -> RunTarget:
    """Target running a single test, filtered by its full path."""
    return RunTarget(
        filter=f"{module_path}{TEST_SEPARATOR}{test_name}",
        file_name=_file_name(file_path),
    )


def build_runner_url(target: RunTarget, config: RunnerConfig | None = None) -> str:
    """
    Build the test-runner URL for a target.

    The query carries ``hidepassed`` (when enabled), then ``filter`` and
    ``file``, both percent-encoded the way ``encodeURIComponent`` does.
    """
    config = config or RunnerConfig()
    params = []
    if config.hide_passed:
        params.append("hidepassed")
    params.append(f"filter={quote(target.filter, safe=_URI_COMPONENT_SAFE)}")
    params.append(f"file={quote(target.file_name, safe=_URI_COMPONENT_SAFE)}")
    return f"{config.base_url}?{'&'.join(params)}"
