"""Tests for source locations and test-runner targets."""

import pytest

from testlens.application.run_targets import (
    LineIndex,
    RunTarget,
    build_runner_url,
    location_of,
    target_for_module,
    target_for_test,
)
from testlens.config.models import RunnerConfig
from testlens.domain.models import SourceLocation


class TestLineIndex:
    """Test offset to line/column conversion."""

    @pytest.fixture
    def text(self):
        return "module('A');\n\n  test('b');\n"

    @pytest.mark.parametrize(
        "offset, line, column",
        [(0, 0, 0), (7, 0, 7), (13, 1, 0), (16, 2, 2), (27, 3, 0)],
    )
    def test_locations(self, text, offset, line, column):
        assert LineIndex(text).location(offset) == SourceLocation(
            line=line, column=column
        )

    def test_offset_out_of_range(self, text):
        index = LineIndex(text)

        with pytest.raises(ValueError):
            index.location(-1)
        with pytest.raises(ValueError):
            index.location(len(text) + 1)

    def test_location_of(self):
        assert location_of("a\nbc", 3) == SourceLocation(line=1, column=1)


class TestRunTargets:
    """Test filters and URLs for modules and single tests."""

    def test_module_target(self):
        target = target_for_module("Acceptance | login", "tests/acceptance/login-test.js")

        assert target == RunTarget(
            filter="Acceptance | login", file_name="login-test.js"
        )

    def test_test_target(self):
        target = target_for_test("A > B", "renders", "C:\\app\\tests\\b-test.gjs")

        assert target.filter == "A > B: renders"
        assert target.file_name == "b-test.gjs"

    def test_runner_url(self):
        target = target_for_test("A > B", "it's done", "tests/b-test.js")

        url = build_runner_url(target)

        assert url == (
            "http://localhost:4200/tests?hidepassed"
            "&filter=A%20%3E%20B%3A%20it's%20done&file=b-test.js"
        )

    def test_runner_url_without_hide_passed(self):
        config = RunnerConfig(base_url="https://ci.example.com/tests?", hide_passed=False)

        url = build_runner_url(target_for_module("M", "m-test.js"), config)

        assert url == "https://ci.example.com/tests?filter=M&file=m-test.js"

    def test_runner_url_encodes_unicode(self):
        url = build_runner_url(target_for_module("café", "m-test.js"))

        assert "filter=caf%C3%A9" in url
