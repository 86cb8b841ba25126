"""Global fixtures and utilities for the testlens test suite.

This module provides common fixtures used across all test modules: a shared
parser, an extraction use case with default configuration, and helpers that
write JavaScript test files into a temporary project.
"""

import logging

import pytest

from testlens.adapters.io.enhanced_logging import LoggerManager
from testlens.adapters.parsing.js_parser import TreeSitterJsParser
from testlens.application.extract_usecase import ExtractUseCase
from testlens.domain.models import FileVariant


# ================================================================================
# Parsing Fixtures
# ================================================================================


@pytest.fixture(scope="session")
def parser():
    """Return a strict tree-sitter parser shared by the whole session."""
    return TreeSitterJsParser()


@pytest.fixture
def use_case():
    """Return an extraction use case with default configuration."""
    return ExtractUseCase()


@pytest.fixture
def extract_script(use_case):
    """Extract from JavaScript text through the structural path."""

    def _extract(text):
        return use_case.extract(text, FileVariant.SCRIPT)

    return _extract


@pytest.fixture
def extract_template(use_case):
    """Extract from Glimmer text through the pattern-matching path."""

    def _extract(text):
        return use_case.extract(text, FileVariant.TEMPLATE)

    return _extract


# ================================================================================
# Project Fixtures
# ================================================================================


NESTED_SUITE = """import { module, test } from 'qunit';

module('Acceptance | login', function (hooks) {
  test('visiting /login', async function (assert) {
    assert.ok(true);
  });

  module('with a session', function () {
    test('redirects home', function (assert) {
      assert.ok(true);
    });
  });
});
"""

GLIMMER_SUITE = """import { module, test } from 'qunit';
import { render } from '@ember/test-helpers';

module('Integration | Component | greeting', function (hooks) {
  test('it renders', async function (assert) {
    await render(<template><Greeting @name="World" /></template>);
    assert.dom().hasText('Hello World');
  });
});
"""


@pytest.fixture
def nested_suite_text():
    """Return a QUnit-style suite with one nested module."""
    return NESTED_SUITE


@pytest.fixture
def glimmer_suite_text():
    """Return a Glimmer component test embedding <template> markup."""
    return GLIMMER_SUITE


@pytest.fixture
def sample_project(tmp_path):
    """Create a small front-end project with script and Glimmer tests."""
    project = tmp_path / "app"
    (project / "tests" / "acceptance").mkdir(parents=True)
    (project / "tests" / "integration").mkdir(parents=True)
    (project / "node_modules" / "qunit").mkdir(parents=True)

    (project / "tests" / "acceptance" / "login-test.js").write_text(NESTED_SUITE)
    (project / "tests" / "integration" / "greeting-test.gjs").write_text(
        GLIMMER_SUITE
    )
    (project / "tests" / "helpers.js").write_text("export function setup() {}\n")
    (project / "node_modules" / "qunit" / "qunit-test.js").write_text(
        "test('ignored', function () {});\n"
    )
    return project


# ================================================================================
# Logging
# ================================================================================


@pytest.fixture(autouse=True)
def reset_logging():
    """Let each test configure logging from scratch."""
    root_logger = logging.getLogger()
    level = root_logger.level
    handlers = list(root_logger.handlers)
    LoggerManager.reset()
    yield
    LoggerManager.reset()
    root_logger.setLevel(level)
    for handler in list(root_logger.handlers):
        if handler not in handlers:
            root_logger.removeHandler(handler)
