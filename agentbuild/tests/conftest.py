"""Shared pytest fixtures for compiler tests."""

import io
import json
import sys

import pytest

from agentbuild.core.config import CompileConfig
from agentbuild.core.logger import CompileLogger
from agentbuild.orchestrator.runner import CompileRunner


def write(path, content: str):
    """Create parents and write UTF-8 text without newline translation."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content.encode("utf-8"))
    return path


def capture_json_lines(fn):
    """Run fn with stdout captured, return the parsed JSON lines."""
    old_stdout = sys.stdout
    sys.stdout = buf = io.StringIO()
    try:
        fn()
    finally:
        sys.stdout = old_stdout
    lines = [l for l in buf.getvalue().strip().split("\n") if l.strip()]
    return [json.loads(l) for l in lines]


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    monkeypatch.delenv("AGENTBUILD_ROOT", raising=False)
    monkeypatch.delenv("AGENTBUILD_JSON_LOGS", raising=False)


@pytest.fixture
def project(tmp_path):
    """Project root with the default agent-partials layout.

    agent-partials/
      sources/reviewer.src.md   → includes ../shared/rules.md
      sources/planner.src.md    → no includes
      sources/notes.txt
      shared/rules.md           → includes conventions/naming.md
      shared/conventions/naming.md
      skills/testing/src.md     → includes ../../shared/rules.md
      skills/empty/             (no src.md)
    """
    partials = tmp_path / "agent-partials"
    write(partials / "sources" / "reviewer.src.md",
          "# Reviewer\n\n@include(../shared/rules.md)\n")
    write(partials / "sources" / "planner.src.md", "# Planner\n\nPlan first.\n")
    write(partials / "sources" / "notes.txt", "@include(../shared/rules.md)\n")
    write(partials / "shared" / "rules.md", "## Rules\n@include(conventions/naming.md)")
    write(partials / "shared" / "conventions" / "naming.md", "Use snake_case.")
    write(partials / "skills" / "testing" / "src.md",
          "---\nname: testing\n---\n@include(../../shared/rules.md)\n")
    (partials / "skills" / "empty").mkdir(parents=True)
    return tmp_path


@pytest.fixture
def config(project):
    return CompileConfig.from_root(str(project))


@pytest.fixture
def json_logger():
    return CompileLogger(json_logs=True)


@pytest.fixture
def runner(config, json_logger):
    return CompileRunner(config, json_logger)
