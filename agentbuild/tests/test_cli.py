"""Tests for the command-line entry point."""

import json

import pytest

from agentbuild.cli import main
from conftest import write


def _exit_code(argv) -> int:
    with pytest.raises(SystemExit) as exc:
        main(argv)
    return exc.value.code


def test_no_arguments_compiles_agents_and_skills(project, monkeypatch):
    monkeypatch.chdir(project)
    assert _exit_code([]) == 0
    assert (project / "agents" / "reviewer.md").is_file()
    assert (project / "agents" / "planner.md").is_file()
    assert (project / "skills" / "testing" / "SKILL.md").is_file()


def test_no_skills_flag(project):
    assert _exit_code(["--root", str(project), "--no-skills"]) == 0
    assert (project / "agents" / "reviewer.md").is_file()
    assert not (project / "skills").exists()


def test_single_file_only(project):
    source = project / "agent-partials" / "sources" / "planner.src.md"
    assert _exit_code([str(source), "--root", str(project)]) == 0
    assert [p.name for p in (project / "agents").iterdir()] == ["planner.md"]


def test_single_skill_only(project):
    skill = project / "agent-partials" / "skills" / "testing"
    assert _exit_code(["--skill", str(skill), "--root", str(project)]) == 0
    assert (project / "skills" / "testing" / "SKILL.md").is_file()
    assert not (project / "agents").exists()


def test_source_and_skill_together_rejected(project):
    assert _exit_code(["a.src.md", "--skill", "x", "--root", str(project)]) == 2


def test_missing_single_file_exits_nonzero(project, capsys):
    assert _exit_code([str(project / "nope.src.md"), "--root", str(project)]) == 1
    assert "nope.src.md" in capsys.readouterr().err


def test_missing_sources_dir_exits_nonzero(tmp_path):
    assert _exit_code(["--root", str(tmp_path)]) == 1


def test_include_diagnostics_do_not_fail_the_run(project, capsys):
    write(project / "agent-partials" / "sources" / "broken.src.md", "@include(missing.md)")
    assert _exit_code(["--root", str(project), "--no-skills"]) == 0
    assert (project / "agents" / "broken.md").read_text() == "@include(missing.md)"
    assert "missing.md" in capsys.readouterr().err


def test_directory_overrides(project):
    write(project / "alt" / "only.src.md", "alt source")
    code = _exit_code(["--root", str(project), "--sources-dir", "alt",
                       "--output-dir", "out", "--no-skills"])
    assert code == 0
    assert (project / "out" / "only.md").read_text() == "alt source"


def test_json_logs(project, capsys):
    assert _exit_code(["--root", str(project), "--json-logs"]) == 0
    events = [json.loads(l) for l in capsys.readouterr().out.splitlines() if l.strip()]
    batches = [e for e in events if e["event"] == "batch"]
    assert [b["kind"] for b in batches] == ["agents", "skills"]
    assert batches[0]["success"] == 2
    assert sum(1 for e in events if e["event"] == "compiled") == 3


def test_root_help_names_cwd_default(capsys):
    assert _exit_code(["--help"]) == 0
    assert "current working directory" in " ".join(capsys.readouterr().out.split())
