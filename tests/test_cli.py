"""Tests for the crewai-lint command line entry point."""

import json

import pytest

from crewai_lint.linter import run_lint

VALID_AGENTS = "researcher:\n  role: Researcher\n  goal: Find things\n  backstory: Curious\n"
VALID_TASKS = "research_task:\n  description: Research\n  expected_output: Notes\n  agent: researcher\n"


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    monkeypatch.setattr(run_lint, "configure_cli_logging", lambda **kwargs: None)


@pytest.fixture
def project(tmp_path):
    config = tmp_path / "src" / "crew" / "config"
    config.mkdir(parents=True)
    (config / "agents.yaml").write_text(VALID_AGENTS)
    (config / "tasks.yaml").write_text(VALID_TASKS)
    return tmp_path


def run(argv):
    with pytest.raises(SystemExit) as exc_info:
        run_lint.main(argv)
    return exc_info.value.code


def test_find_yaml_files_only_picks_recognized_names(project):
    (project / "crew.yaml").write_text("a: 1\n")

    found = run_lint.find_yaml_files([str(project)])

    assert sorted(p.name for p in found) == ["agents.yaml", "tasks.yaml"]


def test_valid_project_passes(project, capsys):
    assert run([str(project)]) == 0
    assert "Lint succeeded with no errors." in capsys.readouterr().out


def test_invalid_reference_fails(project, capsys):
    tasks = project / "src" / "crew" / "config" / "tasks.yaml"
    tasks.write_text(VALID_TASKS.replace("agent: researcher", "agent: ghost"))

    assert run([str(project)]) == 1

    out = capsys.readouterr().out
    assert "tasks.yaml:" in out
    assert "  ERROR:4: Agent 'ghost' referenced in task 'research_task' does not exist in agents.yaml" in out


def test_json_output(project, capsys):
    agents = project / "src" / "crew" / "config" / "agents.yaml"
    agents.write_text(VALID_AGENTS + "  max_iter: many\n")

    assert run([str(project), "--format", "json"]) == 0

    output = json.loads(capsys.readouterr().out)
    assert output["files"] == 2
    assert output["errors"] == 0
    assert output["warnings"] == 1
    warning = next(r for r in output["results"] if r["file"].endswith("agents.yaml"))["warnings"][0]
    assert warning["severity"] == "warning"
    assert warning["line"] == 4


def test_github_actions_output(project, capsys):
    agents = project / "src" / "crew" / "config" / "agents.yaml"
    agents.write_text("researcher:\n  role: Researcher\n  goal: Find things\n")

    assert run([str(project), "--format", "github-actions"]) == 1

    out = capsys.readouterr().out
    assert out.startswith(f"::error file={agents},line=1::CrewAI Lint: Missing required field: backstory")


def test_no_files_found(tmp_path, capsys):
    assert run([str(tmp_path)]) == 1
    assert "No agents.yaml or tasks.yaml files found." in capsys.readouterr().err


def test_unknown_detected_version_uses_bundled_schema(project, capsys):
    (project / "requirements.txt").write_text("crewai==0.101.3\n")

    assert run([str(project)]) == 0
    assert capsys.readouterr().err == ""


def test_explicit_schema_version(project, capsys):
    assert run([str(project), "--schema-version", "0.102.0"]) == 0
    assert capsys.readouterr().err == ""
