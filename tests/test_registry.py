"""Tests for the versioned schema registry."""

import pytest

from crewai_lint.exceptions import SchemaError
from crewai_lint.models.schema_types import RecordSchema, Severity, VersionedSchema
from crewai_lint.schema.registry import SchemaRegistry, load_default_schemas
from crewai_lint.schema.versions import SCHEMA_BUNDLES, v0_102_0


def make_schema(version, agent_required=("role",), task_required=("description",)):
    return VersionedSchema(
        version=version,
        agent_schema=RecordSchema(required_fields=agent_required),
        task_schema=RecordSchema(required_fields=task_required),
    )


def test_default_registry_contains_bundled_versions():
    registry = load_default_schemas()

    assert registry.get_available_versions() == sorted(SCHEMA_BUNDLES)
    assert "0.102.0" in registry.get_available_versions()
    assert registry.get_current_schema().version == "0.102.0"


def test_latest_is_highest_version():
    registry = SchemaRegistry()
    for version in ["0.102.0", "0.110.0", "0.99.0"]:
        registry.register_schema(make_schema(version))

    assert registry.get_current_schema().version == "0.110.0"


def test_latest_compares_numerically():
    registry = SchemaRegistry()
    registry.register_schema(make_schema("0.10.0"))
    registry.register_schema(make_schema("0.9.0"))

    assert registry.get_current_schema().version == "0.10.0"


def test_selected_version_is_used():
    registry = SchemaRegistry()
    registry.register_schema(make_schema("0.102.0"))
    registry.register_schema(make_schema("0.103.0"))

    registry.set_current_version("0.102.0")

    assert registry.current_version == "0.102.0"
    assert registry.get_current_schema().version == "0.102.0"


def test_unknown_version_falls_back_to_latest():
    registry = SchemaRegistry()
    registry.register_schema(make_schema("0.102.0"))
    registry.register_schema(make_schema("0.103.0"))

    registry.set_current_version("non-existent-version")

    assert registry.current_version == "non-existent-version"
    assert registry.get_current_schema().version == "0.103.0"


def test_available_versions_exclude_latest_alias():
    registry = SchemaRegistry()
    registry.register_schema(make_schema("0.103.0"))
    registry.register_schema(make_schema("0.102.0"))

    assert registry.get_available_versions() == ["0.102.0", "0.103.0"]


def test_reregistering_a_version_overwrites():
    registry = SchemaRegistry()
    registry.register_schema(make_schema("0.102.0", agent_required=("role",)))
    registry.register_schema(make_schema("0.102.0", agent_required=("goal",)))

    assert registry.get_available_versions() == ["0.102.0"]
    assert registry.get_current_schema().agent_schema.required_fields == ("goal",)


def test_latest_cannot_be_registered_directly():
    with pytest.raises(SchemaError):
        SchemaRegistry().register_schema(make_schema("latest"))


def test_empty_registry():
    registry = SchemaRegistry()

    assert registry.get_current_schema() is None
    assert registry.get_available_versions() == []

    for result in (registry.validate_agent({}), registry.validate_task({})):
        assert not result.valid
        assert result.errors[0].field == ""
        assert "No schema available" in result.errors[0].message
        assert result.errors[0].severity == Severity.ERROR


def test_validate_prefixes_messages():
    registry = SchemaRegistry()
    registry.register_schema(make_schema("0.102.0"))

    agent_result = registry.validate_agent({})
    task_result = registry.validate_task({})

    assert [e.message for e in agent_result.errors] == ["CrewAI Lint: Missing required field: role"]
    assert [e.message for e in task_result.errors] == ["CrewAI Lint: Missing required field: description"]


def test_validate_delegates_to_current_schema(registry):
    valid_agent = {"role": "r", "goal": "g", "backstory": "b"}

    assert registry.validate_agent(valid_agent).valid
    assert registry.validate_task({"description": "d", "expected_output": "e"}).valid


def test_failing_bundle_is_skipped(caplog):
    def broken():
        raise RuntimeError("boom")

    registry = SchemaRegistry()
    registry.load_bundles({"0.101.0": broken, v0_102_0.VERSION: v0_102_0.build_schema})

    assert registry.get_available_versions() == ["0.102.0"]
    assert "Error loading schema for version 0.101.0" in caplog.text


def test_bundle_with_mismatched_version_is_skipped():
    registry = SchemaRegistry()
    registry.load_bundles({"0.200.0": v0_102_0.build_schema})

    assert registry.get_available_versions() == []


def test_set_version_from_workspace(tmp_path):
    (tmp_path / "requirements.txt").write_text("crewai==0.102.5\n")
    registry = load_default_schemas()

    registry.set_version_from_workspace(tmp_path)

    assert registry.current_version == "0.102.0"
    assert registry.get_current_schema().version == "0.102.0"


def test_set_version_from_workspace_without_manifest(tmp_path):
    registry = load_default_schemas(current_version="0.102.0")

    registry.set_version_from_workspace(tmp_path)

    assert registry.current_version == "latest"


def test_schema_for_record_kind():
    schema = v0_102_0.build_schema()

    assert schema.schema_for("agent") is schema.agent_schema
    assert schema.schema_for("task") is schema.task_schema
    with pytest.raises(ValueError):
        schema.schema_for("crew")
