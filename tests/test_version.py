"""Tests for version comparison and the compatibility message."""

import pytest

from crewai_lint.exceptions import VersionError
from crewai_lint.models.schema_types import Severity
from crewai_lint.utils.version import check_version_compatibility, compare_versions, normalize_version


@pytest.mark.parametrize(
    "a, b, expected",
    [
        ("0.102.0", "0.102.0", 0),
        ("0.101.0", "0.102.0", -1),
        ("0.103.0", "0.102.0", 1),
        ("0.9.0", "0.10.0", -1),
        ("1.0", "1.0.0", 0),
        ("1.0.1", "1.0", 1),
    ],
)
def test_compare_versions(a, b, expected):
    assert compare_versions(a, b) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("0.102.5", "0.102.0"),
        ("0.9.2", "0.9.0"),
        ("v1.2.3", "1.2.0"),
        ("0.11", "0.11.0"),
    ],
)
def test_normalize_version(raw, expected):
    assert normalize_version(raw) == expected


def test_normalize_version_rejects_garbage():
    with pytest.raises(VersionError):
        normalize_version("latest")


def test_older_version_warns():
    result = check_version_compatibility("0.101.0")

    assert result.severity == Severity.WARNING
    assert result.message == "CrewAI version 0.101.0 is not supported. The earliest supported version is 0.102.0."


def test_newer_version_informs():
    result = check_version_compatibility("0.103.0")

    assert result.severity == Severity.INFO
    assert result.message == "Using CrewAI schema version 0.103.0"


def test_earliest_supported_version_is_silent():
    assert check_version_compatibility("0.102.0") is None


def test_missing_version_is_silent():
    assert check_version_compatibility(None) is None
