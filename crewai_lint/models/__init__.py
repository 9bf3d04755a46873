"""Data types for schemas and validation results."""

from .schema_types import (
    FieldDefinition,
    RecordSchema,
    Severity,
    ValidationError,
    ValidationResult,
    VersionedSchema,
)
