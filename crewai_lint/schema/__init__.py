"""Schema definitions, validation and version registry.

This package does not depend on the linter or the language server so that
record validation can be used on its own.
"""

from .validator import create_validator, is_valid_type
from .registry import SchemaRegistry, load_default_schemas
