"""
JSON schema validation for persisted gallery state.
"""

import json
import jsonschema
from typing import Dict, Any, List
from pathlib import Path

from core.gallery_state import OPACITY_RANGE, SCALAR_RANGE


class StateValidator:
    """Validates persisted gallery state against the defined schema."""

    def __init__(self):
        self.schema = None
        self.validator = None
        self._load_schema()

    def _load_schema(self):
        """Load the state schema from JSON file."""
        schema_path = Path(__file__).parent / "state_schema.json"
        try:
            with open(schema_path, 'r') as f:
                self.schema = json.load(f)
            self.validator = jsonschema.Draft7Validator(self.schema)
        except (OSError, json.JSONDecodeError) as e:
            raise RuntimeError(f"Failed to load state schema: {e}")

    def validate_state(self, state: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate a state mapping against the schema.

        Args:
            state: State dictionary to validate

        Returns:
            Validation result with valid flag and any errors
        """
        errors = sorted(self.validator.iter_errors(state), key=lambda e: [str(p) for p in e.path])
        if errors:
            first = errors[0]
            return {
                'valid': False,
                'errors': [e.message for e in errors],
                'error_path': list(first.path)
            }

        return {
            'valid': True,
            'errors': [],
            'warnings': self._range_warnings(state)
        }

    def _range_warnings(self, state: Dict[str, Any]) -> List[str]:
        """Values that load fine but get clamped into range."""
        warnings = []
        for name, (low, high) in (('opacity', OPACITY_RANGE), ('scalar', SCALAR_RANGE)):
            value = state.get(name)
            if value is not None and not low <= value <= high:
                warnings.append(f"{name} {value} is outside {low}..{high} and will be clamped")
        return warnings

    def get_schema_info(self) -> Dict[str, Any]:
        """Get information about the state schema."""
        if not self.schema:
            return {}

        return {
            'title': self.schema.get('title', 'Unknown'),
            'description': self.schema.get('description', ''),
            'fields': sorted(self.schema.get('properties', {}))
        }


_validator = None


def _get_validator() -> StateValidator:
    global _validator
    if _validator is None:
        _validator = StateValidator()
    return _validator


def validate_state(state: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate a single state mapping.

    Args:
        state: State dictionary to validate

    Returns:
        Validation result
    """
    return _get_validator().validate_state(state)


def get_state_schema() -> Dict[str, Any]:
    """Get the state schema dictionary."""
    return _get_validator().schema
