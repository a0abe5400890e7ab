# core/settings.py
"""
Reader settings and their YAML configuration file.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import yaml
from cerberus import Validator

from core.exceptions import TouchstoneError

FrequencySelector = Callable[[float], bool]
ParameterSelector = Callable[..., bool]


# Cerberus schema for reader settings
SETTINGS_SCHEMA = {
    'frequency_range': {
        'type': 'list',
        'required': False,
        'minlength': 2,
        'maxlength': 2,
        'schema': {'type': 'float', 'coerce': float},
    },
}


@dataclass
class TouchstoneReaderSettings:
    """
    Attributes:
        frequency_selector: Predicate on the frequency of each data line (file units).
            None selects every line.
        parameter_selector: Reserved. Reading fails while it is set.
    """
    frequency_selector: Optional[FrequencySelector] = None
    parameter_selector: Optional[ParameterSelector] = None

    @classmethod
    def default(cls) -> "TouchstoneReaderSettings":
        return cls()


def frequency_range_selector(start: float, stop: float) -> FrequencySelector:
    """Selector accepting frequencies in the inclusive range [start, stop]."""
    low, high = sorted((start, stop))
    return lambda f: low <= f <= high


def load_reader_settings(path: Path) -> TouchstoneReaderSettings:
    """
    Load a YAML settings file, validate its schema, and return reader settings.

    Raises:
        TouchstoneError: If file read fails or schema validation fails.
    """
    try:
        raw = yaml.safe_load(Path(path).read_text()) or {}
    except Exception as e:
        raise TouchstoneError(f"Failed to read settings YAML '{path}': {e}")
    if not isinstance(raw, dict):
        raise TouchstoneError(f"Settings YAML '{path}' must contain a mapping")

    validator = Validator(SETTINGS_SCHEMA, allow_unknown=False)
    if not validator.validate(raw):
        raise TouchstoneError(f"Settings schema validation errors: {validator.errors}")
    doc: Dict[str, Any] = validator.document

    settings = TouchstoneReaderSettings.default()
    if doc.get('frequency_range'):
        settings.frequency_selector = frequency_range_selector(*doc['frequency_range'])
    return settings
