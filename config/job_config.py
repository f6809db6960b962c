"""Job configuration loaded from a JSON file."""
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from processor.errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass
class Entry:
    """One conversion job: a vCard directory and an output directory."""
    input: str
    output: str
    remove_files: bool


@dataclass
class Config:
    """List of conversion jobs."""
    entries: List[Entry] = field(default_factory=list)

    @classmethod
    def from_file(cls, filename: str) -> 'Config':
        """
        Load configuration from a JSON file.

        Expected shape::

            {"entries": [{"input": "...", "output": "...", "remove_files": true}]}

        Raises:
            ConfigError: If the file cannot be read or has the wrong shape
        """
        try:
            with open(filename, encoding='utf-8') as f:
                data = json.load(f)
        except OSError as e:
            raise ConfigError(f"could not read {filename}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"invalid JSON in {filename}: {e}") from e

        config = cls.from_dict(data)
        logger.info(f"Loaded {len(config.entries)} entries from {filename}")
        return config

    @classmethod
    def from_dict(cls, data: Any) -> 'Config':
        if not isinstance(data, dict) or not isinstance(data.get('entries'), list):
            raise ConfigError('expected an object with an "entries" list')
        return cls(entries=[_parse_entry(i, item) for i, item in enumerate(data['entries'])])


def _parse_entry(index: int, item: Dict[str, Any]) -> Entry:
    if not isinstance(item, dict):
        raise ConfigError(f"entry {index} is not an object")

    for key, expected in (('input', str), ('output', str), ('remove_files', bool)):
        if key not in item:
            raise ConfigError(f'entry {index} is missing "{key}"')
        if not isinstance(item[key], expected):
            raise ConfigError(
                f'entry {index}: "{key}" must be of type {expected.__name__}'
            )

    return Entry(
        input=item['input'],
        output=item['output'],
        remove_files=item['remove_files']
    )
