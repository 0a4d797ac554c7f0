"""Configuration for the sensitive word engine.

Configuration can be built in code, from a mapping, from a YAML file or
from environment variables.

Example YAML configuration:

    sensitive:
      cache: true
      cache_key: chat-words
      replace_code: "*"
      disturbs: "*&^ "
      words: ["笨蛋", "sb"]
      file:
        - /etc/sensitive/words.txt
"""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Union

import yaml

_TRUE_VALUES = {"1", "true", "yes", "on"}


def parse_disturbs(value: Union[str, Iterable[str], None]) -> Optional[list[str]]:
    """Normalize a disturb setting to a list of unique single characters.

    A string is split into its characters. Duplicates and empty entries are
    dropped, keeping first-seen order.

    Raises:
        ValueError: If a sequence element is longer than one character.
    """
    if value is None:
        return None

    result: list[str] = []
    for char in value:
        if not isinstance(char, str):
            raise ValueError(f"Disturb must be a string, got {type(char).__name__}")
        if len(char) > 1:
            raise ValueError(f"Disturb must be a single character, got {char!r}")
        if char and char not in result:
            result.append(char)
    return result


def validate_replace_code(value: Any) -> str:
    """Check a replacement unit is a non-empty string.

    An empty unit would delete matched text instead of masking it.

    Raises:
        ValueError: If the value is not a string or is empty.
    """
    if not isinstance(value, str):
        raise ValueError(f"replace_code must be a string, got {type(value).__name__}")
    if not value:
        raise ValueError("replace_code cannot be empty")
    return value


@dataclass
class SensitiveConfig:
    """Engine configuration.

    Attributes:
        cache: Whether to persist the trie through a cache backend.
        cache_class: Cache class or import path. None uses FileCache.
        cache_key: Key the trie is cached under. None derives a stable key.
        replace_code: Replacement unit for filtering. None means "*".
        disturbs: Characters ignored while matching.
        words: Inline sensitive words.
        file: One or more word-list files, one word per line.
    """

    cache: bool = False
    cache_class: Union[str, type, None] = None
    cache_key: Optional[str] = None
    replace_code: Optional[str] = None
    disturbs: Optional[list[str]] = None
    words: Optional[list[str]] = None
    file: Union[str, Path, list[Union[str, Path]], None] = None

    def __post_init__(self) -> None:
        """Validate configuration values."""
        self.disturbs = parse_disturbs(self.disturbs)
        if self.replace_code is not None:
            validate_replace_code(self.replace_code)
        if self.words is not None and isinstance(self.words, str):
            self.words = [self.words]

    @property
    def files(self) -> list[str]:
        """Configured word-list files as a list of paths."""
        if self.file is None:
            return []
        if isinstance(self.file, (str, Path)):
            return [str(self.file)]
        return [str(path) for path in self.file]

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "SensitiveConfig":
        """Build a config from a mapping, ignoring unknown keys."""
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    @classmethod
    def from_env(cls) -> "SensitiveConfig":
        """Build a config from SENSITIVE_* environment variables."""
        files = os.getenv("SENSITIVE_WORDS_FILE")
        return cls(
            cache=os.getenv("SENSITIVE_CACHE", "false").lower() in _TRUE_VALUES,
            cache_class=os.getenv("SENSITIVE_CACHE_CLASS") or None,
            cache_key=os.getenv("SENSITIVE_CACHE_KEY") or None,
            replace_code=os.getenv("SENSITIVE_REPLACE_CODE") or None,
            disturbs=parse_disturbs(os.getenv("SENSITIVE_DISTURBS")),
            file=[p for p in files.split(os.pathsep) if p] if files else None,
        )


def load_config_from_yaml(path: Path | str) -> SensitiveConfig:
    """Load engine configuration from a YAML file.

    The settings may sit at the top level or under a ``sensitive`` key.

    Raises:
        FileNotFoundError: If the configuration file doesn't exist.
        ValueError: If the YAML structure is invalid.
        yaml.YAMLError: If the YAML is malformed.
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return SensitiveConfig()

    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML structure: expected dict, got {type(data).__name__}")

    section = data.get("sensitive", data)
    if not isinstance(section, dict):
        raise ValueError(
            f"Invalid sensitive section: expected dict, got {type(section).__name__}"
        )

    return SensitiveConfig.from_dict(section)
