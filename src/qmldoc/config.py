"""Configuration management for qmldoc extraction."""

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from qmldoc.binder import DEFAULT_MAX_DEPTH


@dataclass
class ExtractConfig:
    """Configuration for documentation extraction.

    Attributes:
        max_depth: Maximum declaration nesting depth walked before a file
            is abandoned.
        include_internal: Whether entities marked \\internal are reported.
        enums: C++ enumerations available to \\qmlenumeratorsfrom, keyed by
            (optionally qualified) name, each with its list of values.
    """
    max_depth: int = DEFAULT_MAX_DEPTH
    include_internal: bool = False
    enums: dict[str, list[str]] = field(default_factory=dict)


def load_extract_config(repo_root: Path | None = None) -> ExtractConfig:
    """Load extraction configuration from .qmldoc file in the project root.

    Args:
        repo_root: Path to project root. If None, uses current directory.

    Returns:
        ExtractConfig object with loaded or default values.

    Notes:
        If .qmldoc file doesn't exist or can't be parsed, returns default config.
        Expected YAML structure:

        ```yaml
        extract:
          max_depth: 1000
          include_internal: false
          enums:
            Qt::Alignment: [AlignLeft, AlignRight]
        ```
    """
    if repo_root is None:
        repo_root = Path.cwd()

    config_path = repo_root / ".qmldoc"

    if not config_path.exists():
        return ExtractConfig()

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            return ExtractConfig()

        extract_config = data.get("extract", {})
        if not isinstance(extract_config, dict):
            return ExtractConfig()

        enums = extract_config.get("enums", {})
        if not isinstance(enums, dict):
            enums = {}

        return ExtractConfig(
            max_depth=int(extract_config.get("max_depth", DEFAULT_MAX_DEPTH)),
            include_internal=bool(extract_config.get("include_internal", False)),
            enums={str(name): [str(value) for value in values or []] for name, values in enums.items()},
        )
    except (yaml.YAMLError, OSError, KeyError, TypeError, ValueError):
        # Return default config on any parsing errors
        return ExtractConfig()
