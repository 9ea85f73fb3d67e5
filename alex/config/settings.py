"""Configuration settings for Alex."""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List

import yaml

COMPLETENESS_MODES = ("trial", "compile")


@dataclass
class ReplConfig:
    """Interactive session configuration."""

    # Identifier handed to the host's input source (e.g. a key name)
    start_key: str = "F9"
    input_prompt: str = "alex: "
    indent_spaces: int = 2
    indent_first_tokens: List[str] = field(default_factory=lambda: [
        "def", "class", "module", "while", "until", "begin", "if", "unless",
    ])
    indent_last_tokens: List[str] = field(default_factory=lambda: ["do"])
    # Line endings that open a block (":" for Python suites)
    indent_suffixes: List[str] = field(default_factory=list)
    completeness: str = "trial"  # trial | compile
    discard_path: str = ""  # empty -> os.devnull

    def __post_init__(self) -> None:
        if self.indent_spaces < 0:
            raise ValueError(f"indent_spaces must be >= 0, got {self.indent_spaces}")
        if self.completeness not in COMPLETENESS_MODES:
            raise ValueError(
                f"completeness must be one of {', '.join(COMPLETENESS_MODES)}, "
                f"got {self.completeness!r}"
            )


@dataclass
class HelpersConfig:
    """Helper registry configuration."""

    # Dotted module path whose public callables become session helpers
    module: str = ""


@dataclass
class Settings:
    """Main settings configuration."""

    repl: ReplConfig = field(default_factory=ReplConfig)
    helpers: HelpersConfig = field(default_factory=HelpersConfig)

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "Settings":
        """Load settings from YAML file with environment variable expansion."""
        with open(yaml_path, "r") as f:
            data = yaml.safe_load(f) or {}

        # Expand environment variables
        data = cls._expand_env_vars(data)

        return cls(
            repl=cls._parse_repl_config(data.get("repl") or {}),
            helpers=HelpersConfig(**(data.get("helpers") or {})),
        )

    @staticmethod
    def _expand_env_vars(data: Any) -> Any:
        """Recursively expand environment variables in configuration."""
        if isinstance(data, dict):
            return {k: Settings._expand_env_vars(v) for k, v in data.items()}
        elif isinstance(data, list):
            return [Settings._expand_env_vars(item) for item in data]
        elif isinstance(data, str) and data.startswith("${") and data.endswith("}"):
            env_var = data[2:-1]
            return os.environ.get(env_var, "")
        return data

    @staticmethod
    def _parse_repl_config(data: Dict[str, Any]) -> ReplConfig:
        """Parse session configuration, coercing token lists."""
        defaults = ReplConfig()
        return ReplConfig(
            start_key=str(data.get("start_key", defaults.start_key)),
            input_prompt=str(data.get("input_prompt", defaults.input_prompt)),
            indent_spaces=int(data.get("indent_spaces", defaults.indent_spaces)),
            indent_first_tokens=_as_list(
                data.get("indent_first_tokens", defaults.indent_first_tokens)
            ),
            indent_last_tokens=_as_list(
                data.get("indent_last_tokens", defaults.indent_last_tokens)
            ),
            indent_suffixes=_as_list(data.get("indent_suffixes", defaults.indent_suffixes)),
            completeness=data.get("completeness", defaults.completeness),
            discard_path=data.get("discard_path") or "",
        )


def _as_list(value: Any) -> List[str]:
    """Accept a YAML list or a whitespace separated string."""
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    return [str(item) for item in value]


def load_settings(config_path: str = "config.yaml") -> Settings:
    """Load settings from configuration file."""
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
    return Settings.from_yaml(config_path)
