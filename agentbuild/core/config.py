"""Compiler configuration: directory layout and file suffixes."""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigError


SOURCE_SUFFIX = ".src.md"
OUTPUT_SUFFIX = ".md"
SKILL_SOURCE_NAME = "src.md"
SKILL_OUTPUT_NAME = "SKILL.md"

ROOT_ENV = "AGENTBUILD_ROOT"
JSON_LOGS_ENV = "AGENTBUILD_JSON_LOGS"


@dataclass
class CompileConfig:
    root: str
    sources_dir: str
    output_dir: str
    skills_dir: str
    skills_output_dir: str
    source_suffix: str = SOURCE_SUFFIX
    output_suffix: str = OUTPUT_SUFFIX
    skill_source_name: str = SKILL_SOURCE_NAME
    skill_output_name: str = SKILL_OUTPUT_NAME
    json_logs: bool = False

    @classmethod
    def from_root(cls, root: str, **kwargs) -> 'CompileConfig':
        """Default layout under root:

            agent-partials/sources/*.src.md  →  agents/*.md
            agent-partials/skills/<name>/src.md  →  skills/<name>/SKILL.md
        """
        root = os.path.abspath(root)
        return cls(
            root=root,
            sources_dir=os.path.join(root, "agent-partials", "sources"),
            output_dir=os.path.join(root, "agents"),
            skills_dir=os.path.join(root, "agent-partials", "skills"),
            skills_output_dir=os.path.join(root, "skills"),
            **kwargs,
        )

    def validate(self) -> None:
        if not self.source_suffix or not self.output_suffix:
            raise ConfigError("source and output suffixes must be non-empty")
        if self.source_suffix == self.output_suffix:
            raise ConfigError(
                f"source suffix and output suffix are both '{self.source_suffix}'"
            )
        if not self.skill_source_name or not self.skill_output_name:
            raise ConfigError("skill source and output file names must be non-empty")


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")


def load_config(root: Optional[str] = None, json_logs: Optional[bool] = None,
                **overrides: Optional[str]) -> CompileConfig:
    """Build a CompileConfig from root plus directory overrides.

    root falls back to $AGENTBUILD_ROOT, then the current directory.
    Relative override paths are taken relative to root; None values are ignored.
    """
    load_dotenv()

    root = root or os.environ.get(ROOT_ENV) or os.getcwd()
    if json_logs is None:
        json_logs = _env_flag(JSON_LOGS_ENV)

    config = CompileConfig.from_root(root, json_logs=json_logs)
    for key, value in overrides.items():
        if value is None:
            continue
        if not hasattr(config, key) or key in ("root", "json_logs"):
            raise ConfigError(f"Unknown config option: {key}")
        if key.endswith("_dir"):
            value = os.path.abspath(os.path.join(config.root, value))
        setattr(config, key, value)

    config.validate()
    return config
