import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from edpatch.exercises.exceptions import InvalidConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "edpatch.yaml"
STRICT_PATCH_ENV = "EDPATCH_STRICT_PATCH"


class WorkspaceConfig(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
    )

    exercises_dir: str = "exercises"
    patch_dir: str = "patch"
    exercise_suffix: str = ".wat"
    companion_suffixes: list[str] = Field(default_factory=lambda: [".ts"])
    patch_suffix: str = ".patch"
    cache_dir: str = ".cache"
    test_command: list[str] = Field(
        default_factory=lambda: [
            "bun",
            "--experimental-wasm-exnref",
            "scripts/test.ts",
            "{name}",
        ]
    )
    test_timeout_sec: int = 30
    strict_patch: bool = False

    @field_validator("exercise_suffix", "patch_suffix")
    @classmethod
    def _suffix_has_dot(cls, v: str) -> str:
        if not v.startswith("."):
            raise ValueError(f"suffix must start with '.', got {v!r}")
        return v

    @field_validator("companion_suffixes")
    @classmethod
    def _companions_have_dot(cls, v: list[str]) -> list[str]:
        for suffix in v:
            if not suffix.startswith("."):
                raise ValueError(f"suffix must start with '.', got {suffix!r}")
        return v

    @field_validator("cache_dir")
    @classmethod
    def _cache_dir_inside_root(cls, v: str) -> str:
        # the cache directory is deleted wholesale by ci-check
        path = Path(v)
        if not path.parts or path.is_absolute() or ".." in path.parts:
            raise ValueError(
                f"cache_dir must be a subdirectory of the workspace root, got {v!r}"
            )
        return v

    @model_validator(mode="after")
    def _cache_dir_holds_no_exercises(self) -> "WorkspaceConfig":
        cache_parts = Path(self.cache_dir).parts
        for field_name in ("exercises_dir", "patch_dir"):
            parts = Path(getattr(self, field_name)).parts
            if parts[: len(cache_parts)] == cache_parts:
                raise ValueError(f"cache_dir {self.cache_dir!r} contains {field_name}")
        return self


def _strict_patch_env() -> bool | None:
    raw = os.getenv(STRICT_PATCH_ENV)
    if raw is None or raw == "":
        return None
    return raw.lower() in {"1", "true", "yes"}


def load_config(root: Path) -> WorkspaceConfig:
    """
    Load `edpatch.yaml` from the workspace root, falling back to defaults.

    `EDPATCH_STRICT_PATCH` overrides `strict_patch` when set.
    """
    config_path = Path(root) / CONFIG_FILENAME

    if config_path.exists():
        try:
            with config_path.open("r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
            if loaded is None:
                loaded = {}
            if not isinstance(loaded, dict):
                raise TypeError("root must be a mapping")
            config = WorkspaceConfig.model_validate(loaded)
        except Exception as e:
            logger.error("Config validation failed for %s: %s", config_path, e)
            raise InvalidConfigError(config_path, e) from e
    else:
        logger.debug("No %s in %s, using defaults", CONFIG_FILENAME, root)
        config = WorkspaceConfig()

    strict = _strict_patch_env()
    if strict is not None:
        config = config.model_copy(update={"strict_patch": strict})

    return config
