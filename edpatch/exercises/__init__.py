from edpatch.exercises.ci_check import ci_check, run_exercise_test
from edpatch.exercises.config import WorkspaceConfig, load_config
from edpatch.exercises.exceptions import (
    ExerciseNotFoundError,
    InvalidConfigError,
    PatchNotFoundError,
)
from edpatch.exercises.hints import Hint, extract_hints, render_hints
from edpatch.exercises.models import (
    CheckReport,
    ExerciseFile,
    ExerciseRun,
    VerifyIssue,
    VerifyReport,
)
from edpatch.exercises.solve import solve_exercise, solve_text
from edpatch.exercises.verify import verify_patches
from edpatch.exercises.workspace import Workspace

__all__ = [
    "Workspace",
    "WorkspaceConfig",
    "load_config",
    "solve_exercise",
    "solve_text",
    "extract_hints",
    "render_hints",
    "verify_patches",
    "ci_check",
    "run_exercise_test",
    "Hint",
    "ExerciseFile",
    "ExerciseRun",
    "VerifyIssue",
    "VerifyReport",
    "CheckReport",
    "InvalidConfigError",
    "ExerciseNotFoundError",
    "PatchNotFoundError",
]
