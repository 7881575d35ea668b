import logging
from pathlib import Path

from edpatch.exercises.models import ExerciseFile
from edpatch.exercises.workspace import Workspace
from edpatch.patch import apply

logger = logging.getLogger(__name__)


def solve_text(workspace: Workspace, source_path: Path) -> str:
    """Return the solved text of one exercise file without touching disk."""
    patch_text = workspace.read_patch(source_path)
    exercise_text = source_path.read_text(encoding="utf-8")
    return apply(patch_text, exercise_text, strict=workspace.config.strict_patch)


def solve_exercise(
    workspace: Workspace,
    name: str,
    write: bool = False,
) -> dict[Path, str]:
    """
    Solve an exercise and every companion file that has a patch.

    Files without a patch are left out of the result. With `write=True` the
    solved text replaces the exercise file in place.
    """
    targets: list[ExerciseFile] = [
        f for f in workspace.files() if f.name == name and f.patch_path is not None
    ]
    solved: dict[Path, str] = {}

    for target in targets:
        solved[target.source_path] = solve_text(workspace, target.source_path)

    if write:
        for path, text in solved.items():
            path.write_text(text, encoding="utf-8")
            logger.info("Wrote solution to %s", path)

    logger.debug("Solved %d file(s) for %s", len(solved), name)
    return solved
