import logging

from edpatch.exercises.models import VerifyIssue, VerifyReport
from edpatch.exercises.solve import solve_text
from edpatch.exercises.workspace import Workspace
from edpatch.patch import PatchError

logger = logging.getLogger(__name__)


def verify_patches(workspace: Workspace) -> VerifyReport:
    """
    Check that every exercise has a patch, every patch has an exercise, and
    every patch applies cleanly to its exercise.
    """
    report = VerifyReport()

    for exercise in workspace.files():
        if exercise.patch_path is None:
            if exercise.primary:
                report.issues.append(
                    VerifyIssue(
                        code="missing_patch",
                        message=f"patch does not exist for {exercise.source_path.name}",
                        name=exercise.name,
                    )
                )
            continue

        report.checked += 1
        try:
            solve_text(workspace, exercise.source_path)
        except PatchError as e:
            logger.warning("Could not patch %s: %s", exercise.source_path, e)
            report.issues.append(
                VerifyIssue(
                    code="patch_failed",
                    message=f"could not patch {exercise.source_path.name}: {e}",
                    name=exercise.name,
                )
            )

    for orphan in workspace.orphan_patches():
        report.issues.append(
            VerifyIssue(
                code="orphan_patch",
                message=f"No exercise file found for patch {orphan.name}",
            )
        )

    logger.info(
        "Verified %d patch(es), %d issue(s)", report.checked, len(report.issues)
    )
    return report
