import logging
import subprocess
from collections.abc import Callable

from edpatch.exercises.models import CheckReport, ExerciseRun
from edpatch.exercises.solve import solve_exercise
from edpatch.exercises.workspace import Workspace
from edpatch.patch import PatchError
from edpatch.util.cache import ChangeCache

logger = logging.getLogger(__name__)

ExerciseRunner = Callable[[Workspace, str], ExerciseRun]


def run_exercise_test(workspace: Workspace, name: str) -> ExerciseRun:
    """Run the configured test command for one exercise; exit code 0 passes."""
    cmd = [part.replace("{name}", name) for part in workspace.config.test_command]
    try:
        completed = subprocess.run(
            cmd,
            cwd=workspace.root,
            capture_output=True,
            text=True,
            timeout=workspace.config.test_timeout_sec,
        )
    except subprocess.TimeoutExpired:
        logger.warning(
            "Test for %s timed out after %ss", name, workspace.config.test_timeout_sec
        )
        return ExerciseRun(
            name=name,
            passed=False,
            stderr=f"timed out after {workspace.config.test_timeout_sec}s",
        )

    return ExerciseRun(
        name=name,
        passed=completed.returncode == 0,
        exit_code=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )


def ci_check(
    workspace: Workspace,
    runner: ExerciseRunner = run_exercise_test,
) -> CheckReport:
    """
    Two-phase check of the whole exercise set.

    Phase 1: every unsolved exercise fails, unless its patch is empty.
    Phase 2: with all patches applied in place, every exercise passes.

    The compilation cache is cleared before each phase and the exercise files
    are always restored, even if a test run raises.
    """
    names = workspace.exercise_names()
    cache = ChangeCache(workspace.cache_dir)
    report = CheckReport()
    snapshot = workspace.snapshot()

    cache.clear()
    try:
        logger.info("Phase 1: verify unsolved exercises fail")
        for name in names:
            empty = workspace.is_empty_patch(name)
            outcome = runner(workspace, name)
            report.unsolved.append(outcome)
            if empty and not outcome.passed:
                report.failures.append(f"{name}: should pass without patch")
            elif not empty and outcome.passed:
                report.failures.append(f"{name}: should fail without patch")

        logger.info("Phase 2: apply patches and verify all pass")
        for name in names:
            if workspace.is_empty_patch(name):
                continue
            try:
                solve_exercise(workspace, name, write=True)
            except PatchError as e:
                logger.error("Could not apply patch for %s: %s", name, e)
                report.failures.append(f"{name}: patch does not apply ({e})")

        cache.clear()
        for name in names:
            outcome = runner(workspace, name)
            report.solved.append(outcome)
            if not outcome.passed:
                report.failures.append(f"{name}: fails after patch")
    finally:
        workspace.restore(snapshot)

    logger.info("CI check finished with %d failure(s)", len(report.failures))
    return report
