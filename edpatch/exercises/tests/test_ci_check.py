import sys
from pathlib import Path

import pytest

from edpatch.exercises.ci_check import ci_check, run_exercise_test
from edpatch.exercises.config import WorkspaceConfig
from edpatch.exercises.models import ExerciseRun
from edpatch.exercises.workspace import Workspace

SOLVED_MARKERS = ("i32.const 42", "(func $b)")


def fake_runner(workspace: Workspace, name: str) -> ExerciseRun:
    """Passes when the exercise file looks solved; 003_export always passes."""
    text = workspace.source_path(name).read_text(encoding="utf-8")
    passed = name == "003_export" or any(marker in text for marker in SOLVED_MARKERS)
    return ExerciseRun(name=name, passed=passed, exit_code=0 if passed else 1)


class TestCiCheck:
    """Tests for the two-phase ci_check."""

    def test_all_exercises_verified(self, workspace_root: Path):
        report = ci_check(Workspace(workspace_root), runner=fake_runner)
        assert report.ok
        assert [o.passed for o in report.unsolved] == [False, False, True]
        assert [o.passed for o in report.solved] == [True, True, True]

    def test_exercise_files_restored(self, workspace_root: Path):
        workspace = Workspace(workspace_root)
        before = {p: p.read_bytes() for p in workspace.exercises_dir.iterdir()}
        ci_check(workspace, runner=fake_runner)
        after = {p: p.read_bytes() for p in workspace.exercises_dir.iterdir()}
        assert after == before

    def test_cache_cleared(self, workspace_root: Path):
        cache_file = workspace_root / ".cache" / "cache.txt"
        cache_file.parent.mkdir()
        cache_file.write_text("001_hello.wat:1.0\n", encoding="utf-8")
        ci_check(Workspace(workspace_root), runner=fake_runner)
        assert not cache_file.parent.exists()

    def test_already_solved_exercise_fails_phase_one(self, workspace_root: Path, solved_texts):
        (workspace_root / "exercises" / "002_ordering.wat").write_text(
            solved_texts["002_ordering.wat"], encoding="utf-8"
        )
        report = ci_check(Workspace(workspace_root), runner=fake_runner)
        assert report.failures == ["002_ordering: should fail without patch"]

    def test_empty_patch_exercise_must_pass(self, workspace_root: Path):
        def runner(workspace: Workspace, name: str) -> ExerciseRun:
            outcome = fake_runner(workspace, name)
            if name == "003_export":
                return ExerciseRun(name=name, passed=False, exit_code=1)
            return outcome

        report = ci_check(Workspace(workspace_root), runner=runner)
        assert "003_export: should pass without patch" in report.failures
        assert "003_export: fails after patch" in report.failures

    def test_broken_patch_reported(self, workspace_root: Path):
        (workspace_root / "patch" / "002_ordering.patch").write_text(
            "30a31\n> (func $b)\n", encoding="utf-8"
        )
        report = ci_check(Workspace(workspace_root), runner=fake_runner)
        assert any(f.startswith("002_ordering: patch does not apply") for f in report.failures)
        assert "002_ordering: fails after patch" in report.failures

    def test_files_restored_when_runner_raises(self, workspace_root: Path):
        workspace = Workspace(workspace_root)
        original = workspace.source_path("001_hello").read_text(encoding="utf-8")

        def exploding_runner(workspace: Workspace, name: str) -> ExerciseRun:
            if "i32.const 42" in workspace.source_path("001_hello").read_text(encoding="utf-8"):
                raise RuntimeError("runner crashed")
            return fake_runner(workspace, name)

        with pytest.raises(RuntimeError):
            ci_check(workspace, runner=exploding_runner)
        assert workspace.source_path("001_hello").read_text(encoding="utf-8") == original


class TestRunExerciseTest:
    """Tests for run_exercise_test with a real subprocess."""

    def _workspace(self, root: Path, command: list[str], timeout: int = 30) -> Workspace:
        return Workspace(root, WorkspaceConfig(test_command=command, test_timeout_sec=timeout))

    def test_exit_code_decides_pass(self, workspace_root: Path):
        workspace = self._workspace(
            workspace_root,
            [
                sys.executable,
                "-c",
                "import sys; print('ran', sys.argv[1]); sys.exit(0 if sys.argv[1] == '001_hello' else 3)",
                "{name}",
            ],
        )
        passed = run_exercise_test(workspace, "001_hello")
        failed = run_exercise_test(workspace, "002_ordering")

        assert passed.passed is True
        assert "ran 001_hello" in passed.stdout
        assert failed.passed is False
        assert failed.exit_code == 3

    def test_runs_in_workspace_root(self, workspace_root: Path):
        workspace = self._workspace(
            workspace_root,
            [sys.executable, "-c", "import os; print(os.getcwd())"],
        )
        outcome = run_exercise_test(workspace, "001_hello")
        assert Path(outcome.stdout.strip()).resolve() == workspace.root

    def test_timeout_fails(self, workspace_root: Path):
        workspace = self._workspace(
            workspace_root,
            [sys.executable, "-c", "import time; time.sleep(10)"],
            timeout=1,
        )
        outcome = run_exercise_test(workspace, "001_hello")
        assert outcome.passed is False
        assert "timed out" in outcome.stderr
