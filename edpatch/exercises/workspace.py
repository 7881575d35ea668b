import logging
from pathlib import Path
from typing import Literal

from edpatch.exercises.config import WorkspaceConfig, load_config
from edpatch.exercises.exceptions import ExerciseNotFoundError, PatchNotFoundError
from edpatch.exercises.models import ExerciseFile

logger = logging.getLogger(__name__)

FileKind = Literal["exercises", "patch"]


class Workspace:
    """
    An exercise tree: `exercises/` holds the unsolved files and `patch/` holds
    one ed-style patch per file. `<name>.wat` is solved by `<name>.patch`;
    companion files such as `<name>.ts` are solved by `<name>.ts.patch`.
    """

    def __init__(self, root: Path, config: WorkspaceConfig | None = None):
        self.root = Path(root).resolve()
        self.config = config if config is not None else load_config(self.root)

    @property
    def exercises_dir(self) -> Path:
        return self.root / self.config.exercises_dir

    @property
    def patch_dir(self) -> Path:
        return self.root / self.config.patch_dir

    @property
    def cache_dir(self) -> Path:
        return self.root / self.config.cache_dir

    def _listing(self, directory: Path) -> list[str]:
        if not directory.is_dir():
            raise FileNotFoundError(f"Directory not found: {directory}")
        return sorted(p.name for p in directory.iterdir() if p.is_file())

    def exercise_names(self) -> list[str]:
        suffix = self.config.exercise_suffix
        return [
            name.removesuffix(suffix)
            for name in self._listing(self.exercises_dir)
            if name.endswith(suffix)
        ]

    def source_path(self, name: str) -> Path:
        return self.exercises_dir / f"{name}{self.config.exercise_suffix}"

    def patch_path(self, source_path: Path) -> Path:
        """Patch file that solves `source_path` (which need not exist)."""
        filename = source_path.name
        if filename.endswith(self.config.exercise_suffix):
            filename = filename.removesuffix(self.config.exercise_suffix)
        return self.patch_dir / f"{filename}{self.config.patch_suffix}"

    def find_file(self, stub: str, kind: FileKind = "exercises") -> Path | None:
        """
        Return the first file in `kind`'s directory whose name contains the
        stub, ignoring the stub's own extension. `001`, `001_hello` and
        `001_hello.wat` all find `001_hello.wat`.
        """
        if kind == "exercises":
            directory, suffix = self.exercises_dir, self.config.exercise_suffix
        else:
            directory, suffix = self.patch_dir, self.config.patch_suffix

        target = Path(stub).stem
        for filename in self._listing(directory):
            if not filename.endswith(suffix):
                continue
            if target in filename:
                return directory / filename
        return None

    def resolve_exercise(self, stub: str) -> str:
        found = self.find_file(stub, "exercises")
        if found is None:
            raise ExerciseNotFoundError(
                f"No file matching {stub} found in {self.exercises_dir}"
            )
        return found.name.removesuffix(self.config.exercise_suffix)

    def files(self) -> list[ExerciseFile]:
        """Every primary and companion exercise file, with its patch if present."""
        suffixes = [self.config.exercise_suffix, *self.config.companion_suffixes]
        out: list[ExerciseFile] = []
        for filename in self._listing(self.exercises_dir):
            suffix = next((s for s in suffixes if filename.endswith(s)), None)
            if suffix is None:
                continue
            source = self.exercises_dir / filename
            patch = self.patch_path(source)
            out.append(
                ExerciseFile(
                    name=filename.removesuffix(suffix),
                    source_path=source,
                    patch_path=patch if patch.is_file() else None,
                    primary=suffix == self.config.exercise_suffix,
                )
            )
        return out

    def orphan_patches(self) -> list[Path]:
        """Patch files with no exercise file to apply to."""
        if not self.patch_dir.is_dir():
            return []
        claimed = {f.patch_path for f in self.files() if f.patch_path is not None}
        return [
            self.patch_dir / filename
            for filename in self._listing(self.patch_dir)
            if filename.endswith(self.config.patch_suffix)
            and self.patch_dir / filename not in claimed
        ]

    def read_patch(self, source_path: Path) -> str:
        patch = self.patch_path(source_path)
        try:
            return patch.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise PatchNotFoundError(f"No patch file found at {patch}") from e

    def is_empty_patch(self, name: str) -> bool:
        try:
            content = self.read_patch(self.source_path(name))
        except PatchNotFoundError:
            return True
        return content.strip() == ""

    def snapshot(self) -> dict[Path, bytes]:
        """Contents of every exercise file, for restoring after in-place edits."""
        return {
            f.source_path: f.source_path.read_bytes()
            for f in self.files()
        }

    def restore(self, snapshot: dict[Path, bytes]) -> None:
        for path, content in snapshot.items():
            path.write_bytes(content)
        logger.debug("Restored %d exercise files", len(snapshot))
