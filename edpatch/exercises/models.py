from pathlib import Path

from pydantic import BaseModel, Field, field_serializer


class ExerciseFile(BaseModel):
    """An editable exercise file and the patch that solves it, if any."""

    name: str
    source_path: Path
    patch_path: Path | None = None
    primary: bool = True

    @field_serializer("source_path", "patch_path")
    def serialize_paths(self, v: Path | None) -> str | None:
        return str(v) if v is not None else None


class VerifyIssue(BaseModel):
    code: str
    message: str
    name: str | None = None


class VerifyReport(BaseModel):
    checked: int = 0
    issues: list[VerifyIssue] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues


class ExerciseRun(BaseModel):
    name: str
    passed: bool
    exit_code: int | None = None
    stdout: str = ""
    stderr: str = ""


class CheckReport(BaseModel):
    unsolved: list[ExerciseRun] = Field(default_factory=list)
    solved: list[ExerciseRun] = Field(default_factory=list)
    failures: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures
