import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import NoReturn

import typer

from edpatch.exercises import (
    ExerciseNotFoundError,
    InvalidConfigError,
    PatchNotFoundError,
    Workspace,
    ci_check,
    extract_hints,
    render_hints,
    solve_exercise,
    verify_patches,
)
from edpatch.logging import setup_logging
from edpatch.patch import PatchError, apply, make_patch, parse_report
from edpatch.util.cache import ChangeCache

app = typer.Typer(no_args_is_help=True)

ROOT_OPTION = typer.Option(Path("."), "--root", help="Workspace root with exercises/ and patch/")


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise typer.BadParameter(f"Cannot read {path}: {exc}")


def _write_or_echo(content: str, out: Path | None) -> None:
    if out is None:
        typer.echo(content)
        return
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(content, encoding="utf-8")
    typer.echo(f"Wrote {out}")


def _fail(message: str) -> NoReturn:
    typer.secho(message, fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _workspace(root: Path) -> Workspace:
    try:
        workspace = Workspace(root)
        workspace.exercise_names()
    except (InvalidConfigError, FileNotFoundError) as exc:
        raise typer.BadParameter(str(exc))
    return workspace


@app.command("apply")
def apply_cmd(
    patch: Path = typer.Argument(..., help="ed-style patch file"),
    target: Path = typer.Argument(..., help="File to patch"),
    out: Path | None = typer.Option(None, "--out", help="Write the result here instead of stdout"),
    strict: bool = typer.Option(False, "--strict", help="Reject unrecognized patch lines"),
):
    """Apply an ed-style patch to a file."""
    try:
        result = apply(_read(patch), _read(target), strict=strict)
    except PatchError as exc:
        _fail(f"Could not apply {patch}: {exc}")
    _write_or_echo(result, out)


@app.command("parse")
def parse_cmd(
    patch: Path = typer.Argument(..., help="ed-style patch file"),
    strict: bool = typer.Option(False, "--strict", help="Fail on unrecognized patch lines"),
):
    """Print the operations in a patch as JSON."""
    report = parse_report(_read(patch))
    typer.echo(json.dumps([asdict(op) for op in report.operations], indent=2))

    for warning in report.warnings:
        typer.echo(f"line {warning.line_number}: {warning.code}: {warning.message}", err=True)
    if strict and not report.ok:
        raise typer.Exit(code=1)


@app.command("diff")
def diff_cmd(
    base: Path = typer.Argument(..., help="Original file"),
    target: Path = typer.Argument(..., help="Changed file"),
    out: Path | None = typer.Option(None, "--out", help="Write the patch here instead of stdout"),
):
    """Write the ed-style patch that turns BASE into TARGET."""
    _write_or_echo(make_patch(_read(base), _read(target)), out)


@app.command("solve")
def solve_cmd(
    stub: str = typer.Argument(..., help="Exercise name or part of it, e.g. 001"),
    root: Path = ROOT_OPTION,
    print_only: bool = typer.Option(False, "--print", help="Print the solution instead of writing it"),
):
    """Apply an exercise's patch to the exercise file in place."""
    workspace = _workspace(root)
    try:
        name = workspace.resolve_exercise(stub)
        solved = solve_exercise(workspace, name, write=not print_only)
    except (ExerciseNotFoundError, PatchNotFoundError) as exc:
        _fail(str(exc))
    except PatchError as exc:
        _fail(f"Could not solve {stub}: {exc}")

    if not solved:
        _fail(f"No patch file found for {name}")
    for path, text in solved.items():
        if print_only:
            typer.echo(text)
        else:
            typer.echo(f"Solved {path.name}")


@app.command("show-solution")
def show_solution_cmd(
    stub: str = typer.Argument("001_hello", help="Exercise name or part of it"),
    root: Path = ROOT_OPTION,
    color: bool = typer.Option(True, "--color/--no-color", help="Colorize the output"),
):
    """Show the lines an exercise's patch would add, as a hint."""
    workspace = _workspace(root)
    patch_file = workspace.find_file(stub, "patch")
    if patch_file is None:
        _fail(f"No file matching {stub} found in {workspace.patch_dir}")

    name = patch_file.name.removesuffix(workspace.config.patch_suffix)
    hints = extract_hints(_read(patch_file))
    typer.echo(render_hints(f"{name}{workspace.config.exercise_suffix}", hints, color=color))


@app.command("verify")
def verify_cmd(root: Path = ROOT_OPTION):
    """Check that every exercise has a patch and that every patch applies."""
    report = verify_patches(_workspace(root))
    for issue in report.issues:
        typer.secho(f"  ✘ {issue.message}", fg=typer.colors.RED)
    if not report.ok:
        _fail(f"{len(report.issues)} problem(s) in {report.checked} patch(es)")
    typer.secho(f"Patches are all working correctly ({report.checked} checked).", fg=typer.colors.GREEN)


@app.command("ci-check")
def ci_check_cmd(root: Path = ROOT_OPTION):
    """Run every exercise unsolved (expect failure) and solved (expect success)."""
    workspace = _workspace(root)
    try:
        report = ci_check(workspace)
    except FileNotFoundError as exc:
        raise typer.BadParameter(f"Test command not found: {exc}")

    typer.secho("Phase 1: Verify unsolved exercises fail\n", bold=True)
    for outcome in report.unsolved:
        expected_pass = workspace.is_empty_patch(outcome.name)
        if outcome.passed == expected_pass:
            note = "no patch needed" if expected_pass else "correctly fails"
            typer.echo(f"  {typer.style('✓', fg=typer.colors.GREEN)} {outcome.name} ({note})")
        elif expected_pass:
            typer.echo(f"  {typer.style('✘', fg=typer.colors.RED)} {outcome.name} - expected pass (empty patch) but failed")
        else:
            typer.echo(f"  {typer.style('✘', fg=typer.colors.RED)} {outcome.name} - should fail before patch but passed")

    typer.secho("\nPhase 2: Apply patches and verify all pass\n", bold=True)
    for outcome in report.solved:
        mark = typer.style("✓" if outcome.passed else "✘", fg=typer.colors.GREEN if outcome.passed else typer.colors.RED)
        typer.echo(f"  {mark} {outcome.name}")
        if not outcome.passed and outcome.stderr:
            typer.secho(f"    {outcome.stderr.strip()}", dim=True)

    typer.echo("\n" + "=" * 50)
    if not report.ok:
        typer.echo(f"\n{len(report.failures)} failure(s):")
        for failure in report.failures:
            typer.echo(f"  - {failure}")
        raise typer.Exit(code=1)
    typer.secho("\nAll exercises verified successfully!", fg=typer.colors.GREEN)


@app.command("changed")
def changed_cmd(
    root: Path = ROOT_OPTION,
    record: bool = typer.Option(False, "--record", help="Record current modification times"),
):
    """List exercise files modified since they were last recorded."""
    workspace = _workspace(root)
    cache = ChangeCache(workspace.cache_dir)
    changed = cache.changed([f.source_path for f in workspace.files()])

    if not changed:
        typer.echo("no changes detected.")
    for path in changed:
        typer.echo(path.name)
    if record and changed:
        cache.record(changed)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """
    edpatch CLI
    """
    setup_logging(logging.DEBUG if verbose else logging.WARNING)
