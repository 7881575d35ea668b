from collections.abc import Iterable

from edpatch.patch.errors import MalformedPatchError, OutOfBoundsStart
from edpatch.patch.models import PatchOperation
from edpatch.patch.parser import parse_report
from edpatch.patch.text import join_lines, split_lines


def _application_order(operations: Iterable[PatchOperation]) -> list[PatchOperation]:
    # Highest start first, so pending edits keep their line numbers. On a tie,
    # the replacing edit goes first and the insertion lands above it.
    return sorted(
        operations,
        key=lambda op: (op.start, op.delete_count > 0),
        reverse=True,
    )


def apply_operations(operations: Iterable[PatchOperation], target: str) -> str:
    """
    Apply parsed operations to `target` and return the transformed text.

    Raises:
        OutOfBoundsStart: if any operation starts outside the buffer. Nothing
            is returned in that case; the input is never modified.
    """
    lines = split_lines(target)

    for op in _application_order(operations):
        limit = len(lines) + (1 if op.is_insertion else 0)
        if op.start < 1 or op.start > limit:
            raise OutOfBoundsStart(op.start)

        index = op.start - 1
        lines[index:index + op.delete_count] = op.add_lines
        _fix_final_newline(lines, op, index + len(op.add_lines))

    return join_lines(lines)


def _fix_final_newline(lines: list[str], op: PatchOperation, end: int) -> None:
    # A text ending in a newline splits with a trailing "" element. Only a
    # hunk whose added lines reach the end of the buffer may change it.
    if op.newline_at_end is True and end == len(lines):
        lines.append("")
    elif op.newline_at_end is False and end == len(lines) - 1 and lines[-1] == "":
        lines.pop()


def apply(patch_text: str, target_text: str, strict: bool = False) -> str:
    """
    Parse `patch_text` and apply it to `target_text`.

    With `strict=True`, unrecognized lines or header/body count mismatches
    raise MalformedPatchError before anything is applied.
    """
    report = parse_report(patch_text)
    if strict and not report.ok:
        raise MalformedPatchError(report.warnings)
    return apply_operations(report.operations, target_text)
