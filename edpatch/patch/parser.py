import re

from edpatch.patch.models import (
    Block,
    HunkHeader,
    ParseReport,
    PatchDocument,
    PatchOperation,
    PatchWarning,
)
from edpatch.patch.text import split_lines

HEADER_RE = re.compile(r"^(\d+)(?:,(\d+))?([acd])(\d+)(?:,(\d+))?$")

REMOVED_MARKER = "<"
ADDED_MARKER = ">"
SEPARATOR = "---"
NO_NEWLINE_MARKER = "\\"


def parse_header(line: str) -> HunkHeader | None:
    """
    Decode one ed-style header such as `17c17`, `22,23d21` or `38a39,47`.

    Returns None for anything that is not a header, including headers whose
    base range cannot describe an edit (`0c1`, `5,3d2`).
    """
    match = HEADER_RE.match(line)
    if not match:
        return None

    start_str, end_str, op, target_start_str, target_end_str = match.groups()
    start = int(start_str)
    end = int(end_str) if end_str else start
    target_start = int(target_start_str)
    target_end = int(target_end_str) if target_end_str else target_start

    if end < start or target_end < target_start:
        return None
    if op != "a" and start < 1:
        return None

    return HunkHeader(
        start=start,
        end=end,
        op=op,
        target_start=target_start,
        target_end=target_end,
    )


def _marked(line: str, marker: str) -> bool:
    # a bare marker is a marker line whose trailing space was stripped
    return line == marker or line.startswith(marker + " ")


def _take_marked(lines: list[str], index: int, marker: str) -> tuple[list[str], int]:
    taken = []
    while index < len(lines) and _marked(lines[index], marker):
        taken.append(lines[index][2:])
        index += 1
    return taken, index


def _take_no_newline(lines: list[str], index: int, taken: list[str]) -> tuple[bool, int]:
    # the marker follows the last line of a block when that line is the last
    # line of its file and has no newline
    if taken and index < len(lines) and lines[index].startswith(NO_NEWLINE_MARKER):
        return True, index + 1
    return False, index


def extract_blocks(lines: list[str], index: int, op: str) -> Block:
    """
    Consume the `< ` / `---` / `> ` lines that follow a header at `index`,
    along with any `\\ No newline at end of file` marker closing either side.

    Removed lines are only consumed; application is positional.
    """
    removed: list[str] = []
    added: list[str] = []
    removed_no_newline = added_no_newline = False

    if op in ("c", "d"):
        removed, index = _take_marked(lines, index, REMOVED_MARKER)
        removed_no_newline, index = _take_no_newline(lines, index, removed)

    if op == "c" and index < len(lines) and lines[index] == SEPARATOR:
        index += 1

    if op in ("a", "c"):
        added, index = _take_marked(lines, index, ADDED_MARKER)
        added_no_newline, index = _take_no_newline(lines, index, added)

    return Block(
        removed=tuple(removed),
        added=tuple(added),
        next_index=index,
        removed_no_newline=removed_no_newline,
        added_no_newline=added_no_newline,
    )


def _to_operation(header: HunkHeader, block: Block) -> PatchOperation:
    # `NaM` inserts after base line N, i.e. at position N + 1
    start = header.start + 1 if header.op == "a" else header.start

    newline_at_end = None
    if block.removed_no_newline != block.added_no_newline:
        newline_at_end = block.removed_no_newline

    return PatchOperation(
        start=start,
        delete_count=header.delete_count,
        add_lines=block.added,
        newline_at_end=newline_at_end,
    )


def _check_counts(header: HunkHeader, block: Block, line_number: int) -> list[PatchWarning]:
    warnings = []
    if header.op in ("c", "d") and len(block.removed) != header.delete_count:
        warnings.append(
            PatchWarning(
                code="delete_count_mismatch",
                message=(
                    f"header expects {header.delete_count} removed line(s), "
                    f"found {len(block.removed)}"
                ),
                line_number=line_number,
            )
        )
    if header.op in ("a", "c") and len(block.added) != header.target_count:
        warnings.append(
            PatchWarning(
                code="add_count_mismatch",
                message=(
                    f"header expects {header.target_count} added line(s), "
                    f"found {len(block.added)}"
                ),
                line_number=line_number,
            )
        )
    return warnings


def parse_report(patch_text: str) -> ParseReport:
    """
    Parse a patch and enumerate everything the permissive parser would skip.

    Unrecognized lines and header/body count mismatches become warnings.
    Blank lines and stray `\\ No newline at end of file` markers between
    hunks are ignored.
    """
    lines = split_lines(patch_text)
    operations: list[PatchOperation] = []
    warnings: list[PatchWarning] = []

    i = 0
    while i < len(lines):
        line = lines[i]
        header = parse_header(line)
        if header is None:
            if line.strip() and not line.startswith(NO_NEWLINE_MARKER):
                warnings.append(
                    PatchWarning(
                        code="unrecognized_line",
                        message=f"not a header or block line: {line!r}",
                        line_number=i + 1,
                    )
                )
            i += 1
            continue

        block = extract_blocks(lines, i + 1, header.op)
        warnings.extend(_check_counts(header, block, i + 1))
        operations.append(_to_operation(header, block))
        i = block.next_index

    return ParseReport(operations=tuple(operations), warnings=warnings)


def parse(patch_text: str) -> PatchDocument:
    """Parse ed-style diff text into operations, skipping unrecognized lines."""
    return parse_report(patch_text).operations
