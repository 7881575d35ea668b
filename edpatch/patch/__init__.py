from edpatch.patch.applier import apply, apply_operations
from edpatch.patch.errors import MalformedPatchError, OutOfBoundsStart, PatchError
from edpatch.patch.generate import make_patch
from edpatch.patch.models import (
    Block,
    HunkHeader,
    ParseReport,
    PatchDocument,
    PatchOperation,
    PatchWarning,
)
from edpatch.patch.parser import extract_blocks, parse, parse_header, parse_report
from edpatch.patch.text import join_lines, normalize_newlines, split_lines

__all__ = [
    "apply",
    "apply_operations",
    "parse",
    "parse_report",
    "parse_header",
    "extract_blocks",
    "make_patch",
    "normalize_newlines",
    "split_lines",
    "join_lines",
    "Block",
    "HunkHeader",
    "ParseReport",
    "PatchDocument",
    "PatchOperation",
    "PatchWarning",
    "PatchError",
    "OutOfBoundsStart",
    "MalformedPatchError",
]
