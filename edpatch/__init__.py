from edpatch.patch import (
    MalformedPatchError,
    OutOfBoundsStart,
    PatchError,
    PatchOperation,
    apply,
    apply_operations,
    make_patch,
    parse,
    parse_report,
)

__all__ = [
    "parse",
    "parse_report",
    "apply",
    "apply_operations",
    "make_patch",
    "PatchOperation",
    "PatchError",
    "OutOfBoundsStart",
    "MalformedPatchError",
]
