from edpatch.patch.models import PatchWarning


class PatchError(Exception):
    pass


class OutOfBoundsStart(PatchError):
    def __init__(self, start: int):
        super().__init__(f"Patch start line {start} is out of bounds")
        self.start = start


class MalformedPatchError(PatchError):
    def __init__(self, warnings: list[PatchWarning]):
        details = "; ".join(
            f"line {w.line_number}: {w.message}" if w.line_number else w.message
            for w in warnings
        )
        super().__init__(f"Malformed patch ({len(warnings)} problem(s)): {details}")
        self.warnings = list(warnings)
