from dataclasses import dataclass, field


@dataclass(frozen=True)
class HunkHeader:
    start: int
    end: int
    op: str
    target_start: int
    target_end: int

    @property
    def delete_count(self) -> int:
        if self.op == "a":
            return 0
        return self.end - self.start + 1

    @property
    def target_count(self) -> int:
        if self.op == "d":
            return 0
        return self.target_end - self.target_start + 1


@dataclass(frozen=True)
class PatchOperation:
    """
    One positional edit. `newline_at_end` is set only when the hunk changes
    whether the file ends with a newline (a `\\ No newline at end of file`
    marker on one side of the hunk but not the other): True adds the final
    newline, False removes it.
    """

    start: int
    delete_count: int
    add_lines: tuple[str, ...] = ()
    newline_at_end: bool | None = None

    def __post_init__(self):
        if self.start < 1:
            raise ValueError(f"start must be >= 1, got {self.start}")
        if self.delete_count < 0:
            raise ValueError(f"delete_count must be >= 0, got {self.delete_count}")
        object.__setattr__(self, "add_lines", tuple(self.add_lines))

    @property
    def is_insertion(self) -> bool:
        return self.delete_count == 0


PatchDocument = tuple[PatchOperation, ...]


@dataclass(frozen=True)
class Block:
    removed: tuple[str, ...]
    added: tuple[str, ...]
    next_index: int
    removed_no_newline: bool = False
    added_no_newline: bool = False


@dataclass(frozen=True)
class PatchWarning:
    code: str
    message: str
    line_number: int | None = None


@dataclass
class ParseReport:
    operations: PatchDocument
    warnings: list[PatchWarning] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.warnings
