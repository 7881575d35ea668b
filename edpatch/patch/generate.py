import difflib

from edpatch.patch.text import split_lines

NO_NEWLINE_LINE = "\\ No newline at end of file"


def _range(first: int, last: int) -> str:
    if first >= last:
        return str(first)
    return f"{first},{last}"


def _file_lines(text: str) -> list[str]:
    """Lines as `diff` compares them: each keeps its newline, the last may lack one."""
    lines = split_lines(text)
    last = lines.pop()
    out = [line + "\n" for line in lines]
    if last:
        out.append(last)
    return out


def _block(marker: str, lines: list[str]) -> list[str]:
    out = []
    for line in lines:
        text = line.removesuffix("\n")
        out.append(f"{marker} {text}")
        if not line.endswith("\n"):
            out.append(NO_NEWLINE_LINE)
    return out


def make_patch(base: str, target: str) -> str:
    """
    Produce an ed-style diff that turns `base` into `target`, in the format
    POSIX `diff` prints by default, `\\ No newline at end of file` markers
    included.

    `apply(make_patch(base, target), base)` reproduces the normalized target.
    Identical texts give an empty patch.
    """
    base_lines = _file_lines(base)
    target_lines = _file_lines(target)
    matcher = difflib.SequenceMatcher(None, base_lines, target_lines, autojunk=False)

    out: list[str] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            continue

        if tag == "replace":
            out.append(f"{_range(i1 + 1, i2)}c{_range(j1 + 1, j2)}")
        elif tag == "delete":
            out.append(f"{_range(i1 + 1, i2)}d{j1}")
        else:
            out.append(f"{i1}a{_range(j1 + 1, j2)}")

        out.extend(_block("<", base_lines[i1:i2]))
        if tag == "replace":
            out.append("---")
        out.extend(_block(">", target_lines[j1:j2]))

    return "\n".join(out)
