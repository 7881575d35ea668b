from typing import Literal

import typer
from pydantic import BaseModel

from edpatch.patch import parse


class Hint(BaseModel):
    kind: Literal["insert", "change", "delete"]
    line: int
    add_lines: list[str]
    delete_count: int = 0


def extract_hints(patch_text: str) -> list[Hint]:
    """
    Turn a patch into suggestions a learner can follow by hand.

    Insertions are anchored on the line they follow; changes and deletions
    on their first affected line.
    """
    hints = []
    for op in parse(patch_text):
        if op.is_insertion:
            hints.append(Hint(kind="insert", line=op.start - 1, add_lines=list(op.add_lines)))
        elif op.add_lines:
            hints.append(
                Hint(
                    kind="change",
                    line=op.start,
                    add_lines=list(op.add_lines),
                    delete_count=op.delete_count,
                )
            )
        else:
            hints.append(Hint(kind="delete", line=op.start, add_lines=[], delete_count=op.delete_count))
    return hints


def _style(text: str, color: bool, **kwargs) -> str:
    return typer.style(text, **kwargs) if color else text


def render_hints(filename: str, hints: list[Hint], color: bool = True) -> str:
    if not hints:
        return f"Nothing to change in {filename}."

    sections = []
    for hint in hints:
        if hint.kind == "insert":
            where = _style("after line", color, dim=True)
        else:
            where = _style("on line", color, dim=True)
        body = "\n".join(hint.add_lines)
        if hint.kind == "delete":
            body = _style(f"remove {hint.delete_count} line(s)", color, fg=typer.colors.RED)
        else:
            if hint.delete_count:
                body = (
                    _style(f"replace {hint.delete_count} line(s) with:", color, dim=True)
                    + "\n"
                    + _style(body, color, fg=typer.colors.GREEN)
                )
            else:
                body = _style(body, color, fg=typer.colors.GREEN)
        sections.append(f"{where} {hint.line}:\n{body}")

    title = _style(filename, color, bold=True)
    return f"Try adding this to file {title}:\n\n" + "\n\n".join(sections)
