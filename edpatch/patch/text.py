def normalize_newlines(text: str) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def split_lines(text: str) -> list[str]:
    """
    Split text into a fresh, mutable line buffer.

    A trailing newline yields a final empty line, so
    `join_lines(split_lines(text)) == normalize_newlines(text)`.
    """
    return normalize_newlines(text).split("\n")


def join_lines(lines: list[str]) -> str:
    return "\n".join(lines)
