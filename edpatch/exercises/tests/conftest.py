from pathlib import Path

import pytest

HELLO_WAT = """\
(module
  (func (export "hello") (result i32)
    ;; return 42
  )
)
"""

HELLO_PATCH = """\
3c3
<     ;; return 42
---
>     i32.const 42
"""

HELLO_SOLVED = """\
(module
  (func (export "hello") (result i32)
    i32.const 42
  )
)
"""

HELLO_TS = "const answer = 0;\nexport default answer;\n"
HELLO_TS_PATCH = "1c1\n< const answer = 0;\n---\n> const answer = 42;\n"

ORDERING_WAT = "(module\n  (func $a)\n)\n"
ORDERING_PATCH = "2a3\n>   (func $b)\n"
ORDERING_SOLVED = "(module\n  (func $a)\n  (func $b)\n)\n"

EXPORT_WAT = "(module)\n"


def write_tree(root: Path, files: dict[str, str]) -> None:
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


@pytest.fixture
def workspace_root(tmp_path: Path, monkeypatch) -> Path:
    monkeypatch.delenv("EDPATCH_STRICT_PATCH", raising=False)
    root = tmp_path / "exercises-repo"
    write_tree(
        root,
        {
            "exercises/001_hello.wat": HELLO_WAT,
            "exercises/001_hello.ts": HELLO_TS,
            "exercises/002_ordering.wat": ORDERING_WAT,
            "exercises/003_export.wat": EXPORT_WAT,
            "exercises/README.md": "not an exercise\n",
            "patch/001_hello.patch": HELLO_PATCH,
            "patch/001_hello.ts.patch": HELLO_TS_PATCH,
            "patch/002_ordering.patch": ORDERING_PATCH,
            "patch/003_export.patch": "",
        },
    )
    return root


@pytest.fixture
def solved_texts() -> dict[str, str]:
    return {
        "001_hello.wat": HELLO_SOLVED,
        "001_hello.ts": "const answer = 42;\nexport default answer;\n",
        "002_ordering.wat": ORDERING_SOLVED,
    }
