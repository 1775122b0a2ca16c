from __future__ import annotations

import ast
from pathlib import Path

HOME_PATH = Path(__file__).resolve().parents[1] / "app" / "Home.py"


def test_home_imports_src_modules_inside_fallback_block() -> None:
    tree = ast.parse(HOME_PATH.read_text(encoding="utf-8"))

    bare_src_imports = [
        node.module
        for node in tree.body
        if isinstance(node, ast.ImportFrom) and (node.module or "").startswith("src.")
    ]
    guarded_src_imports = [
        child.module
        for node in tree.body
        if isinstance(node, ast.Try)
        for child in node.body
        if isinstance(child, ast.ImportFrom) and (child.module or "").startswith("src.")
    ]

    assert bare_src_imports == []
    assert guarded_src_imports == ["src.planner", "src.presentation"]
