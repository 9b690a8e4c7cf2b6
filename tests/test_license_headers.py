# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Verify all package source files carry the standard 2-line MIT license header."""

from pathlib import Path

SRC_ROOT = Path(__file__).resolve().parent.parent / "src" / "orbit_kernel"

EXPECTED_HEADER_LINES = [
    "# Copyright (c) 2026 Jeroen Visser. All rights reserved.",
    "# Licensed under the MIT License — see LICENSE.",
]


def test_all_source_files_have_standard_header():
    """Every .py file under src/orbit_kernel must start with the 2-line header."""
    files = sorted(SRC_ROOT.rglob("*.py"))
    assert len(files) > 0, "No .py files found in package"

    violations = []
    for py_file in files:
        lines = py_file.read_text(encoding="utf-8").splitlines()
        if lines[:2] != EXPECTED_HEADER_LINES:
            violations.append(py_file.relative_to(SRC_ROOT))

    assert not violations, f"Files with non-standard headers: {violations}"
