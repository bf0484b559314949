#!/usr/bin/env python3
"""
Tests for utils module.
"""

import os
import stat
import tempfile
from unittest.mock import patch

import pytest

from refsync.utils import atomic_write_text


def test_atomic_write_text_creates_file():
    """Test writing a new file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "references.ts")

        atomic_write_text(path, "export const x = 1;\n")

        with open(path, "r", encoding="utf-8") as f:
            assert f.read() == "export const x = 1;\n"
        assert os.listdir(tmpdir) == ["references.ts"]
        assert stat.S_IMODE(os.stat(path).st_mode) == 0o644


def test_atomic_write_text_replaces_and_keeps_mode():
    """Test replacing an existing file keeps its permissions."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "references.ts")
        with open(path, "w", encoding="utf-8") as f:
            f.write("old")
        os.chmod(path, 0o664)

        atomic_write_text(path, "new")

        with open(path, "r", encoding="utf-8") as f:
            assert f.read() == "new"
        assert stat.S_IMODE(os.stat(path).st_mode) == 0o664


def test_atomic_write_text_failure_cleans_up():
    """Test that a failed rename leaves the old file and no temporary files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "references.ts")
        with open(path, "w", encoding="utf-8") as f:
            f.write("old")

        with patch("refsync.utils.os.replace", side_effect=OSError("boom")):
            with pytest.raises(OSError):
                atomic_write_text(path, "new")

        with open(path, "r", encoding="utf-8") as f:
            assert f.read() == "old"
        assert os.listdir(tmpdir) == ["references.ts"]
