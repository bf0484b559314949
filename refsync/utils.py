"""Utility functions for refsync."""

import os
import shutil
import logging
import tempfile
from typing import Dict, Any, Optional, Tuple

from refsync.config import get_config_value, resolve_path
from refsync.constants import DEFAULT_BIB_PATH, DEFAULT_OUTPUT_PATH

logger = logging.getLogger(__name__)

# --- Path Resolution ---

def get_repo_root(config: Dict[str, Any], repo_path: Optional[str] = None) -> str:
    """
    Get the site repository root with consistent precedence:
    1. Explicit repo_path (e.g. from the command line)
    2. Configuration
    3. Current working directory
    """
    root = repo_path or get_config_value(config, "repo_path") or os.getcwd()
    return resolve_path(root)

def get_sync_paths(config: Dict[str, Any], repo_path: Optional[str] = None) -> Tuple[str, str]:
    """
    Get the bibliography and generated module paths.

    Relative paths from the configuration are joined onto the repository root;
    absolute paths are used as they are.

    Args:
        config: Configuration dictionary
        repo_path: Optional repository root overriding the configuration

    Returns:
        Tuple of (bib_path, output_path)
    """
    root = get_repo_root(config, repo_path)
    bib_path = resolve_path(get_config_value(config, "bib_path", DEFAULT_BIB_PATH))
    output_path = resolve_path(get_config_value(config, "output_path", DEFAULT_OUTPUT_PATH))
    return os.path.join(root, bib_path), os.path.join(root, output_path)

# --- File Writing ---

def atomic_write_text(file_path: str, content: str) -> None:
    """
    Write text to a file by writing a temporary sibling and renaming it into place.

    The existing file is left untouched if any step fails. OSError propagates
    to the caller.
    """
    directory = os.path.dirname(os.path.abspath(file_path))
    fd, tmp_path = tempfile.mkstemp(
        prefix=f".{os.path.basename(file_path)}.", suffix=".tmp", dir=directory
    )
    try:
        with os.fdopen(fd, 'w', encoding='utf-8', newline='') as f:
            f.write(content)
        if os.path.exists(file_path):
            shutil.copymode(file_path, tmp_path)
        else:
            os.chmod(tmp_path, 0o644)
        os.replace(tmp_path, file_path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise
    logger.debug(f"Replaced {file_path}")
