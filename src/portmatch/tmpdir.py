"""Scratch directories for package operations."""

from __future__ import annotations

import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from portmatch.core.exceptions import ConfigurationError


if TYPE_CHECKING:
    from collections.abc import Iterator

    from portmatch.config import Settings


logger = structlog.get_logger(__name__)


@contextmanager
def scratch_directory(settings: Settings, prefix: str = "portupgrade") -> Iterator[Path]:
    """Create a private directory under settings.tmp_root for one operation.

    The directory and everything in it is removed when the block exits,
    whether normally or by exception. Failure to remove it is logged, not
    raised, so it never masks the block's own outcome.

    Args:
        settings: Settings providing tmp_root.
        prefix: Name prefix for the created directory.

    Yields:
        Path to the new directory.

    Raises:
        ConfigurationError: If tmp_root is not an existing directory.

    Example:
        >>> with scratch_directory(Settings.from_env()) as tmp:
        ...     (tmp / "plist").write_text("@name foo-1.0\\n")
    """
    root = settings.tmp_root
    if not root.is_dir():
        raise ConfigurationError(f"Temporary directory {root} does not exist")

    path = Path(tempfile.mkdtemp(prefix=prefix, dir=root))
    logger.debug("scratch_directory_created", path=str(path))
    try:
        yield path
    finally:
        try:
            shutil.rmtree(path)
        except OSError as e:
            logger.warning("scratch_directory_cleanup_failed", path=str(path), error=str(e))
