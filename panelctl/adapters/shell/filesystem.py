"""
Filesystem operations — receipt-returning removal of files and trees.

Used by the uninstall flow and the service adapters' unit-file removal.
A path that is already gone counts as removed.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from panelctl.core.models.action import Receipt

logger = logging.getLogger(__name__)


class FilesystemOps:
    """Remove files and directories, reporting through Receipts."""

    name = "filesystem"

    def remove_file(self, path: str | Path) -> Receipt:
        """Delete a single file."""
        target = Path(path)
        try:
            target.unlink(missing_ok=True)
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                action_id="remove_file",
                error=f"Cannot remove {target}: {e}",
                metadata={"path": str(target)},
            )
        logger.info("Removed file %s", target)
        return Receipt.success(
            adapter=self.name,
            action_id="remove_file",
            output=f"Removed {target}",
            metadata={"path": str(target)},
        )

    def remove_tree(self, path: str | Path) -> Receipt:
        """Delete a directory and everything below it."""
        target = Path(path)
        if not target.exists():
            return Receipt.success(
                adapter=self.name,
                action_id="remove_tree",
                output=f"{target} already absent",
                metadata={"path": str(target)},
            )
        try:
            if target.is_dir() and not target.is_symlink():
                shutil.rmtree(target)
            else:
                target.unlink()
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                action_id="remove_tree",
                error=f"Cannot remove {target}: {e}",
                metadata={"path": str(target)},
            )
        logger.info("Removed %s", target)
        return Receipt.success(
            adapter=self.name,
            action_id="remove_tree",
            output=f"Removed {target}",
            metadata={"path": str(target)},
        )
