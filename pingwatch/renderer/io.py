"""Atomic snapshot output for dashboards polling the output directory."""

import hashlib
import os
import tempfile
from pathlib import Path

import structlog

from pingwatch.renderer.models import GeneratedFile


logger = structlog.get_logger()


class AtomicWriter:
    """Replaces snapshot files in a single rename.

    Each write goes to a uniquely named temporary file next to the target,
    so a ``watch`` loop and a one-off ``render`` sharing an output directory
    never clobber each other's partial output. A failed write leaves the
    previous snapshot in place and removes its temporary file.
    """

    def __init__(self, base_dir: Path, run_id: str | None = None) -> None:
        """Initialize the writer.

        Args:
            base_dir: Directory reported paths are relative to.
            run_id: Optional run identifier for logging.
        """
        self._base_dir = base_dir
        self._log = logger.bind(component="atomic_writer")
        if run_id:
            self._log = self._log.bind(run_id=run_id)

    def write(self, path: Path, content: str) -> GeneratedFile:
        """Write ``content`` to ``path``, creating parent directories.

        Args:
            path: Target file path.
            content: Text to write as UTF-8.

        Returns:
            GeneratedFile describing the written snapshot.

        Raises:
            OSError: If the file cannot be written or renamed.
        """
        data = content.encode("utf-8")
        path.parent.mkdir(parents=True, exist_ok=True)

        fd, temp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
        temp_path = Path(temp_name)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
            temp_path.replace(path)
        except OSError:
            temp_path.unlink(missing_ok=True)
            self._log.error("snapshot_write_failed", path=str(path))
            raise

        file_info = GeneratedFile(
            path=self._display_path(path),
            absolute_path=str(path),
            bytes_written=len(data),
            sha256=hashlib.sha256(data).hexdigest(),
        )
        self._log.debug(
            "snapshot_written",
            path=file_info.path,
            bytes=file_info.bytes_written,
            sha256=file_info.sha256[:12],
        )
        return file_info

    def _display_path(self, path: Path) -> str:
        if path.is_relative_to(self._base_dir):
            return str(path.relative_to(self._base_dir))
        return str(path)
