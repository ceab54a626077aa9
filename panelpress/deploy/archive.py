"""Archive builder — zips a build directory's contents for upload.

Entries are stored relative to the source root; the source directory's
own name never appears as a prefix.  Files are added in sorted path order
so the entry set is reproducible for the same tree (timestamps are not).
"""

from __future__ import annotations

import logging
import os
import zipfile
from pathlib import Path

from panelpress.errors import ArchiveError, SourceNotFoundError
from panelpress.models.deploy import ArchiveBundle

logger = logging.getLogger(__name__)

COMPRESSION_LEVEL = 9


def _raise_walk_error(exc: OSError) -> None:
    raise exc


class ArchiveBuilder:
    """Builds a ZIP archive of everything under ``source_directory``.

    Parameters
    ----------
    source_directory:
        The directory whose contents are archived.
    """

    def __init__(self, source_directory: Path) -> None:
        self._source = Path(source_directory)

    @property
    def source_directory(self) -> Path:
        return self._source

    def iter_entries(self, exclude: Path | None = None) -> list[tuple[Path, str]]:
        """Return ``(filesystem_path, archive_name)`` pairs in sorted order.

        Empty directories get a trailing-slash entry of their own; directories
        that contain files are implied by their files' paths.
        """
        excluded = exclude.resolve() if exclude is not None else None
        entries: list[tuple[Path, str]] = []
        for dirpath, dirnames, filenames in os.walk(self._source, onerror=_raise_walk_error):
            dirnames.sort()
            current = Path(dirpath)
            if not dirnames and not filenames and current != self._source:
                name = current.relative_to(self._source).as_posix() + "/"
                entries.append((current, name))
            for filename in sorted(filenames):
                path = current / filename
                if excluded is not None and path.resolve() == excluded:
                    continue
                entries.append((path, path.relative_to(self._source).as_posix()))
        return entries

    def build(self, archive_path: Path) -> ArchiveBundle:
        """Write the archive to ``archive_path`` and describe it.

        Raises
        ------
        SourceNotFoundError
            If the source directory does not exist.
        ArchiveError
            On any read or write failure.  The partial archive is removed.
        """
        archive_path = Path(archive_path)
        if not self._source.is_dir():
            raise SourceNotFoundError(self._source)

        logger.info("Creating ZIP bundle from %s/...", self._source)

        uncompressed = 0
        file_count = 0
        try:
            entries = self.iter_entries(exclude=archive_path)
            with zipfile.ZipFile(
                archive_path,
                "w",
                compression=zipfile.ZIP_DEFLATED,
                compresslevel=COMPRESSION_LEVEL,
            ) as bundle:
                for path, name in entries:
                    bundle.write(path, arcname=name)
                    if not name.endswith("/"):
                        file_count += 1
                        uncompressed += path.stat().st_size
            compressed = archive_path.stat().st_size
        except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile) as exc:
            archive_path.unlink(missing_ok=True)
            raise ArchiveError(f"Could not create archive {archive_path}: {exc}") from exc

        result = ArchiveBundle(
            path=archive_path,
            file_count=file_count,
            uncompressed_bytes=uncompressed,
            compressed_bytes=compressed,
        )
        logger.info(
            "ZIP created: %.2f MB (%d files, %d bytes uncompressed)",
            result.compressed_mb,
            file_count,
            uncompressed,
        )
        return result
