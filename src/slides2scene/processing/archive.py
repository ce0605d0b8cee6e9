"""Read-only access to the parts of a zipped OOXML package."""

from __future__ import annotations

import io
import logging
import zipfile
import zlib
from dataclasses import dataclass

from slides2scene.errors import ArchiveReadError, PartParseError
from slides2scene.models import PartKind

log = logging.getLogger("slides2scene")

# Anything zipfile can throw at us while inflating a member.
_DECOMPRESSION_ERRORS = (
    zipfile.BadZipFile,
    zlib.error,
    EOFError,
    OSError,
    ValueError,
    NotImplementedError,  # Unsupported compression method
    RuntimeError,  # Encrypted member
)


# region ArchivePart
@dataclass(frozen=True)
class ArchivePart:
    """A named entry in the package. Reads go back through the owning archive."""

    archive: PresentationArchive
    path: str

    @property
    def kind(self) -> PartKind:
        if self.path.endswith((".xml", ".rels")):
            return PartKind.XML
        return PartKind.BINARY

    def read_bytes(self) -> bytes:
        data = self.archive.read_bytes(self.path)
        if data is None:
            # Listed a moment ago, so this only happens if the archive was swapped out from under us.
            raise ArchiveReadError(f"Part disappeared from package: {self.path}")
        return data

    def read_text(self) -> str:
        return _decode_text(self.read_bytes(), self.path)


# endregion


# region PresentationArchive
class PresentationArchive:
    """
    Thin wrapper around zipfile that satisfies the archive part reader contract:

    - text content by part path
    - binary content by part path
    - enumeration of the parts under a folder prefix, as (relative_path, part) pairs
    """

    def __init__(self, zip_file: zipfile.ZipFile, name: str = "<memory>") -> None:
        self._zip = zip_file
        self.name = name
        self._names: set[str] = {
            info.filename for info in zip_file.infolist() if not info.is_dir()
        }

    # region open
    @classmethod
    def open(cls, content: bytes, name: str = "<memory>") -> PresentationArchive:
        """Open an in-memory package. Raises ArchiveReadError if the bytes are not a readable zip."""
        try:
            zip_file = zipfile.ZipFile(io.BytesIO(content))
        except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError, ValueError) as e:
            log.error(f"Could not open package {name}: {e}")
            raise ArchiveReadError(f"Package {name} is not a readable archive: {e}") from e

        log.debug(f"Opened package {name} with {len(zip_file.infolist())} entries.")
        return cls(zip_file, name=name)

    # endregion

    def close(self) -> None:
        self._zip.close()

    def __enter__(self) -> PresentationArchive:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __contains__(self, path: str) -> bool:
        return path in self._names

    # region reads
    def read_bytes(self, path: str) -> bytes | None:
        """Binary content of a part, or None if the package has no such part."""
        if path not in self._names:
            return None
        try:
            return self._zip.read(path)
        except _DECOMPRESSION_ERRORS as e:
            log.warning(f"Could not decompress part {path} in {self.name}: {e}")
            raise ArchiveReadError(f"Could not decompress part {path}: {e}") from e

    def read_text(self, path: str) -> str | None:
        """Text content of a part, or None if the package has no such part."""
        data = self.read_bytes(path)
        if data is None:
            return None
        return _decode_text(data, path)

    # endregion

    # region folder
    def folder(self, prefix: str) -> list[tuple[str, ArchivePart]]:
        """
        Every part under a folder prefix, including nested folders, sorted by path.

        Args:
            prefix: Folder path such as "ppt/media/". A missing trailing slash is added.

        Returns:
            (relative_path, part) pairs, where relative_path has the prefix removed.
        """
        if not prefix.endswith("/"):
            prefix += "/"
        return [
            (path[len(prefix) :], ArchivePart(self, path))
            for path in sorted(self._names)
            if path.startswith(prefix) and len(path) > len(prefix)
        ]

    # endregion


# endregion


def _decode_text(data: bytes, path: str) -> str:
    """XML parts are UTF-8 (with or without BOM). Bad encoding is a parse problem, not a container one."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        log.warning(f"Part {path} is not valid UTF-8: {e}")
        raise PartParseError(f"Part {path} is not valid UTF-8: {e}") from e
