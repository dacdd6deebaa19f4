"""
PDF selection over ZIP archives.

Reads an in-memory archive, keeps the non-directory members whose name ends
in ``.pdf`` (any case), and returns them in archive order with directory
prefixes stripped from their names.
"""

import io
import logging
import zipfile
import zlib
from typing import Optional

from src.errors import MalformedArchiveError, NoMatchingEntriesError
from src.models.archive import ArchiveEntry

logger = logging.getLogger(__name__)

PDF_SUFFIX = ".pdf"


def entry_basename(member_name: str) -> str:
    """Final path component of an archive member name."""
    return member_name.replace("\\", "/").rsplit("/", 1)[-1]


def is_pdf_member(info: zipfile.ZipInfo) -> bool:
    """True for file members named ``*.pdf``, compared case-insensitively."""
    if info.is_dir():
        return False
    return info.filename.lower().endswith(PDF_SUFFIX)


def _read_pdf_entries(archive: bytes, limit: Optional[int] = None) -> list[ArchiveEntry]:
    """Decompress up to ``limit`` PDF members, in archive order."""
    try:
        with zipfile.ZipFile(io.BytesIO(archive)) as zf:
            members = [info for info in zf.infolist() if is_pdf_member(info)]
            entries = [
                ArchiveEntry(name=entry_basename(info.filename), content=zf.read(info))
                for info in members[:limit]
            ]
    except (zipfile.BadZipFile, zipfile.LargeZipFile, zlib.error, EOFError) as exc:
        raise MalformedArchiveError("Failed to read ZIP archive", details=str(exc)) from exc
    except (ValueError, OSError) as exc:
        # Corrupt offsets seek outside the buffer
        raise MalformedArchiveError("Failed to read ZIP archive", details=str(exc)) from exc
    except (RuntimeError, NotImplementedError) as exc:
        # Encrypted members and unsupported compression methods
        raise MalformedArchiveError("Failed to read ZIP archive", details=str(exc)) from exc

    if not entries:
        raise NoMatchingEntriesError("No PDF files found in archive")

    logger.info(
        "Read %d PDF entries (%d bytes) from archive",
        len(entries),
        sum(entry.size for entry in entries),
    )
    return entries


def select_pdf_entries(archive: bytes) -> list[ArchiveEntry]:
    """
    Extract every PDF member of a ZIP archive.

    Args:
        archive: Raw ZIP bytes

    Returns:
        Matching entries in enumeration order (never empty)

    Raises:
        MalformedArchiveError: archive or one of its PDF members is unreadable
        NoMatchingEntriesError: archive holds no PDF members
    """
    return _read_pdf_entries(archive)


def select_first_pdf_entry(archive: bytes) -> ArchiveEntry:
    """First PDF member in archive order.

    Used for single-file binary responses; later matches are never
    decompressed.
    """
    return _read_pdf_entries(archive, limit=1)[0]
