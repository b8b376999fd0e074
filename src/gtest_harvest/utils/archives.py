"""Helpers for reading GitHub artifact ZIP archives."""

from __future__ import annotations

import io
import zipfile

from gtest_harvest.logging import get_logger

logger = get_logger(__name__)


def iter_json_entries(zip_content: bytes) -> list[tuple[str, str]]:
    """Read every ``.json`` entry of a ZIP archive as text.

    Entries are returned in archive listing order. Directories and entries
    with other extensions are ignored; a corrupt archive yields no entries.

    Args:
        zip_content: ZIP file content as bytes.

    Returns:
        List of (entry_name, decoded_text) tuples.
    """
    entries: list[tuple[str, str]] = []

    try:
        with zipfile.ZipFile(io.BytesIO(zip_content), "r") as zf:
            for info in zf.infolist():
                if info.is_dir() or not info.filename.lower().endswith(".json"):
                    continue
                try:
                    content = zf.read(info.filename)
                except (zipfile.BadZipFile, KeyError) as e:
                    logger.debug("archive_entry_unreadable", entry=info.filename, error=str(e))
                    continue
                entries.append((info.filename, content.decode("utf-8", errors="replace")))
    except zipfile.BadZipFile as e:
        logger.debug("archive_unreadable", error=str(e))

    return entries
