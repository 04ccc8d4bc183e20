"""archive_writer.py — Zip an assembled EPUB file set and save it to disk."""

import io
import re
import tempfile
import zipfile
from datetime import datetime
from pathlib import Path

from epub_builder import assemble_epub
from models import Chapter

EXTENSION = "epub"
MAX_FILENAME_LEN = 120


class AssemblyError(Exception):
    """The archive could not be produced. Crawled chapters are unaffected."""


def write_archive(file_set: dict[str, str]) -> bytes:
    """
    Serialize the file set as a ZIP blob. The mimetype entry goes first and
    uncompressed, as EPUB readers require.
    """
    if "mimetype" not in file_set:
        raise AssemblyError("File set has no mimetype entry")

    buffer = io.BytesIO()
    try:
        with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
            zf.writestr("mimetype", file_set["mimetype"], compress_type=zipfile.ZIP_STORED)
            for name, content in file_set.items():
                if name == "mimetype":
                    continue
                zf.writestr(name, content)
    except (ValueError, TypeError, zipfile.BadZipFile, UnicodeEncodeError) as e:
        raise AssemblyError(str(e)) from e
    return buffer.getvalue()


def archive_filename(book_title: str, extension: str = EXTENSION) -> str:
    """'<title>.epub' with path separators and other illegal characters replaced."""
    safe = re.sub(r'[\x00-\x1f\\/:*?"<>|]', "_", book_title).strip().strip(".")
    safe = safe[:MAX_FILENAME_LEN].rstrip() or "book"
    return f"{safe}.{extension}"


def save_archive(
    blob: bytes,
    book_title: str,
    output_dir: Path | None = None,
    output: Path | None = None,
) -> Path:
    """Write the blob to output, or output_dir/<title>.epub. Never leaves a partial file."""
    target = Path(output) if output else Path(output_dir or ".") / archive_filename(book_title)

    tmp_path = None
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="wb", suffix=".part", delete=False, dir=target.parent
        ) as tmp:
            tmp_path = Path(tmp.name)
            tmp.write(blob)
        tmp_path.replace(target)
    except OSError as e:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        raise AssemblyError(f"Could not write {target}: {e}") from e
    return target


def build_book(
    book_title: str,
    chapters: list[Chapter],
    output_dir: Path | None = None,
    output: Path | None = None,
    modified: datetime | None = None,
) -> Path:
    """Assemble, zip and save. Returns the path of the saved archive."""
    file_set = assemble_epub(book_title, chapters, modified=modified)
    blob = write_archive(file_set)
    return save_archive(blob, book_title, output_dir=output_dir, output=output)
