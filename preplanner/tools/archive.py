import base64
import io
import zipfile
from typing import Iterable

from preplanner.llm.schemas import GeneratedFile


"""
Archive packaging tool.

What it does:
- Strips leading path separators so entries stay under the archive root
- Packs generated files into an in-memory ZIP
- Encodes the ZIP as a data URL for the step response
"""


class ArchiveError(ValueError):
    pass


def sanitize_path(path: str) -> str:
    return (path or "").lstrip("/\\")


def pack_files(files: Iterable[GeneratedFile]) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for f in files:
            name = sanitize_path(f.path)
            if not name:
                raise ArchiveError(f"Generated file has an empty path (got {f.path!r})")
            zf.writestr(name, f.contents.encode("utf-8"))
    return buf.getvalue()


def to_data_url(blob: bytes) -> str:
    return "data:application/zip;base64," + base64.b64encode(blob).decode("ascii")
