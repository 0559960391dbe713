"""Content-based text/non-text classification.

Files are classified from their leading bytes, never from their name or
extension. Only content that looks like UTF-8 text is treated as text,
since that is the only encoding the rewriter reads back.
"""

from __future__ import annotations

import codecs
from pathlib import Path

SNIFF_SIZE = 8192

ZERO_SIZE = "application/x-zerosize"
OCTET_STREAM = "application/octet-stream"
TEXT_PLAIN = "text/plain"

# Leading-byte signatures of common binary formats
MAGIC_SIGNATURES: list[tuple[bytes, str]] = [
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"BM", "image/bmp"),
    (b"\x00\x00\x01\x00", "image/vnd.microsoft.icon"),
    (b"%PDF-", "application/pdf"),
    (b"PK\x03\x04", "application/zip"),
    (b"PK\x05\x06", "application/zip"),
    (b"\x1f\x8b", "application/gzip"),
    (b"BZh", "application/x-bzip2"),
    (b"\xfd7zXZ\x00", "application/x-xz"),
    (b"7z\xbc\xaf\x27\x1c", "application/x-7z-compressed"),
    (b"\x7fELF", "application/x-executable"),
    (b"MZ", "application/x-msdownload"),
    (b"\xca\xfe\xba\xbe", "application/java-vm"),
    (b"\xcf\xfa\xed\xfe", "application/x-mach-binary"),
    (b"\x00asm", "application/wasm"),
    (b"SQLite format 3\x00", "application/vnd.sqlite3"),
    (b"OggS", "audio/ogg"),
    (b"fLaC", "audio/flac"),
    (b"ID3", "audio/mpeg"),
    (b"wOFF", "font/woff"),
    (b"wOF2", "font/woff2"),
]


def _looks_like_utf8(chunk: bytes, truncated: bool) -> bool:
    if b"\x00" in chunk:
        return False
    decoder = codecs.getincrementaldecoder("utf-8")()
    try:
        # A multi-byte sequence cut off at the sniff boundary is not an error
        decoder.decode(chunk, final=not truncated)
    except UnicodeDecodeError:
        return False
    return True


def sniff_bytes(chunk: bytes, truncated: bool = False) -> str:
    """Guess a media type from leading file bytes.

    Args:
        chunk: Leading bytes of the file
        truncated: True if the file continues past chunk

    Returns:
        Media type string, application/octet-stream when nothing matches
    """
    if not chunk:
        return ZERO_SIZE

    # Signatures made of plain ASCII also start ordinary text files, so only
    # trust them when the chunk is not valid text
    for signature, mime in MAGIC_SIGNATURES:
        if chunk.startswith(signature) and not (signature.isascii() and _looks_like_utf8(chunk, truncated)):
            return mime

    if _looks_like_utf8(chunk, truncated):
        return TEXT_PLAIN
    return OCTET_STREAM


def sniff_media_type(path: Path) -> str:
    """Guess the media type of a file from its content.

    Raises:
        OSError: If the file cannot be opened or read
    """
    with path.open("rb") as f:
        chunk = f.read(SNIFF_SIZE + 1)
    truncated = len(chunk) > SNIFF_SIZE
    return sniff_bytes(chunk[:SNIFF_SIZE], truncated=truncated)


def is_text_media_type(mime: str | None) -> bool:
    """Check whether a media type descriptor names a textual category."""
    return mime is not None and "text" in mime


def is_text_file(path: Path) -> bool:
    """Check whether a file's content is text.

    Undetermined content counts as non-text.

    Raises:
        OSError: If the file cannot be opened or read
    """
    return is_text_media_type(sniff_media_type(path))
