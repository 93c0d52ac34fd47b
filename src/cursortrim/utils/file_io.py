"""File IO helpers used by the command-line front end."""

from __future__ import annotations

import codecs
import locale
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

__all__ = ["TextFile", "read_text", "read_text_file", "write_text", "detect_newline"]

# utf-32-le's BOM starts with utf-16-le's, so the longer marks are checked first
_BOM_MAP: dict[bytes, str] = {
    codecs.BOM_UTF32_LE: "utf-32-le",
    codecs.BOM_UTF32_BE: "utf-32-be",
    codecs.BOM_UTF8: "utf-8-sig",
    codecs.BOM_UTF16_LE: "utf-16-le",
    codecs.BOM_UTF16_BE: "utf-16-be",
}


@dataclass(slots=True, frozen=True)
class TextFile:
    """Decoded file contents plus what is needed to write them back."""

    text: str
    encoding: str
    newline: str


def read_text(
    path: Path | str,
    *,
    encoding: str | None = None,
    errors: str = "strict",
    normalize_newlines: bool = True,
) -> str:
    """Read a text file with encoding detection and optional newline normalization."""

    return read_text_file(path, encoding=encoding, errors=errors, normalize_newlines=normalize_newlines).text


def read_text_file(
    path: Path | str,
    *,
    encoding: str | None = None,
    errors: str = "strict",
    normalize_newlines: bool = True,
    default_newline: str = "\n",
) -> TextFile:
    """Like :func:`read_text` but also report the encoding and newline style."""

    raw = Path(path).read_bytes()
    detected_encoding = encoding or _detect_encoding(raw)
    text = _strip_bom(raw.decode(detected_encoding, errors=errors))
    newline = detect_newline(text, default_newline)
    if normalize_newlines:
        text = _normalize_newlines(text)
    return TextFile(text=text, encoding=_without_bom(detected_encoding), newline=newline)


def write_text(
    path: Path | str,
    content: str,
    *,
    encoding: str = "utf-8",
    newline: str = "\n",
    atomic: bool = True,
) -> Path:
    """Write text to disk using atomic semantics and configurable newline style."""

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    normalized = _apply_newline_policy(content, newline)
    if not atomic:
        with target.open("w", encoding=encoding, newline="") as handle:
            handle.write(normalized)
            handle.flush()
            os.fsync(handle.fileno())
        return target

    descriptor, tmp_name = tempfile.mkstemp(
        dir=str(target.parent), prefix=f".{target.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(descriptor, "w", encoding=encoding, newline="") as handle:
            handle.write(normalized)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, target)
    finally:
        if os.path.exists(tmp_name):  # pragma: no cover - cleanup path
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
    return target


def detect_newline(text: str, default: str = "\n") -> str:
    """Return the first newline sequence used in ``text``."""

    index = text.find("\r")
    lf_index = text.find("\n")
    if index == -1:
        return "\n" if lf_index != -1 else default
    if lf_index != -1 and lf_index < index:
        return "\n"
    return "\r\n" if text[index + 1 : index + 2] == "\n" else "\r"


def _detect_encoding(raw: bytes) -> str:
    for bom, encoding in _BOM_MAP.items():
        if raw.startswith(bom):
            return encoding

    preferred = locale.getpreferredencoding(False) or "utf-8"
    seen: set[str] = set()
    for candidate in ("utf-8", preferred, "latin-1"):
        if not candidate or candidate in seen:
            continue
        seen.add(candidate)
        try:
            raw.decode(candidate)
            return candidate
        except UnicodeDecodeError:
            continue
    return "utf-8"


def _without_bom(encoding: str) -> str:
    # utf-16/utf-32 codecs write their own BOM back; utf-8 files are written without one
    if encoding == "utf-8-sig":
        return "utf-8"
    if encoding.startswith(("utf-16", "utf-32")):
        return encoding[:6]
    return encoding


def _normalize_newlines(text: str) -> str:
    if "\r" not in text:
        return text
    text = text.replace("\r\n", "\n")
    return text.replace("\r", "\n")


def _strip_bom(text: str) -> str:
    return text[1:] if text.startswith("\ufeff") else text


def _apply_newline_policy(content: str, newline: str) -> str:
    normalized = _normalize_newlines(content)
    if newline == "\n":
        return normalized
    if newline == "\r\n":
        return normalized.replace("\n", "\r\n")
    if newline == "\r":
        return normalized.replace("\n", "\r")
    raise ValueError(f"Unsupported newline policy: {newline!r}")
