"""File extension to MIME type resolution for embedded attachments."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from .exceptions import InvalidArgumentError, UnsupportedAttachmentTypeError

MIME_TYPES: Mapping[str, str] = MappingProxyType(
    {
        "aac": "audio/aac",
        "abw": "application/x-abiword",
        "arc": "application/x-freearc",
        "avi": "video/x-msvideo",
        "azw": "application/vnd.amazon.ebook",
        "bin": "application/octet-stream",
        "bmp": "image/bmp",
        "bz": "application/x-bzip",
        "bz2": "application/x-bzip2",
        "csh": "application/x-csh",
        "css": "text/css",
        "csv": "text/csv",
        "doc": "application/msword",
        "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "eot": "application/vnd.ms-fontobject",
        "epub": "application/epub+zip",
        "gz": "application/gzip",
        "gif": "image/gif",
        "htm": "text/html",
        "html": "text/html",
        "ico": "image/vnd.microsoft.icon",
        "ics": "text/calendar",
        "jar": "application/java-archive",
        "jpeg": "image/jpeg",
        "jpg": "image/jpeg",
        "js": "text/javascript",
        "json": "application/json",
        "jsonld": "application/ld+json",
        "mid": "audio/midi",
        "midi": "audio/midi",
        "mjs": "text/javascript",
        "mp3": "audio/mpeg",
        "mpeg": "video/mpeg",
        "mpkg": "application/vnd.apple.installer+xml",
        "odp": "application/vnd.oasis.opendocument.presentation",
        "ods": "application/vnd.oasis.opendocument.spreadsheet",
        "odt": "application/vnd.oasis.opendocument.text",
        "oga": "audio/ogg",
        "ogv": "video/ogg",
        "ogx": "application/ogg",
        "opus": "audio/opus",
        "otf": "font/otf",
        "png": "image/png",
        "pdf": "application/pdf",
        "php": "application/x-httpd-php",
        "ppt": "application/vnd.ms-powerpoint",
        "pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
        "rar": "application/vnd.rar",
        "rtf": "application/rtf",
        "sh": "application/x-sh",
        "svg": "image/svg+xml",
        "swf": "application/x-shockwave-flash",
        "tar": "application/x-tar",
        "tif": "image/tiff",
        "tiff": "image/tiff",
        "ts": "video/mp2t",
        "ttf": "font/ttf",
        "txt": "text/plain",
        "vsd": "application/vnd.visio",
        "wav": "audio/wav",
        "weba": "audio/webm",
        "webm": "video/webm",
        "webp": "image/webp",
        "woff": "font/woff",
        "woff2": "font/woff2",
        "xhtml": "application/xhtml+xml",
        "xls": "application/vnd.ms-excel",
        "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "xml": "application/xml",
        "xul": "application/vnd.mozilla.xul+xml",
        "zip": "application/zip",
        "3gp": "video/3gpp",
        "3g2": "video/3gpp2",
        "7z": "application/x-7z-compressed",
    }
)


def normalize_extension(value: str) -> str:
    """Return the lower-case extension of *value* without its leading dot.

    *value* may be a bare extension (``"TXT"``), a dotted extension
    (``".txt"``) or a file name (``"notes.txt"``).
    """

    text = value.strip().lower()
    if "." in text:
        text = text.rsplit(".", 1)[1]
    return text


def resolve_mime_type(extension_or_name: str | None) -> str:
    """Return the MIME type registered for *extension_or_name*.

    Raises:
        InvalidArgumentError: If the value is ``None`` or empty.
        UnsupportedAttachmentTypeError: If the extension is not in
            :data:`MIME_TYPES`.
    """

    if extension_or_name is None or not str(extension_or_name).strip():
        raise InvalidArgumentError("File extension must be a non-empty string")

    extension = normalize_extension(str(extension_or_name))
    try:
        return MIME_TYPES[extension]
    except KeyError as exc:
        raise UnsupportedAttachmentTypeError(
            f"No MIME type registered for extension {extension_or_name!r}"
        ) from exc


__all__ = ["MIME_TYPES", "normalize_extension", "resolve_mime_type"]
