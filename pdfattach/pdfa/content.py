"""Normalised view over the three ways callers hand content to the converter."""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from .exceptions import InvalidArgumentError


@dataclass
class DocumentContent:
    """Readable content supplied as a file path, a byte buffer or an open stream.

    Exactly one of ``path``, ``data`` or ``stream`` is set. ``name`` is the
    file name used for display and MIME resolution, when one is known.
    """

    name: str | None = None
    path: Path | None = None
    data: bytes | None = None
    stream: BinaryIO | None = None

    @classmethod
    def from_path(cls, path: str | Path) -> "DocumentContent":
        file_path = Path(path).expanduser()
        return cls(name=file_path.name, path=file_path)

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | None, name: str | None = None) -> "DocumentContent":
        if data is None:
            raise InvalidArgumentError("Byte content must not be None")
        return cls(name=name, data=bytes(data))

    @classmethod
    def from_stream(cls, stream: BinaryIO | None, name: str | None = None) -> "DocumentContent":
        if stream is None:
            raise InvalidArgumentError("Stream must not be None")
        if name is None:
            stream_name = getattr(stream, "name", None)
            if isinstance(stream_name, (str, Path)) and str(stream_name):
                name = Path(stream_name).name
        return cls(name=name, stream=stream)

    @property
    def kind(self) -> str:
        if self.path is not None:
            return "path"
        if self.data is not None:
            return "bytes"
        return "stream"

    def describe(self) -> str:
        if self.path is not None:
            return str(self.path)
        if self.data is not None:
            return f"<{len(self.data)} bytes{' ' + self.name if self.name else ''}>"
        return f"<stream{' ' + self.name if self.name else ''}>"

    def open(self) -> tuple[BinaryIO, bool]:
        """Return a readable binary handle and whether the caller must close it.

        Caller-supplied streams are never closed by the converter.
        """

        if self.path is not None:
            return self.path.open("rb"), True
        if self.data is not None:
            return io.BytesIO(self.data), True
        if self.stream is None:
            raise InvalidArgumentError("Content has no path, bytes or stream")
        return self.stream, False

    def read_bytes(self) -> bytes:
        if self.path is not None:
            return self.path.read_bytes()
        if self.data is not None:
            return self.data
        if self.stream is None:
            raise InvalidArgumentError("Content has no path, bytes or stream")
        return self.stream.read()


__all__ = ["DocumentContent"]
