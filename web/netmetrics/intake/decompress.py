"""
Compressed capture opener.

Provides a single entry point `open_capture_stream(path)` that returns a
binary file-like object for reading a capture file's raw bytes, whether
the file is stored plain, gzip-compressed (.gz) or zstd-compressed (.zst).

This module does not parse PCAP/PCAPNG; it only handles decompression.
"""

from __future__ import annotations

import gzip
import os
from contextlib import contextmanager
from typing import Generator, IO, Literal, Union

import zstandard  # type: ignore

Compressor = Literal["none", "gzip", "zstd"]


def infer_compressor(name: str) -> Compressor:
    lower = name.lower()
    if lower.endswith(".gz"):
        return "gzip"
    if lower.endswith(".zst"):
        return "zstd"
    return "none"


@contextmanager
def open_capture_stream(path: Union[str, os.PathLike]) -> Generator[IO[bytes], None, None]:
    """
    Context manager yielding a readable binary stream for the capture file.

    - no compression suffix: open() in 'rb'
    - '.gz': gzip.open(..., 'rb')
    - '.zst': zstd stream reader over the file
    """
    compressor = infer_compressor(os.fspath(path))

    if compressor == "gzip":
        f = gzip.open(path, "rb")
        try:
            yield f
        finally:
            f.close()
        return

    if compressor == "zstd":
        raw = open(path, "rb")
        stream = zstandard.ZstdDecompressor().stream_reader(raw)
        try:
            yield stream
        finally:
            try:
                stream.close()
            finally:
                raw.close()
        return

    f = open(path, "rb")
    try:
        yield f
    finally:
        f.close()
