"""
Version Resource Readers

Two-step access to a binary's raw version-resource block, mirroring the
Windows API: ask for the block size first, then fetch exactly that many bytes.

- Win32VersionReader: version.dll through ctypes (Windows only)
- PortableVersionReader: locates the VS_VERSION_INFO block in the file bytes
"""

import ctypes
import struct
import sys
from pathlib import Path
from typing import Optional, Protocol

from hexpack.contexts.versioning.logger import _log_debug
from hexpack.contexts.versioning.patterns import LAYOUT
from hexpack.utils.exceptions import VersionDecodeError


class VersionReader(Protocol):
    """Anything that can size and fetch a version-resource block."""

    def query_size(self, path: Path) -> int:
        ...

    def read_block(self, path: Path, size: int) -> bytes:
        ...


class Win32VersionReader:
    """Reads version resources with GetFileVersionInfoSizeW / GetFileVersionInfoW."""

    def __init__(self):
        if sys.platform != "win32":
            raise OSError("Win32VersionReader requires Windows")
        from ctypes import wintypes

        self._version = ctypes.WinDLL("version")
        self._version.GetFileVersionInfoSizeW.argtypes = [
            wintypes.LPCWSTR,
            ctypes.POINTER(wintypes.DWORD),
        ]
        self._version.GetFileVersionInfoSizeW.restype = wintypes.DWORD
        self._version.GetFileVersionInfoW.argtypes = [
            wintypes.LPCWSTR,
            wintypes.DWORD,
            wintypes.DWORD,
            ctypes.c_void_p,
        ]
        self._version.GetFileVersionInfoW.restype = wintypes.BOOL
        self._handle_type = wintypes.DWORD

    def query_size(self, path: Path) -> int:
        handle = self._handle_type(0)
        return int(self._version.GetFileVersionInfoSizeW(str(path), ctypes.byref(handle)))

    def read_block(self, path: Path, size: int) -> bytes:
        buffer = ctypes.create_string_buffer(size)
        if not self._version.GetFileVersionInfoW(str(path), 0, size, buffer):
            raise VersionDecodeError(f"GetFileVersionInfoW failed: {ctypes.WinError()}", path)
        return buffer.raw


class PortableVersionReader:
    """
    Finds the VS_VERSION_INFO block by scanning the raw file bytes.

    The block header sits immediately before the UTF-16 "VS_VERSION_INFO" key,
    and its first WORD (wLength) is the size of the whole block. Works on any
    platform and on any file that embeds such a block, PE image or not.
    """

    def _locate(self, data: bytes) -> Optional[int]:
        """Return the offset of the block header, or None when there is no block."""
        key_offset = data.find(LAYOUT.ROOT_KEY_UTF16)
        if key_offset < 0:
            return None
        return key_offset - LAYOUT.HEADER_SIZE

    def query_size(self, path: Path) -> int:
        data = Path(path).read_bytes()
        offset = self._locate(data)
        if offset is None:
            return 0
        if offset < 0:
            raise VersionDecodeError(
                f"{LAYOUT.ROOT_KEY} key found without room for its header", path
            )
        (length,) = struct.unpack_from("<H", data, offset)
        _log_debug(f"{LAYOUT.ROOT_KEY} at offset {offset}, {length} bytes")
        return length

    def read_block(self, path: Path, size: int) -> bytes:
        data = Path(path).read_bytes()
        offset = self._locate(data)
        if offset is None or offset < 0:
            raise VersionDecodeError(f"{LAYOUT.ROOT_KEY} block disappeared while reading", path)
        if size < LAYOUT.MIN_BLOCK_SIZE:
            raise VersionDecodeError(
                f"{LAYOUT.ROOT_KEY} block length {size} is smaller than its own header", path
            )

        block = data[offset : offset + size]
        if len(block) < size:
            raise VersionDecodeError(
                f"{LAYOUT.ROOT_KEY} block truncated: expected {size} bytes, found {len(block)}",
                path,
            )
        return block


def default_reader() -> VersionReader:
    """Use the operating system's version API where there is one."""
    if sys.platform == "win32":
        return Win32VersionReader()
    return PortableVersionReader()
