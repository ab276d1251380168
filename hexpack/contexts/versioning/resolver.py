"""
Version Resolution

Reads FileVersion / ProductVersion from an executable's embedded version
resource. The block's string table is decoded, split into tokens and mapped
key -> value; version values are then validated separately (digits and dots
only). Missing keys or malformed values yield absent fields, not errors.
"""

import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from hexpack.contexts.versioning.logger import _log_debug, _log_info, _log_warning
from hexpack.contexts.versioning.patterns import KEYS, VersionRegex
from hexpack.contexts.versioning.readers import VersionReader, default_reader
from hexpack.utils.exceptions import SourceNotFoundError, VersionDecodeError


@dataclass(frozen=True)
class VersionInfo:
    """
    Version strings read from an executable.

    Attributes:
        file_version: FileVersion value (None when absent)
        product_version: ProductVersion value (None when absent)
    """

    file_version: Optional[str] = None
    product_version: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.file_version is None and self.product_version is None


# ============================================================================
# String Table Decoding
# ============================================================================


def decode_string_table(block: bytes) -> str:
    """
    Decode a raw version block as UTF-16LE code units.

    Units above 255 are dropped: keys and version values are ASCII, and the
    binary fields in between only need to act as separators.

    Args:
        block: Raw version-resource bytes

    Returns:
        Decoded text, including the control characters that separate entries

    Raises:
        VersionDecodeError: If the block is not a whole number of UTF-16 units
    """
    if len(block) % 2:
        raise VersionDecodeError(f"Version block has odd length ({len(block)} bytes)")

    units = struct.unpack(f"<{len(block) // 2}H", block)
    return "".join(chr(unit) for unit in units if unit < 256)


def tokenize(text: str) -> List[Tuple[str, str]]:
    """
    Split decoded string-table text into (key, value) tokens.

    A value runs from the end of its key's NUL padding to the next NUL. The
    String node's wValueLength (the character just before wType) decides
    whether a value is present at all: 0 or 1 means an empty value, so the
    next node's header is never mistaken for one.

    Args:
        text: Output of decode_string_table()

    Returns:
        Known StringFileInfo keys with their values, in block order
    """
    tokens = []
    for match in VersionRegex.STRING_ENTRY.finditer(text):
        value = match.group("value") if ord(match.group("value_len")) > 1 else ""
        tokens.append((match.group("key"), value))
    return tokens


def parse_string_table(tokens: List[Tuple[str, str]]) -> Dict[str, str]:
    """
    Map each StringFileInfo key to its value.

    The first non-empty occurrence of a key wins (later ones come from extra
    language tables). Keys with empty values are left out, so they read as
    absent.

    Args:
        tokens: Output of tokenize()

    Returns:
        Mapping from key name to raw value string
    """
    table: Dict[str, str] = {}
    for key, value in tokens:
        if value and key in KEYS.ALL and key not in table:
            table[key] = value
    return table


def constrain_version(value: Optional[str]) -> Optional[str]:
    """
    Accept a version value only if it is made of digits and dot separators.

    Args:
        value: Raw value from the string table

    Returns:
        The stripped value, or None when absent or not a plain version number
    """
    if value is None:
        return None
    value = value.strip()
    if VersionRegex.VERSION_VALUE.fullmatch(value):
        return value
    return None


# ============================================================================
# Resolution
# ============================================================================


def _version_field(table: Dict[str, str], key: str) -> Optional[str]:
    raw = table.get(key)
    value = constrain_version(raw)
    if raw is not None and value is None:
        _log_warning(f"Ignoring {key} '{raw}': not a plain version number")
    return value


def resolve_version(path: Path, reader: Optional[VersionReader] = None) -> VersionInfo:
    """
    Read the version resource of an executable.

    Args:
        path: Executable to inspect
        reader: Version-resource reader (default: platform default)

    Returns:
        VersionInfo; empty when the binary carries no version resource

    Raises:
        SourceNotFoundError: If the executable does not exist
        VersionDecodeError: If a version block exists but cannot be decoded
    """
    path = Path(path)
    if not path.is_file():
        raise SourceNotFoundError("Executable not found", path)

    if reader is None:
        reader = default_reader()

    size = reader.query_size(path)
    if size == 0:
        _log_info(f"No version resource in {path.name}")
        return VersionInfo()

    block = reader.read_block(path, size)
    tokens = tokenize(decode_string_table(block))
    table = parse_string_table(tokens)
    _log_debug(f"String table keys: {sorted(table)}")

    info = VersionInfo(
        file_version=_version_field(table, KEYS.FILE_VERSION),
        product_version=_version_field(table, KEYS.PRODUCT_VERSION),
    )
    _log_debug(f"FileVersion={info.file_version} ProductVersion={info.product_version}")
    return info
