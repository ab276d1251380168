"""
Version Resource Constants

Layout constants and key names for the VS_VERSION_INFO resource block.
"""

import re
from dataclasses import dataclass
from typing import FrozenSet


@dataclass(frozen=True)
class BlockLayout:
    """
    Binary layout of a VS_VERSION_INFO block header.

    Every node starts with three little-endian WORDs (wLength, wValueLength,
    wType) followed by its NUL-terminated UTF-16 key.
    """
    ROOT_KEY: str = "VS_VERSION_INFO"
    ROOT_KEY_UTF16: bytes = "VS_VERSION_INFO".encode("utf-16-le")
    HEADER_SIZE: int = 6
    # Header plus the key and its terminator
    MIN_BLOCK_SIZE: int = 6 + len("VS_VERSION_INFO".encode("utf-16-le")) + 2


@dataclass(frozen=True)
class StringTableKeys:
    """
    Standard StringFileInfo keys.

    A token equal to one of these is a key; the token after it is its value.
    """
    FILE_VERSION: str = "FileVersion"
    PRODUCT_VERSION: str = "ProductVersion"

    ALL: FrozenSet[str] = frozenset(
        {
            "Comments",
            "CompanyName",
            "FileDescription",
            "FileVersion",
            "InternalName",
            "LegalCopyright",
            "LegalTrademarks",
            "OriginalFilename",
            "PrivateBuild",
            "ProductName",
            "ProductVersion",
            "SpecialBuild",
        }
    )


class VersionRegex:
    """Compiled patterns used while tokenizing and validating the string table."""

    # One String node: wValueLength char, wType (0 or 1), key, NUL terminator and
    # padding, then the value up to its own NUL (lookahead so the next key stays scannable)
    STRING_ENTRY = re.compile(
        r"(?P<value_len>[\s\S])[\x00\x01]"
        rf"(?P<key>{'|'.join(sorted(StringTableKeys.ALL))})\x00+"
        r"(?=(?P<value>[^\x00]*))"
    )

    # Digits and separators only
    VERSION_VALUE = re.compile(r"\d+(?:\.\d+)*")


LAYOUT = BlockLayout()
KEYS = StringTableKeys()
