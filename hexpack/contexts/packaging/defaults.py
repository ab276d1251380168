"""
Default packaging layout for HexEdit releases.

The tool runs from the repository's build/ directory, so the project root is
"..". Item sources are relative to the root; item destinations are relative to
the top-level folder inside the archive (the product name). String values may
use OmegaConf interpolation: ${bin_dir}, ${executable} and ${platform} are
available once a platform is selected.
"""

from typing import Any, Dict

DEFAULT_IGNORE = [".git", "*.git"]

# Build output directory per platform selector
DEFAULT_PLATFORMS = {
    "x86": {"bin_dir": "bin/x86/Release"},
    "amd64": {"bin_dir": "bin/amd64/Release"},
}

DEFAULT_ITEMS = [
    {"source": "README.md", "dest": "README.TXT"},
    {"source": "LICENCE.TXT", "dest": "LICENCE.TXT"},
    {"source": "${bin_dir}/${executable}", "dest": "${executable}"},
    {"source": "bin/typelib", "dest": "typelib"},
]


def get_default_layout() -> Dict[str, Any]:
    """
    Get the complete default layout, ready for OmegaConf.create().

    "platform" is left missing ("???") and filled in when a platform is selected.

    Returns:
        Dict with every layout field
    """
    return {
        "product": "HexEdit",
        "archive_prefix": "hexedit",
        "root": "..",
        "out_dir": "out",
        "executable": "HexEdit.exe",
        "manifest": "VERSION.TXT",
        "ignore": list(DEFAULT_IGNORE),
        "platform": "???",
        "bin_dir": "${platforms.${platform}.bin_dir}",
        "platforms": {name: dict(conf) for name, conf in DEFAULT_PLATFORMS.items()},
        "items": [dict(item) for item in DEFAULT_ITEMS],
    }
