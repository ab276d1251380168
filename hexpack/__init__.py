"""
hexpack - HexEdit release packaging

Turns a built HexEdit executable into a versioned, distributable zip archive.

Architecture:
- Versioning Context: reads the version resource embedded in the executable
- Archiving Context: assembles the zip from files, directories and generated text
- Packaging Context: platform layouts and the end-to-end build driver
"""

__version__ = "0.1.0"
