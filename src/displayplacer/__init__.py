"""Configure macOS screen resolution, scaling, rotation, origin and mirroring."""

__version__ = "1.2.0"
__author__ = "Jake Hilborn"
__url__ = "https://github.com/jakehilborn/displayplacer"
