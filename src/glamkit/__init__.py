"""
glamkit: material row addressing and customization sets for character
appearance tooling.

Packs a draw object / slot / material / row address into a single 32-bit
key that resolves back to a live color-table row, and builds the
customization option sets of every clan and gender once at startup.
"""

__version__ = "0.1.0"
__author__ = "glamkit Contributors"

# Core service imports
from .customize import CustomizeManager, CustomizeSet
from .materials import MaterialValueIndex, MaterialValueStore, DrawObjectType
from .utils.logging_config import setup_logging

__all__ = [
    # Services
    "CustomizeManager",
    "MaterialValueStore",

    # Logging
    "setup_logging",

    # Data models
    "CustomizeSet",
    "MaterialValueIndex",
    "DrawObjectType",
]
