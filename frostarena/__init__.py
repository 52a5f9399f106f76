"""Window-free logic for a two-player ice arena: items, equipment, weapons, maps and scenes."""

__version__ = "0.1.0"