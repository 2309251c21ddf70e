"""modrules - module dependency and conditional-linking resolver for native plugins."""

__version__ = "0.3.0"
