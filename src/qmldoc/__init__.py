"""qmldoc - API documentation extraction for QML components."""

try:
    from importlib.metadata import version

    __version__ = version("qmldoc")
except Exception:
    __version__ = "0.0.0.dev0+local"  # Fallback for development
