"""MediaPedia backend core.

Credential storage, tray visibility state and schema migrations for the
MediaPedia desktop catalog. The host UI talks to this package through
`mediapedia.commands.CommandSurface`.
"""

__version__ = "0.1.0"
