"""`python -m mediapedia` entrypoint.

For installed usage, prefer the `mediapedia` console script.
"""

from __future__ import annotations

from .tray.entrypoint import main


if __name__ == "__main__":
    raise SystemExit(main())
