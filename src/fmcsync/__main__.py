from __future__ import annotations

from fmcsync.ui.cli import run

run()
