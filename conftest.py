"""
Force a non-interactive matplotlib backend for local test runs.

This keeps draw tests working on machines without a display.
"""
from __future__ import annotations

import matplotlib

matplotlib.use("Agg")
