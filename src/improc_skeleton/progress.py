from __future__ import annotations

from improc_skeleton.types import ProgressCallback


def report_progress(progress: ProgressCallback | None, current: int, total: int) -> None:
    """Invoke ``progress`` if given; ``total`` is at least 1 and ``current`` never exceeds it."""
    if progress is None:
        return
    total = max(1, int(total))
    progress(min(int(current), total), total)
