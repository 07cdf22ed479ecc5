"""Recording utilities for edit events."""

from __future__ import annotations

from paperdraft.recording.file_recorder import FileEventRecorder, iter_events

__all__ = ["FileEventRecorder", "iter_events"]
