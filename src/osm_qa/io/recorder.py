# io/recorder.py
import json
import sys
from typing import Protocol


class Sink(Protocol):
    def write(self, rec: dict) -> None: ...


class JsonlSink:
    """One JSON object per issue, one issue per line."""

    def __init__(self, fp=sys.stdout):
        self.fp = fp

    def write(self, rec: dict) -> None:
        self.fp.write(json.dumps(rec) + "\n")


class MemorySink:
    def __init__(self):
        self.records: list[dict] = []

    def write(self, rec: dict) -> None:
        self.records.append(rec)


class Recorder:
    """
    Fans issues out to sinks as plain dicts.

    Each issue is serialised once with `Issue.to_dict()`. A sink that raises
    is skipped for that issue and counted in `dropped`; the other sinks still
    receive it, and the validation run carries on.
    """

    def __init__(self, *sinks: Sink):
        self.sinks = sinks or (JsonlSink(),)
        self.dropped = 0

    def emit(self, issue) -> None:
        payload = issue.to_dict() if hasattr(issue, "to_dict") else issue
        for s in self.sinks:
            try:
                s.write(payload)
            except Exception:
                self.dropped += 1
