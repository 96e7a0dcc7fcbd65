"""
RecordingLog — log sink that keeps every entry in memory.
"""
from typing import Any, List, Tuple


class RecordingLog:
    def __init__(self):
        self.records: List[Tuple[str, str, dict]] = []

    def info(self, event: str, **fields: Any):
        self.records.append(("info", event, fields))

    def error(self, event: str, **fields: Any):
        self.records.append(("error", event, fields))

    def events(self, level: str = None) -> List[str]:
        return [e for lvl, e, _ in self.records if level is None or lvl == level]

    def containing(self, text: str) -> List[Tuple[str, str, dict]]:
        return [r for r in self.records if text in r[1]]
