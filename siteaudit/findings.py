"""Finding records produced by checks and consumed by reports."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Iterable


class Level(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class Finding:
    level: Level
    rule_id: str
    file: str
    selector: str
    message: str
    help: str = ""

    def sort_key(self) -> tuple[str, str, str, str]:
        return (self.file, self.rule_id, self.selector, self.message)

    def to_dict(self) -> dict:
        payload = asdict(self)
        payload["level"] = self.level.value
        return payload


@dataclass
class Summary:
    errors: int = 0
    warnings: int = 0
    info: int = 0
    files_checked: int = 0

    @classmethod
    def from_findings(cls, findings: Iterable[Finding], files_checked: int = 0) -> "Summary":
        summary = cls(files_checked=files_checked)
        for finding in findings:
            if finding.level == Level.ERROR:
                summary.errors += 1
            elif finding.level == Level.WARNING:
                summary.warnings += 1
            else:
                summary.info += 1
        return summary


def count_errors(findings: Iterable[Finding]) -> int:
    return sum(1 for finding in findings if finding.level == Level.ERROR)


def link_selector(href: str) -> str:
    return f"a[href='{href}']"


__all__ = ["Finding", "Level", "Summary", "count_errors", "link_selector"]
