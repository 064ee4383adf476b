"""Route collision reporting."""

from __future__ import annotations

from .findings import Finding, Level
from .models import AuditConfig
from .routing import RouteIndex


def check_all(index: RouteIndex, config: AuditConfig) -> list[Finding]:
    if not config.url_normalization.report_collisions:
        return []
    return [
        Finding(
            level=Level.WARNING,
            rule_id="routes/collision",
            file=collision.dropped,
            selector="",
            message=(
                f"'{collision.dropped}' normalizes to route '{collision.route}', "
                f"already served by '{collision.kept}'"
            ),
            help="Remove one of the files or change the URL normalization policy",
        )
        for collision in index.collisions
    ]


__all__ = ["check_all"]
