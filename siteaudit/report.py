"""Rendering audit results for terminals, machines and report files."""

from __future__ import annotations

from itertools import groupby
from pathlib import Path

from .audit import AuditResult
from .findings import Level
from .io_utils import stable_json_dumps, write_json_stable, write_text

LEVEL_LABELS = {Level.ERROR: "ERROR", Level.WARNING: "WARN", Level.INFO: "INFO"}


def _payload(result: AuditResult) -> dict:
    summary = result.summary
    return {
        "findings": [finding.to_dict() for finding in result.sorted_findings()],
        "summary": {
            "errors": summary.errors,
            "warnings": summary.warnings,
            "info": summary.info,
            "files_checked": summary.files_checked,
        },
    }


def render_json(result: AuditResult) -> str:
    return stable_json_dumps(_payload(result))


def render_text(result: AuditResult) -> str:
    findings = result.sorted_findings()
    if not findings:
        return f"All checks passed! ({result.files_checked} file(s) checked)\n"

    lines: list[str] = []
    for file, group in groupby(findings, key=lambda finding: finding.file):
        lines.append("")
        lines.append(file)
        for finding in group:
            lines.append(f"  {LEVEL_LABELS[finding.level]} [{finding.rule_id}] {finding.message}")
            if finding.selector:
                lines.append(f"    at {finding.selector}")
            if finding.help:
                lines.append(f"    fix: {finding.help}")

    summary = result.summary
    lines.append("")
    lines.append(
        f"Summary: {summary.errors} errors, {summary.warnings} warnings, "
        f"{summary.info} info ({summary.files_checked} file(s) checked)"
    )
    return "\n".join(lines) + "\n"


def _markdown(result: AuditResult, dist_path: Path) -> str:
    summary = result.summary
    md_lines = [
        "# Site Audit Report",
        "",
        "## Overview",
        "",
        f"- Dist: {dist_path}",
        f"- Files checked: {summary.files_checked}",
        f"- Suites run: {', '.join(result.suites_run) or 'none'}",
    ]
    if result.suites_skipped:
        md_lines.append(f"- Suites skipped (error budget): {', '.join(result.suites_skipped)}")
    md_lines.extend(
        [
            "",
            "## Summary",
            "",
            "| Level | Count |",
            "| --- | ---: |",
            f"| error | {summary.errors} |",
            f"| warning | {summary.warnings} |",
            f"| info | {summary.info} |",
            "",
            "## Findings",
            "",
        ]
    )
    for finding in result.sorted_findings():
        md_lines.append(f"### [{finding.level.value}] {finding.rule_id}")
        md_lines.append("")
        md_lines.append(f"- File: `{finding.file}`")
        if finding.selector:
            md_lines.append(f"- Locator: `{finding.selector}`")
        md_lines.append(f"- Message: {finding.message}")
        if finding.help:
            md_lines.append(f"- Suggested: {finding.help}")
        md_lines.append("")
    return "\n".join(md_lines)


def write_reports(result: AuditResult, report_dir: Path, dist_path: Path) -> tuple[Path, Path]:
    """Write ``site_audit.json`` and ``site_audit.md`` into ``report_dir``."""

    json_path = write_json_stable(report_dir / "site_audit.json", _payload(result))
    md_path = write_text(report_dir / "site_audit.md", _markdown(result, dist_path))
    return json_path, md_path


__all__ = ["render_json", "render_text", "write_reports"]
