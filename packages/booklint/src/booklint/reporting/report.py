from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from ..docs.model import Finding, ParseWarning, Severity
from ..exit_codes import ERR_FINDINGS, OK


@dataclass(frozen=True)
class Report:
    findings: tuple[Finding, ...]
    warnings: tuple[ParseWarning, ...] = ()
    documents: int = 0
    links: int = 0

    @property
    def ok(self) -> bool:
        return not self.findings

    @property
    def exit_code(self) -> int:
        return OK if self.ok else ERR_FINDINGS

    def counts(self) -> dict[str, int]:
        counts = {severity.value: 0 for severity in Severity}
        for finding in self.findings:
            counts[finding.severity.value] += 1
        return counts

    def to_payload(self) -> dict[str, Any]:
        return {
            "schema_version": 1,
            "tool": "booklint",
            "ok": self.ok,
            "documents": self.documents,
            "links": self.links,
            "counts": self.counts(),
            "findings": [f.to_dict() for f in self.findings],
            "warnings": [w.to_dict() for w in self.warnings],
        }


def render_json(report: Report, pretty: bool = False) -> str:
    return json.dumps(report.to_payload(), indent=2 if pretty else None, sort_keys=True)


def render_text(report: Report) -> str:
    lines: list[str] = []
    for finding in report.findings:
        link = finding.link
        lines.append(f"{link.source}:{link.line}:{link.column}: {finding.severity.value}: [{link.label}]({link.target}) {finding.message}")
    for warning in report.warnings:
        where = warning.path if not warning.line else f"{warning.path}:{warning.line}"
        lines.append(f"{where}: warning: {warning.kind}: {warning.message}")
    counts = report.counts()
    summary = ", ".join(f"{name}={count}" for name, count in counts.items())
    status = "ok" if report.ok else "FAIL"
    lines.append(
        f"{status}: {len(report.findings)} finding(s) ({summary}), {len(report.warnings)} warning(s) "
        f"across {report.documents} document(s) and {report.links} link(s)"
    )
    return "\n".join(lines)
