# apicheck/reporter.py
"""
Reporter — turns RunResults into console text and report files.

Formats:
✅ Console text (one line per test, diagnostics indented)
✅ JSON (atomic write)
✅ HTML (Jinja2 template)
✅ JUnit XML for CI/CD
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union
from xml.etree import ElementTree as ET

from jinja2 import BaseLoader, Environment, select_autoescape

from apicheck.api_types import RunResult, RunStatus

logger = logging.getLogger(__name__)

_STATUS_ICONS = {RunStatus.PASS: "✅", RunStatus.FAIL: "❌", RunStatus.ERROR: "⚠️"}

# ==================== HTML Template ====================

_HTML_TEMPLATE = """<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>API check — {{ run_id }}</title>
<style>
  body { font-family: Inter, 'Segoe UI', Roboto, sans-serif; background: #f7fafc; color: #111; margin: 0; padding: 20px; }
  .wrap { max-width: 1100px; margin: 0 auto; }
  .card { background: #fff; border-radius: 12px; box-shadow: 0 4px 12px rgba(0,0,0,0.08); padding: 20px; margin-bottom: 16px; }
  .PASS { color: #1a7f37; } .FAIL { color: #d00000; } .ERROR { color: #f59e0b; }
  table { width: 100%; border-collapse: collapse; }
  th, td { text-align: left; padding: 6px 8px; border-bottom: 1px solid #eee; vertical-align: top; }
  pre { white-space: pre-wrap; margin: 0; font-size: 12px; }
</style>
</head>
<body>
<div class="wrap">
  <div class="card">
    <h1>API check — {{ run_id }}</h1>
    <p>Generated {{ now }} UTC</p>
    <p>
      Total: <b>{{ summary.total }}</b> ·
      <span class="PASS">Passed: {{ summary.passed }}</span> ·
      <span class="FAIL">Failed: {{ summary.failed }}</span> ·
      <span class="ERROR">Errors: {{ summary.errors }}</span> ·
      Success rate: {{ summary.success_rate }}%
    </p>
  </div>
  <div class="card">
    <table>
      <tr><th>Status</th><th>Test</th><th>Request</th><th>Time</th><th>Details</th></tr>
      {% for r in results %}
      <tr>
        <td class="{{ r.status }}">{{ r.status }}</td>
        <td>{{ r.name }}</td>
        <td>{{ r.method }} {{ r.url }}</td>
        <td>{% if r.elapsed_ms is not none %}{{ r.elapsed_ms }}ms{% endif %}</td>
        <td>{% if r.message %}<pre>{{ r.message }}</pre>{% endif %}</td>
      </tr>
      {% endfor %}
    </table>
  </div>
</div>
</body>
</html>
"""

_env = Environment(
    loader=BaseLoader(),
    autoescape=select_autoescape(enabled_extensions=("html", "xml"), default_for_string=True),
)


# ==================== Summaries ====================

def summarize(results: Sequence[RunResult]) -> Dict[str, Any]:
    """Counts PASS / FAIL / ERROR separately"""
    total = len(results)
    passed = sum(1 for r in results if r.status is RunStatus.PASS)
    failed = sum(1 for r in results if r.status is RunStatus.FAIL)
    errors = total - passed - failed
    return {
        "total": total,
        "passed": passed,
        "failed": failed,
        "errors": errors,
        "success_rate": round(100.0 * passed / total, 1) if total else 0.0,
        "overall_passed": passed == total,
    }


def result_to_dict(result: RunResult) -> Dict[str, Any]:
    test = result.test
    return {
        "name": test.display_name,
        "method": (test.method or "GET").upper(),
        "url": f"{test.hostname}{test.endpoint}",
        "status": result.status.value,
        "success": result.success,
        "error_type": type(result.error).__name__ if result.error else None,
        "message": result.message,
        "elapsed_ms": result.elapsed_ms,
    }


def format_text(results: Sequence[RunResult]) -> str:
    """Human-readable console report"""
    lines: List[str] = []
    for r in results:
        timing = f" ({r.elapsed_ms}ms)" if r.elapsed_ms is not None else ""
        lines.append(f"{_STATUS_ICONS[r.status]} {r.status.value:<5} {r.test.display_name}{timing}")
        if r.message:
            lines.extend(f"      {line}" for line in r.message.rstrip().splitlines())

    s = summarize(results)
    lines.append("")
    lines.append(
        f"{s['total']} test(s): {s['passed']} passed, {s['failed']} failed, {s['errors']} error(s)"
    )
    return "\n".join(lines)


# ==================== File Reports ====================

class Reporter:
    """Writes JSON, HTML and JUnit XML reports for a run"""

    def __init__(self, reports_dir: Union[str, Path] = "reports"):
        self.reports_dir = Path(reports_dir)

    def create_reports(self, results: Sequence[RunResult], run_id: Optional[str] = None) -> Dict[str, str]:
        """
        Generate all report files.

        Returns:
            Dict with paths: {"json", "html", "junit"}
        """
        self.reports_dir.mkdir(parents=True, exist_ok=True)
        run_id = run_id or datetime.now(timezone.utc).strftime("run-%Y%m%d-%H%M%S")

        summary = summarize(results)
        rows = [result_to_dict(r) for r in results]

        json_path = self.reports_dir / f"{run_id}.json"
        html_path = self.reports_dir / f"{run_id}.html"
        junit_path = self.reports_dir / f"{run_id}.junit.xml"

        self._atomic_json_dump(json_path, {"run_id": run_id, "summary": summary, "results": rows})
        logger.info(f"✅ JSON report → {json_path}")

        html = _env.from_string(_HTML_TEMPLATE).render(
            run_id=run_id,
            now=datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S"),
            summary=summary,
            results=rows,
        )
        self._atomic_text_write(html_path, html)
        logger.info(f"✅ HTML report → {html_path}")

        self._atomic_text_write(junit_path, self._generate_junit_xml(results, run_id))
        logger.info(f"✅ JUnit XML → {junit_path}")

        return {"json": str(json_path), "html": str(html_path), "junit": str(junit_path)}

    @staticmethod
    def _generate_junit_xml(results: Sequence[RunResult], run_id: str) -> str:
        summary = summarize(results)
        root = ET.Element("testsuites", name=run_id)
        suite = ET.SubElement(
            root,
            "testsuite",
            name=run_id,
            tests=str(summary["total"]),
            failures=str(summary["failed"]),
            errors=str(summary["errors"]),
        )
        for r in results:
            case = ET.SubElement(suite, "testcase", name=r.test.display_name, classname="apicheck")
            if r.elapsed_ms is not None:
                case.set("time", f"{r.elapsed_ms / 1000:.3f}")
            if r.status is RunStatus.FAIL:
                failure = ET.SubElement(case, "failure", message=r.message.splitlines()[0] if r.message else "failed")
                failure.text = r.message
            elif r.status is RunStatus.ERROR:
                error = ET.SubElement(case, "error", message=type(r.error).__name__ if r.error else "error")
                error.text = r.message
        return ET.tostring(root, encoding="unicode", method="xml")

    @staticmethod
    def _atomic_text_write(path: Path, text: str) -> None:
        tmp = path.with_suffix(path.suffix + ".tmp")
        tmp.write_text(text, encoding="utf-8")
        tmp.replace(path)

    @staticmethod
    def _atomic_json_dump(path: Path, data: Any) -> None:
        tmp = path.with_suffix(path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        tmp.replace(path)
