"""
Report rendering utilities.

- report_to_json(report): the report's camelCase dict as JSON
- render_text_report(report): plain-text summary for the console
- render_html_report(report, out_path): standalone HTML page from a Jinja2
  template with KPI badges and the divergence sample lists

``report`` is any object with the ComparisonReport fields (``to_dict()`` is
used for JSON).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import Environment, select_autoescape

DEFAULT_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8" />
<title>Document Compare Report</title>
<style>
body { font-family: Arial, sans-serif; margin: 1.5rem; background: #fafafa; }
h1, h2 { color: #333; }
.diff-section { margin-bottom: 1.5rem; background: white; border-radius: 8px; padding: 16px; box-shadow: 0 1px 3px rgba(0,0,0,0.1); }
.badge { display: inline-block; padding: 4px 10px; border-radius: 6px; background: #e5e7eb; margin-right: 6px; font-size: 14px; }
.kpi { display: inline-block; padding: 10px 14px; border-radius: 8px; background: white; margin: 6px 6px 0 0; border: 1px solid #e5e7eb; box-shadow: 0 1px 2px rgba(0,0,0,0.05); }
.kpi strong { display: block; font-size: 1.6rem; }
.muted { color: #6b7280; font-size: 14px; }
.good { color: #0a7f27; }
.warn { color: #b45309; }
.bad  { color: #b91c1c; }
</style>
</head>
<body>
<h1>Document Compare Report</h1>
{% if meta %}
<p>
  {% for key, value in meta.items() %}<span class="badge">{{ key }}: {{ value }}</span>{% endfor %}
</p>
{% endif %}

<h2>Overview</h2>
<div>
  <span class="kpi">Text similarity<strong class="{{ grade(r.text_similarity) }}">{{ pct(r.text_similarity) }}</strong></span>
  <span class="kpi">Text divergences<strong>{{ r.text_divergence_count }}</strong></span>
  <span class="kpi">Layout similarity<strong class="{{ grade(r.layout_similarity) }}">{{ pct(r.layout_similarity) }}</strong></span>
  <span class="kpi">Layout divergences<strong>{{ r.layout_divergence_count }}</strong></span>
</div>

{% if r.text_divergence_samples or r.layout_divergence_samples %}
<h2>Divergence details</h2>
{% if r.text_divergence_samples %}
<div class="diff-section">
  <h3>Text divergences</h3>
  <ul>{% for s in r.text_divergence_samples %}<li>{{ s }}</li>{% endfor %}</ul>
</div>
{% endif %}
{% if r.layout_divergence_samples %}
<div class="diff-section">
  <h3>Layout divergences</h3>
  <ul>{% for s in r.layout_divergence_samples %}<li>{{ s }}</li>{% endfor %}</ul>
</div>
{% endif %}
{% else %}
<p class="muted">No divergences found.</p>
{% endif %}
</body>
</html>
"""

_env = Environment(autoescape=select_autoescape(default=True, default_for_string=True))


def _pct(value: float) -> str:
    return f"{value:.2f}%"


def _grade(similarity: float) -> str:
    if similarity >= 99.0:
        return "good"
    if similarity >= 90.0:
        return "warn"
    return "bad"


def report_to_json(report: Any) -> str:
    return json.dumps(report.to_dict(), ensure_ascii=False, indent=2)


def render_text_report(report: Any) -> str:
    lines = [
        f"Text similarity:    {_pct(report.text_similarity)}",
        f"Text divergences:   {report.text_divergence_count}",
        f"Layout similarity:  {_pct(report.layout_similarity)}",
        f"Layout divergences: {report.layout_divergence_count}",
    ]
    for title, samples in (
        ("Text divergences", report.text_divergence_samples),
        ("Layout divergences", report.layout_divergence_samples),
    ):
        if samples:
            lines.append("")
            lines.append(f"{title}:")
            lines.extend(f"  - {s}" for s in samples)
    return "\n".join(lines) + "\n"


def render_html_report(
    report: Any,
    out_path: Optional[str | Path] = None,
    meta: Optional[Dict[str, Any]] = None,
) -> str:
    """Render the report as an HTML page; if out_path is given, write it there too."""
    template = _env.from_string(DEFAULT_TEMPLATE)
    html = template.render(r=report, meta=meta or {}, pct=_pct, grade=_grade)
    if out_path:
        Path(out_path).write_text(html, encoding="utf-8")
    return html
