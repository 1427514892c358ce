"""
Portfolio export renderers.

All functions are pure: the same portfolio record always renders to the same
text.  The HTML document is self-contained (inline CSS) and carries a print
button; the printable variant additionally calls ``window.print()`` on load,
which is how "export to PDF" works in a browser.
"""
from __future__ import annotations

import dataclasses
import enum
import json
from html import escape
from typing import List

from portfolio_api.services.portfolio_data import Portfolio
from portfolio_api.utils.helpers import slugify_name


class ExportFormat(str, enum.Enum):
    MARKDOWN = "markdown"
    JSON = "json"
    HTML = "html"
    PRINT = "print"


@dataclasses.dataclass
class ExportFile:
    filename: str
    media_type: str
    body: str


_EXTENSIONS = {
    ExportFormat.MARKDOWN: ("md", "text/markdown"),
    ExportFormat.JSON: ("json", "application/json"),
    ExportFormat.HTML: ("html", "text/html"),
    ExportFormat.PRINT: ("html", "text/html"),
}


def export_filename(portfolio: Portfolio, extension: str) -> str:
    return f"portfolio-{slugify_name(portfolio.name)}.{extension}"


def to_json(portfolio: Portfolio) -> str:
    return json.dumps(portfolio.to_dict(), indent=2, ensure_ascii=False)


def to_markdown(portfolio: Portfolio) -> str:
    p = portfolio
    lines: List[str] = [
        f"# {p.name}",
        p.title,
        "",
        f"> {p.experience} • Skills: {', '.join(p.skills)}",
        "",
        "---",
        "",
        "## Skills",
        "",
    ]
    lines.extend(f"- {skill}" for skill in p.skills)
    lines += ["", "---", "", "## Projects", ""]
    for project in p.projects:
        lines += [
            f"### {project.title}",
            f"Tech: {', '.join(project.technologies)}",
            "",
            project.description,
            "",
        ]
    lines += ["---", "", "## Interests", ""]
    lines.extend(f"- {interest}" for interest in p.interests)
    return "\n".join(lines)


_STYLES = """\
      :root{ --brand:#667eea; --ink:#0f172a; --muted:#475569; --border:#e2e8f0; }
      *{ box-sizing:border-box }
      body{ font-family:Inter,Arial,Helvetica,sans-serif; color:var(--ink); margin:0; }
      .container{ max-width:900px; margin:0 auto; padding:32px 20px; }
      .header{ display:flex; align-items:flex-end; justify-content:space-between; gap:16px; border-bottom:1px solid var(--border); padding-bottom:16px; }
      .title{ font-size:32px; font-weight:800; margin:0; }
      .subtitle{ color:var(--muted); margin:4px 0 0 0; font-weight:600; }
      .meta{ color:var(--muted); margin-top:8px; }
      .section{ margin-top:28px; }
      .section h2{ font-size:18px; text-transform:uppercase; letter-spacing:.08em; color:var(--muted); margin:0 0 12px 0; }
      .pill{ display:inline-block; background:#eef2ff; color:#3730a3; padding:6px 10px; border-radius:999px; margin:4px 6px 0 0; font-size:12px; }
      .pill-group{ margin:8px 0 6px 0; }
      .grid{ display:grid; grid-template-columns:repeat(auto-fit,minmax(260px,1fr)); gap:12px; }
      .card{ border:1px solid var(--border); border-radius:12px; padding:14px; background:white; box-shadow:0 2px 8px rgba(0,0,0,.04) }
      .card-title{ font-weight:700; margin-bottom:6px; }
      ul{ margin:8px 0; padding-left:18px; }
      .footer{ margin-top:32px; color:var(--muted); font-size:12px; text-align:center; }
      @media print{
        .no-print{ display:none }
        body{ -webkit-print-color-adjust:exact; print-color-adjust:exact; }
      }"""

_PRINT_BUTTON = (
    '<button onclick="window.print()" style="background:var(--brand);color:white;'
    'border:none;padding:10px 14px;border-radius:8px;cursor:pointer">Print</button>'
)

_AUTO_PRINT = "<script>window.addEventListener('load', function () { window.print(); });</script>"


def _pills(values: List[str]) -> str:
    return "".join(f'<span class="pill">{escape(value)}</span>' for value in values)


def to_html(portfolio: Portfolio, auto_print: bool = False) -> str:
    """Standalone HTML document; *auto_print* opens the print dialog on load."""
    p = portfolio
    cards = "".join(
        f"""
      <div class="card">
        <div class="card-title">{escape(project.title)}</div>
        <div class="pill-group">{_pills(project.technologies)}</div>
        <p>{escape(project.description)}</p>
      </div>"""
        for project in p.projects
    )
    interests = "".join(f"<li>{escape(interest)}</li>" for interest in p.interests)

    return f"""<!doctype html><html><head><meta charset="utf-8"/><title>{escape(p.name)} - Portfolio</title>
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <style>
{_STYLES}
    </style>
    </head>
    <body>
      <div class="container">
        <div class="header">
          <div>
            <h1 class="title">{escape(p.name)}</h1>
            <div class="subtitle">{escape(p.title)}</div>
            <div class="meta">{escape(p.experience)}</div>
          </div>
          <div class="no-print">
            {_PRINT_BUTTON}
          </div>
        </div>

        <div class="section">
          <h2>Skills</h2>
          <div>
            {_pills(p.skills)}
          </div>
        </div>

        <div class="section">
          <h2>Projects</h2>
          <div class="grid">{cards}
          </div>
        </div>

        <div class="section">
          <h2>Interests</h2>
          <ul>
            {interests}
          </ul>
        </div>

        <div class="footer">Generated from Portfolio</div>
      </div>{_AUTO_PRINT if auto_print else ""}
    </body>
    </html>"""


def render_export(portfolio: Portfolio, export_format: ExportFormat) -> ExportFile:
    """Render *portfolio* in *export_format* together with its download name."""
    export_format = ExportFormat(export_format)
    extension, media_type = _EXTENSIONS[export_format]

    if export_format is ExportFormat.MARKDOWN:
        body = to_markdown(portfolio)
    elif export_format is ExportFormat.JSON:
        body = to_json(portfolio)
    else:
        body = to_html(portfolio, auto_print=export_format is ExportFormat.PRINT)

    return ExportFile(
        filename=export_filename(portfolio, extension),
        media_type=media_type,
        body=body,
    )
