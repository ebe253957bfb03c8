from __future__ import annotations

from html import escape

from fwmon.models import ReportPayload

COLUMNS = ("Serial", "Current version", "Expected version", "Last check")

_CELL = "padding: 8px; border: 1px solid #ddd;"


def subject_for(payload: ReportPayload) -> str:
    return f"[ALERT] {payload.count} device(s) require a firmware update"


def _cell(value: str | None) -> str:
    return escape(value or "-")


def render_html(payload: ReportPayload) -> str:
    head = "".join(
        f'<th style="{_CELL} text-align: left;">{title}</th>' for title in COLUMNS
    )
    rows = []
    for serial, current, expected, last_check in payload.entries:
        rows.append(
            "<tr>"
            f'<td style="{_CELL}">{_cell(serial)}</td>'
            f'<td style="{_CELL} color: #d9534f;">{_cell(current)}</td>'
            f'<td style="{_CELL} color: #5cb85c;"><b>{_cell(expected)}</b></td>'
            f'<td style="{_CELL}">{_cell(last_check)}</td>'
            "</tr>"
        )

    return (
        "<h2>Firmware update report</h2>"
        "<p>The following devices run firmware older than the reference list:</p>"
        '<table style="border-collapse: collapse; width: 100%; max-width: 600px;">'
        f'<thead><tr style="background-color: #f2f2f2;">{head}</tr></thead>'
        f"<tbody>{''.join(rows)}</tbody>"
        "</table>"
        "<p><i>This message was generated automatically by fwmon.</i></p>"
    )


def render_text(payload: ReportPayload) -> str:
    lines = [
        f"{payload.count} device(s) run firmware older than the reference list:",
        "",
        " | ".join(COLUMNS),
    ]
    for entry in payload.entries:
        lines.append(" | ".join(value or "-" for value in entry))
    return "\n".join(lines) + "\n"
