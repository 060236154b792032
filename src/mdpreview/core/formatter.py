"""Front matter to markup: metadata table, sub-tables and lists"""

import datetime
import json
from typing import Any

from mdpreview.core.dom import escape_html


LIST_SEPARATOR = ", "


def _scalar_text(value: Any) -> str:
    """String form of a scalar, JSON-like for booleans and null."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    return str(value)


def _stringify(value: Any) -> str:
    """Compact JSON for nested containers, plain text for scalars."""
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=_scalar_text)
    return _scalar_text(value)


def format_value(value: Any) -> str:
    """Format one front-matter value for a table cell.

    Dispatch is by shape: null, sequence of mappings (sub-table), sequence of
    scalars (joined), mapping (one-level list) and scalar. Nested containers
    below the first level are stringified rather than formatted again.
    """
    if value is None:
        return ""
    if isinstance(value, list) and value and isinstance(value[0], dict):
        return array_of_objects_to_table(value)
    if isinstance(value, list):
        return LIST_SEPARATOR.join(escape_html(_stringify(v)) for v in value)
    if isinstance(value, dict):
        return object_to_list(value)
    return escape_html(_scalar_text(value))


def array_of_objects_to_table(items: list) -> str:
    """Sub-table with one column group per item; header is the union of keys in first-seen order."""
    if not items:
        return ""
    records = [item if isinstance(item, dict) else {} for item in items]
    keys = list(dict.fromkeys(str(k) for record in records for k in record))

    html = '<table style="width: 100%;">\n<thead>\n<tr>'
    for _ in records:
        for key in keys:
            html += f"<th>{escape_html(key)}</th>"
    html += "</tr>\n</thead>\n<tbody>\n<tr>"

    for record in records:
        by_name = {str(k): v for k, v in record.items()}
        for key in keys:
            value = by_name.get(key)
            if value is None:
                html += "<td></td>"
            else:
                html += f"<td>{escape_html(_stringify(value))}</td>"
    html += "</tr>\n</tbody>\n</table>"
    return html


def object_to_list(obj: dict) -> str:
    html = "<ul>"
    for key, value in obj.items():
        html += f"<li><strong>{escape_html(str(key))}:</strong> {escape_html(_stringify(value))}</li>"
    html += "</ul>"
    return html


def front_matter_to_table(front_matter: Any) -> str:
    """One-row metadata table for a front-matter mapping; empty for anything else."""
    if not isinstance(front_matter, dict):
        return ""

    html = "<table>\n<thead>\n<tr>"
    for key in front_matter:
        html += f"<th>{escape_html(str(key))}</th>"
    html += "</tr>\n</thead>\n<tbody>\n<tr>"
    for value in front_matter.values():
        html += f"<td>{format_value(value)}</td>"
    html += "</tr>\n</tbody>\n</table>\n"
    return html
