"""
Plain-text table rendering for list commands.
"""

from __future__ import annotations


def render_table(headers: list[str], rows: list[list[str]]) -> str:
    """ASCII table with a border, header row and left-aligned cells."""
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    border = "+" + "+".join("-" * (w + 2) for w in widths) + "+"

    def line(cells: list[str]) -> str:
        return "| " + " | ".join(c.ljust(w) for c, w in zip(cells, widths)) + " |"

    out = [border, line(headers), border]
    out += [line(row) for row in rows]
    out.append(border)
    return "\n".join(out)
