from __future__ import annotations


def fmt(value: float, digits: int = 4) -> str:
    """Fixed-point number, or '-' for None."""
    if value is None:
        return "-"
    return f"{value:.{digits}f}"


def format_table(rows: list[list[str]], headers: list[str]) -> str:
    """
    Format a table with headers and rows.
    Columns are left-aligned and sized to their widest cell.
    """
    if not headers:
        return ""

    num_cols = len(headers)
    padded_rows = [row + [""] * (num_cols - len(row)) for row in rows]

    widths = [len(h) for h in headers]
    for row in padded_rows:
        for i, cell in enumerate(row[:num_cols]):
            widths[i] = max(widths[i], len(str(cell)))

    lines = ["  ".join(h.ljust(w) for h, w in zip(headers, widths))]
    if not padded_rows:
        return lines[0]

    lines.append("  ".join("-" * w for w in widths))
    for row in padded_rows:
        lines.append("  ".join(str(cell).ljust(w) for cell, w in zip(row, widths)))

    return "\n".join(lines)
