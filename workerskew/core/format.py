"""Shared formatting utilities for printed results."""

from prettytable import PrettyTable, TableStyle

WIDTH = 60
THICK_SEP = "=" * WIDTH
THIN_SEP = "-" * WIDTH


def make_table(headers, rows, align_map=None):
    """Create a PrettyTable with SINGLE_BORDER style and per-column alignment."""
    align_map = align_map or {}
    t = PrettyTable()
    t.set_style(TableStyle.SINGLE_BORDER)
    t.field_names = headers
    for row in rows:
        t.add_row(row)
    for h in headers:
        t.align[h] = align_map.get(h, "r")
    return str(t)


def format_title(title, subtitle=None):
    """Return title block lines with thick separators."""
    lines = [THICK_SEP, f" {title}"]
    if subtitle is not None:
        lines.append(f" {subtitle}")
    lines.append(THICK_SEP)
    return lines


def format_footer(note=None):
    """Return footer lines with thick separator and optional note."""
    lines = [THICK_SEP]
    if note is not None:
        lines.append(f" {note}")
    return lines


def format_kv_line(key, value, indent=1):
    """Format a key-value pair with indentation."""
    return f"{' ' * indent}{key}: {value}"


def format_signed_percent(value):
    """Format an integer percentage with an explicit sign, ``0%`` unsigned."""
    if value == 0:
        return "0%"
    return f"{int(value):+d}%"


def adjust_separators(lines):
    """Widen separator lines to match the widest content line."""
    max_w = max((len(line) for line in lines), default=WIDTH)
    max_w = max(max_w, WIDTH)
    return [
        "=" * max_w
        if line and all(c == "=" for c in line)
        else "-" * max_w
        if line and all(c == "-" for c in line)
        else line
        for line in lines
    ]


def attach_format(result_class, format_func):
    """Monkey-patch ``__repr__`` and ``__str__`` on a result class."""

    def _repr(self):
        return format_func(self)

    def _str(self):
        return format_func(self)

    result_class.__repr__ = _repr
    result_class.__str__ = _str
