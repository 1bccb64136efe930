"""Number formatting shared by panel cards and chart axes."""


def format_kb(size_bytes: int | None) -> str:
    return f"{(size_bytes or 0) / 1024:.2f} KB"


def format_count(count: int | None) -> str:
    return f"{count or 0:,}"


def format_compact(value: int | float) -> str:
    """Short axis label: 1.5M, 2.3K, or the plain number."""
    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"{value / 1_000:.1f}K"
    return str(value)
