"""Number and date formatting for display."""


def format_number_thousand(value):
    """Formats with German thousands separators, e.g. 2693000 -> '2.693.000'."""

    return f"{value:,.0f}".replace(",", ".")


def format_date(date):
    """Formats as dd.mm.yyyy, e.g. '09.06.2024'."""

    return date.strftime("%d.%m.%Y")


def format_date_us(date):
    """Formats as US English long date, e.g. 'July 16, 2025'."""

    return f"{date:%B} {date.day}, {date.year}"
