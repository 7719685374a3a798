"""Helpers for deriving course SKUs from webstore product names.

Most line items carry a SKU such as ``PSM-061125-CB``. When one is missing,
a stand-in is rebuilt from the product name, which by convention looks like
``Professional Scrum Master™ - 6 Nov 2025``: initials of the capitalised words
give the course code and the trailing segment gives the start date.
"""

from datetime import datetime

DEFAULT_COURSE_CODE = "COURSE"
NAME_DATE_MARKER = " - "

MONTHS = {
    name.casefold(): number
    for number, names in enumerate(
        [
            ("jan", "january"),
            ("feb", "february"),
            ("mar", "march"),
            ("apr", "april"),
            ("may",),
            ("jun", "june"),
            ("jul", "july"),
            ("aug", "august"),
            ("sep", "september"),
            ("oct", "october"),
            ("nov", "november"),
            ("dec", "december"),
        ],
        start=1,
    )
    for name in names
}


def course_code_from_name(name: str | None) -> str:
    """Initials of the capitalised words before the first hyphen.

    Returns `DEFAULT_COURSE_CODE` when fewer than two initials are found.
    """
    if name is None or not name.strip():
        return DEFAULT_COURSE_CODE

    words = name.split("-")[0].split()
    initials = [word[0] for word in words if word[0].isalpha() and word[0].isupper()]
    return "".join(initials) if len(initials) >= 2 else DEFAULT_COURSE_CODE


def start_date_from_name(
    name: str | None, reference: datetime | None = None
) -> datetime | None:
    """Parse the course start date from a product name.

    Args:
        name: Product name, e.g. ``"Professional Scrum Master - 6-7 Nov 2025"``.
        reference: Date used to infer a missing year: months earlier in the
            year than the reference month roll over to the following year.

    Returns:
        The start date, or None when the name carries no usable date (or the
        year is missing and no reference date was given).
    """
    if name is None or not name.strip():
        return None

    cleaned = name.replace("™", "").strip()
    idx = cleaned.rfind(NAME_DATE_MARKER)
    segment = cleaned[idx + len(NAME_DATE_MARKER) :].strip() if idx >= 0 else cleaned

    tokens = segment.split()
    if not tokens:
        return None

    day_token = tokens[0].replace("−", "-").split("-")[0]
    if (
        not day_token.isdecimal()
        or len(day_token) > 2
        or not 1 <= int(day_token) <= 31
    ):
        return None

    if (month := _find_month(tokens)) is None:
        return None

    if (year := _find_year(tokens[1:])) is None:
        if reference is None:
            return None
        year = reference.year + 1 if month < reference.month else reference.year

    try:
        return datetime(year, month, int(day_token))
    except ValueError:
        return None


def fallback_sku(name: str | None, reference: datetime | None = None) -> str:
    """Build a stand-in SKU (``CODE-ddmmyy``, or bare ``CODE``) from a product name."""
    code = course_code_from_name(name)
    if (start := start_date_from_name(name, reference)) is None:
        return code
    return f"{code}-{start:%d%m%y}"


def _find_month(tokens: list[str]) -> int | None:
    for token in tokens:
        letters = ""
        for char in token:
            if not char.isalpha():
                break
            letters += char
        if letters:
            return MONTHS.get(letters.casefold())
    return None


def _find_year(tokens: list[str]) -> int | None:
    for token in reversed(tokens):
        if token.isdecimal() and len(token) in (2, 4):
            year = int(token)
            return year + 2000 if len(token) == 2 else year
    return None
