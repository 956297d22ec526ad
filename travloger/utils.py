"""
Small text helpers shared by routers and services.
"""

import re
import unicodedata


def slugify(text: str, max_length: int = 80) -> str:
    """
    Convert a destination or city name to a URL slug.
    Removes accents, lowercases, replaces every non-alphanumeric run with a hyphen.

        >>> slugify("  Himachal Pradesh ")
        'himachal-pradesh'
        >>> slugify("Bali & Lombok")
        'bali-lombok'
    """
    text = unicodedata.normalize("NFKD", text or "")
    text = text.encode("ascii", "ignore").decode("ascii")
    text = text.lower()
    text = re.sub(r"[^a-z0-9]+", "-", text).strip("-")

    # Truncate without cutting mid-word
    if len(text) > max_length:
        text = text[:max_length].rsplit("-", 1)[0]

    return text


def title_case_destination(destination: str) -> str:
    """'kashmir' -> 'Kashmir' (first letter only, the rest untouched)."""
    destination = destination.strip()
    return destination[:1].upper() + destination[1:]
