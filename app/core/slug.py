# app/core/slug.py
import re

_NON_ALNUM = re.compile(r"[^a-z0-9]")
_DASH_RUNS = re.compile(r"-+")


def slugify(name: str, fallback: str = "project") -> str:
    """
    URL-safe slug: lowercase, anything outside [a-z0-9] becomes "-",
    runs of "-" collapse to one, leading/trailing "-" are stripped.
    A name with nothing left after that gets the fallback slug.

        >>> slugify("My Site!")
        'my-site'
    """
    slug = _NON_ALNUM.sub("-", name.lower())
    slug = _DASH_RUNS.sub("-", slug)
    return slug.strip("-") or fallback
