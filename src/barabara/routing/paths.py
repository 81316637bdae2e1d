"""Directory-relative module path -> URL route.

``controllers/SubPath/index.py`` becomes ``/sub-path`` and
``controllers/index.py`` becomes ``/``. Each segment is slugged
independently, so directory structure maps one-to-one onto URL
structure.
"""

import os
import re
from collections.abc import Iterable

from barabara.routing.route import ROOT

# "HTMLParser" -> "HTML-Parser"
_ACRONYM_RE = re.compile(r"([A-Z]+)([A-Z][a-z])")

# "subPath" -> "sub-Path", "v1Beta" -> "v1-Beta"
_CAMEL_RE = re.compile(r"([a-z\d])([A-Z])")

# Runs of anything that isn't a letter or digit, underscores included
_SEPARATOR_RE = re.compile(r"[\W_]+")

INDEX = "index"


def slug_case(value: str) -> str:
    """Convert one path segment to lowercase, hyphen-separated form.

    Letters and digits that touch without a case change stay together::

        slug_case("subPath")    -> "sub-path"
        slug_case("SubPath")    -> "sub-path"
        slug_case("v1")         -> "v1"
        slug_case("user_roles") -> "user-roles"
    """
    value = _ACRONYM_RE.sub(r"\1-\2", value)
    value = _CAMEL_RE.sub(r"\1-\2", value)
    return _SEPARATOR_RE.sub("-", value).strip("-").lower()


def route_from_path(
    base_path: str | os.PathLike[str],
    file_path: str | os.PathLike[str],
    extensions: Iterable[str] = (".py",),
) -> str:
    """Derive the URL route for a controller file.

    Args:
        base_path: The controllers root directory.
        file_path: A controller file under *base_path*.
        extensions: Recognized module extensions to strip.

    Returns:
        The slugged route, ``"/"`` for the root controller.
    """
    base = os.fspath(base_path)
    relative = os.fspath(file_path)[len(base) :].replace(os.sep, "/")
    parts = [part for part in relative.split("/") if part]

    if parts:
        last = parts[-1]
        for ext in extensions:
            if last.lower().endswith(ext.lower()):
                parts[-1] = last[: -len(ext)]
                # Only an index module collapses onto its directory
                if parts[-1].lower() == INDEX:
                    parts.pop()
                break

    segments = [slug for slug in (slug_case(part) for part in parts) if slug]
    return "/" + "/".join(segments) if segments else ROOT


def segment_count(route: str) -> int:
    """Number of non-empty segments; ``"/"`` has none."""
    return len([part for part in route.split("/") if part])


def strip_trailing_slash(route: str) -> str:
    """``"/"`` -> ``""``, ``"/users/"`` -> ``"/users"``."""
    return route.rstrip("/")
