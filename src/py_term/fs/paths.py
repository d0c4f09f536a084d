"""Path helpers for the simulated filesystem.

Paths are plain ``/``-separated strings.  A well-formed path is either
the root ``/`` or ``/seg1/seg2/...`` with no empty segments and no
trailing slash.  These helpers are pure: no state, no side effects.

Examples::

    join("/home", "user")        → "/home/user"
    join("/", "home")            → "/home"
    join("/home/user", "/tmp")   → "/tmp"
    parent_of("/home/user")      → "/home"
    parent_of("/home")           → "/"

"""

from py_term.errors import InvalidPathError

ROOT = "/"
SEPARATOR = "/"


def split(path: str) -> list[str]:
    """Return the non-empty segments of *path*."""
    return [part for part in path.split(SEPARATOR) if part]


def normalize(path: str) -> str:
    """Collapse empty segments and strip any trailing slash.

    ``"//home//user/"`` becomes ``"/home/user"``.  A relative input is
    anchored at the root.
    """
    return ROOT + SEPARATOR.join(split(path))


def join(base: str, segment: str) -> str:
    """Resolve *segment* against *base*.

    An absolute *segment* replaces *base* entirely.  Otherwise the two
    are joined with exactly one separator.

    Args:
        base: An absolute directory path.
        segment: A name, a relative path, or an absolute path.

    Returns:
        The normalised absolute path.

    """
    if segment.startswith(SEPARATOR):
        return normalize(segment)
    if base == ROOT:
        return normalize(ROOT + segment)
    return normalize(f"{base}{SEPARATOR}{segment}")


def resolve(base: str, target: str) -> str:
    """Resolve *target* against *base*, honouring ``.`` and ``..`` segments.

    ``..`` above the root stays at the root.
    """
    parts = [] if target.startswith(SEPARATOR) else split(base)
    for part in split(target):
        if part == "..":
            if parts:
                parts.pop()
        elif part != ".":
            parts.append(part)
    return ROOT + SEPARATOR.join(parts)


def parent_of(path: str) -> str:
    """Return the parent directory of *path*.

    Raises:
        InvalidPathError: If *path* is the root, which has no parent.

    """
    if path == ROOT:
        msg = "The root directory has no parent."
        raise InvalidPathError(msg)
    parent = path[: path.rfind(SEPARATOR)]
    return parent or ROOT


def basename(path: str) -> str:
    """Return the last segment of *path* (empty for the root)."""
    parts = split(path)
    return parts[-1] if parts else ""


def is_well_formed(path: str) -> bool:
    """Check that *path* is absolute with no empty segments or trailing slash."""
    if path == ROOT:
        return True
    return path.startswith(SEPARATOR) and "" not in path[1:].split(SEPARATOR)
