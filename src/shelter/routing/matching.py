"""Path matching primitive.

A route acts as a path prefix boundary, not a plain string prefix::

    path_matches("/share-edit", "/share-edit")        -> True
    path_matches("/share-edit/abc", "/share-edit")    -> True
    path_matches("/share-edit-other", "/share-edit")  -> False
"""


def path_matches(path: str, prefix: str) -> bool:
    """Return True if *path* equals *prefix* or lies below it."""
    if path == prefix:
        return True
    if len(path) <= len(prefix) or not path.startswith(prefix):
        return False
    return prefix.endswith("/") or path[len(prefix)] == "/"


def routes_overlap(a: str, b: str) -> bool:
    """Return True if some path could match both *a* and *b*."""
    return path_matches(a, b) or path_matches(b, a)


def validate_route_path(path: str) -> str | None:
    """Return a problem description for an unusable route path, or None."""
    if not path:
        return "route path must not be empty"
    if not path.startswith("/"):
        return f"route path {path!r} must start with '/'"
    if "?" in path or "#" in path:
        return f"route path {path!r} must not contain a query or fragment"
    return None
