"""Path resolution over levels.

Handles path parsing and navigation (cd, ls semantics).
"""

from typing import List, Optional, Tuple

from bucketsh.vfs.base import Level


def resolve(level: Optional[Level], path: str) -> Optional[Level]:
    """Walk ``path`` one segment at a time, starting from ``level``.

    Segments are separated by slashes:
    - "." and empty segments stay where they are
    - ".." goes to the parent (and stays put at the root)
    - anything else descends into the bucket of that name

    The caller's level is never modified; a path that fails part way
    through returns None rather than the last level reached.

    Args:
        level: Level to start from
        path: Slash-delimited path, e.g. "../people/admins"

    Returns:
        Resolved level or None if any bucket along the path is missing
    """
    for part in path.split("/"):
        if level is None:
            break
        if part == "" or part == ".":
            continue
        elif part == "..":
            parent = level.prev()
            if parent is not None:
                level = parent
        else:
            level = level.cd(part)

    return level


def split_key_path(level: Level, path: str) -> Tuple[Optional[Level], str]:
    """Split a key path into the level holding the key and the key itself.

    Everything up to the last slash is resolved against ``level``; the
    part after it is the key.

    Args:
        level: Level to resolve from
        path: Path like "people/alice" or just "alice"

    Returns:
        Tuple of (level or None if the prefix does not resolve, key)
    """
    if "/" not in path:
        return level, path

    prefix, key = path.rsplit("/", 1)
    return resolve(level, prefix), key


def complete_path(level: Level, partial: str) -> List[str]:
    """Get completion candidates for a partial path.

    Used for tab completion.

    Args:
        level: Current level
        partial: Partial path to complete

    Returns:
        List of completion candidates (buckets end with a slash)
    """
    # Split into directory part and key part
    if "/" in partial:
        dir_part, key_part = partial.rsplit("/", 1)
        target = resolve(level, dir_part)
        prefix = f"{dir_part}/"
    else:
        key_part = partial
        target = level
        prefix = ""

    if target is None:
        return []

    return [
        f"{prefix}{entry}"
        for entry in target.list()
        if entry.startswith(key_part)
    ]
