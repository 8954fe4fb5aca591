"""Map file paths to their associated file templates."""

from fnmatch import fnmatchcase
from pathlib import PurePath
from typing import Mapping, Optional, Union


def match_template(
    path: Union[str, PurePath], associations: Mapping[str, str]
) -> Optional[str]:
    """Find the template associated with ``path``.

    Each association pattern behaves like ``**/<pattern>``: a pattern without
    a slash is matched against the file name, one with a slash against the
    end of the path. The first matching association wins.

    Args:
        path: File path to look up
        associations: Glob pattern to template name, in priority order

    Returns:
        Template name, or None if no pattern matches
    """
    pure = PurePath(path)
    posix = pure.as_posix()

    for pattern, template_name in associations.items():
        if pattern.startswith("**/"):
            pattern = pattern[3:]

        if "/" in pattern:
            # fnmatch's "*" also matches "/", so this anchors at any depth
            if fnmatchcase(posix, pattern) or fnmatchcase(posix, f"*/{pattern}"):
                return template_name
        elif fnmatchcase(pure.name, pattern):
            return template_name

    return None
