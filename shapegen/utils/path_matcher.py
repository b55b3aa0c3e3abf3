"""
Wildcard path matching for preservation rules.

A preservation rule is a glob over dotted field paths: ``*`` matches any run of
characters (dots included), ``?`` matches exactly one character and ``[...]``
is a character class. A rule that cannot be turned into a pattern is compared
by plain equality instead.
"""
import logging
import re
from functools import lru_cache
from typing import Iterable, Optional, Pattern

logger = logging.getLogger(__name__)


@lru_cache(maxsize=512)
def _compile_glob(glob: str) -> Optional[Pattern]:
    """Translate a glob to a compiled regex, None when the glob is malformed"""
    parts = []
    i = 0
    n = len(glob)

    while i < n:
        char = glob[i]
        if char == '*':
            parts.append('.*')
        elif char == '?':
            parts.append('.')
        elif char == '[':
            end = glob.find(']', i + 1)
            if end == -1:
                return None
            body = glob[i + 1:end]
            if not body:
                return None
            if body[0] == '!':
                body = '^' + body[1:]
            parts.append('[' + body.replace('\\', '\\\\') + ']')
            i = end
        else:
            parts.append(re.escape(char))
        i += 1

    try:
        return re.compile(''.join(parts), re.DOTALL)
    except re.error:
        return None


def is_valid_glob(glob: str) -> bool:
    return _compile_glob(glob) is not None


def glob_match(path: str, glob: str) -> bool:
    """Match one path against one glob, exact equality for malformed globs"""
    compiled = _compile_glob(glob)
    if compiled is None:
        logger.debug(f"Malformed preservation rule '{glob}', using exact match")
        return path == glob
    return compiled.fullmatch(path) is not None


def should_preserve(path: str, patterns: Optional[Iterable[str]]) -> bool:
    """Check whether a field path is exempt from mutation"""
    if not patterns:
        return False

    for pattern in patterns:
        if not isinstance(pattern, str):
            continue
        if glob_match(path, pattern):
            return True
    return False
