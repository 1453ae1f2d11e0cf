"""
Path expansion for issue locators.

A locator such as ``$.items[0].body`` is expanded into its ancestor chain
``("$", "$.items", "$.items[0]", "$.items[0].body")`` so that issue counts
can be rolled up onto every enclosing node.
"""

import re
from typing import Tuple

ROOT = "$"

# Member access (.name) or array index ([digits]).
_TOKEN_PATTERN = re.compile(r"\.[^.\[\]]+|\[\d+\]")


def _tokens(path: str) -> list:
    return _TOKEN_PATTERN.findall(path, 1)


def expand_path(path: str) -> Tuple[str, ...]:
    """
    Expand a locator into its root-first ancestor chain, ending at ``path``.

    Paths that are empty or do not start with ``$`` are malformed and
    expand to an empty tuple. Characters the token scan does not recognize
    are skipped; if the accumulated chain does not end with ``path``
    verbatim, ``path`` is appended so it is always part of its own chain.

    Args:
        path: Issue locator string

    Returns:
        Tuple of ancestor paths (empty for malformed paths)
    """
    if not path or path[0] != ROOT:
        return ()

    chain = [ROOT]
    current = ROOT
    for token in _tokens(path):
        current += token
        chain.append(current)

    if chain[-1] != path:
        chain.append(path)

    return tuple(chain)


def count_tokens(path: str) -> int:
    """Number of member/index tokens recognized in a well-formed path."""
    if not path or path[0] != ROOT:
        return 0
    return len(_tokens(path))


def member_path(parent: str, key: str) -> str:
    """Locator of an object member."""
    return f"{parent}.{key}"


def index_path(parent: str, index: int) -> str:
    """Locator of an array element."""
    return f"{parent}[{index}]"
