"""Attach "KEY: text" comments to declarations."""

from typing import Optional

from .adapter import Comment


def find_comment(comments: list[Comment], key: str) -> Optional[str]:
    """Return the documentation text for a key.

    The first comment (in file order) starting with "<key>:" wins; the
    prefix is removed and the remainder trimmed. A later comment with the
    same prefix is ignored. A label with no text gives None.
    """
    prefix = f"{key}:"
    for comment in comments:
        if comment.text.startswith(prefix):
            # A bare "KEY:" label documents nothing
            return comment.text[len(prefix):].strip() or None
    return None
