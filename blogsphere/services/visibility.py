"""
Blog visibility rules.

A blog is visible to a viewer when it is published or the viewer wrote it,
and the viewer is not on the blog's block-list. Bulk listings additionally
require at least one of the blog's categories to be among the viewer's
preferences; a viewer's own blogs are exempt from that check.

These functions only look at already-loaded objects and never touch the
database, so the same rules hold for every query path.
"""
from typing import Iterable, List

from blogsphere.models.blog import Blog
from blogsphere.models.user import User


def is_author(blog: Blog, viewer_id: int) -> bool:
    return blog.author_id == viewer_id


def is_blocked(blog: Blog, viewer_id: int) -> bool:
    # An author can never be blocked from their own blog
    if is_author(blog, viewer_id):
        return False
    return viewer_id in blog.blocked_users


def can_view(blog: Blog, viewer_id: int) -> bool:
    """Single-blog visibility: published-or-own and not blocked"""
    if not (blog.is_published or is_author(blog, viewer_id)):
        return False
    return not is_blocked(blog, viewer_id)


def matches_preferences(blog: Blog, preferences: Iterable[str]) -> bool:
    return bool(set(blog.categories or ()) & set(preferences or ()))


def is_listable(blog: Blog, viewer: User) -> bool:
    if not can_view(blog, viewer.id):
        return False
    if is_author(blog, viewer.id):
        return True
    return matches_preferences(blog, viewer.preferences)


def list_visible(viewer: User, blogs: Iterable[Blog]) -> List[Blog]:
    """Filter ``blogs`` down to what ``viewer`` may see in a listing, keeping order"""
    return [blog for blog in blogs if is_listable(blog, viewer)]
