"""Outline (bookmark tree) planning.

Pure functions: no pypdf, no I/O. The merge pipeline plans the tree here and
only then writes it with pypdf, once every page index is known.

Shape of the tree:

    Table of Contents          -> first page of the output
    - Page 1                   -> first page of document 1
    - Page 2                   -> first page of document 2
    - ...
"""

from __future__ import annotations

from typing import Sequence

from core.domain.labels import render_label
from core.domain.models import Bookmark, BookmarkStyle, SourceDocument


def plan_outline(
    sources: Sequence[SourceDocument],
    *,
    contents_title: str,
    label_template: str,
    total_pages: int,
    style: BookmarkStyle | None = None,
) -> Bookmark:
    """Build the root bookmark with one child per source, in input order.

    `sources[*].first_page_index` must already be final (contents pages
    included). Children of documents without pages are resolved with
    `resolve_zero_pages`.
    """

    style = style or BookmarkStyle()
    children = [
        Bookmark(
            title=render_label(label_template, index=index, name=source.name),
            page_index=source.first_page_index,
            style=style,
        )
        for index, source in enumerate(sources, start=1)
    ]
    root = Bookmark(
        title=contents_title,
        page_index=0 if total_pages else None,
        style=style,
        children=children,
    )
    return resolve_zero_pages(root, total_pages=total_pages)


def resolve_zero_pages(root: Bookmark, *, total_pages: int) -> Bookmark:
    """Point unresolved bookmarks at the next resolved page.

    Walks the tree in document order; a bookmark without a page takes the
    page of the next bookmark that has one, or the last page of the output
    when nothing follows. With an empty output nothing can be resolved and
    the tree is returned unchanged.
    """

    if total_pages <= 0:
        return root

    ordered = root.walk()
    next_page = total_pages - 1
    for bookmark in reversed(ordered):
        if bookmark.page_index is None:
            bookmark.page_index = next_page
        else:
            next_page = bookmark.page_index
    return root
