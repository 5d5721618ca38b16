from __future__ import annotations

from core.domain.models import Bookmark, BookmarkStyle, SourceDocument
from core.services.outline import plan_outline, resolve_zero_pages


def _source(name: str, pages: int, first: int | None) -> SourceDocument:
    return SourceDocument(reference=name, location=f"/docs/{name}", page_count=pages, first_page_index=first)


class TestPlanOutline:
    def test_children_follow_input_order(self):
        sources = [_source("a.pdf", 2, 0), _source("b.pdf", 1, 2)]

        root = plan_outline(sources, contents_title="Table of Contents", label_template="Page {index}", total_pages=3)

        assert root.title == "Table of Contents"
        assert root.page_index == 0
        assert [(c.title, c.page_index) for c in root.children] == [("Page 1", 0), ("Page 2", 2)]

    def test_index_counts_documents_without_pages(self):
        sources = [_source("a.pdf", 1, 0), _source("empty.pdf", 0, None), _source("c.pdf", 1, 1)]

        root = plan_outline(sources, contents_title="Contents", label_template="Page {index}", total_pages=2)

        assert [c.title for c in root.children] == ["Page 1", "Page 2", "Page 3"]
        assert [c.page_index for c in root.children] == [0, 1, 1]

    def test_style_is_applied_to_every_entry(self):
        style = BookmarkStyle(color=(1.0, 0.0, 0.0), bold=True)
        sources = [_source("a.pdf", 1, 0), _source("b.pdf", 1, 1)]

        root = plan_outline(sources, contents_title="TOC", label_template="{stem}", total_pages=2, style=style)

        assert all(b.style.bold and b.style.color == (1.0, 0.0, 0.0) for b in root.walk())
        assert [c.title for c in root.children] == ["a", "b"]


class TestResolveZeroPages:
    def test_unresolved_take_next_resolved_page(self):
        root = Bookmark(
            title="root",
            page_index=0,
            children=[
                Bookmark(title="x", page_index=None),
                Bookmark(title="y", page_index=None),
                Bookmark(title="z", page_index=4),
            ],
        )

        resolve_zero_pages(root, total_pages=6)

        assert [c.page_index for c in root.children] == [4, 4, 4]

    def test_trailing_unresolved_take_last_page(self):
        root = Bookmark(title="root", page_index=0, children=[Bookmark(title="x", page_index=None)])

        resolve_zero_pages(root, total_pages=3)

        assert root.children[0].page_index == 2

    def test_empty_output_leaves_tree_untouched(self):
        root = Bookmark(title="root", children=[Bookmark(title="x")])

        resolve_zero_pages(root, total_pages=0)

        assert root.page_index is None
        assert root.children[0].page_index is None
