"""
Featured media component unit tests.

Tests for the edit session state machine and the shell entry points.
"""

from __future__ import annotations

from uuid import UUID, uuid4

import pytest

from content_model.components.featured_media import (
    CreateNodeInput,
    FeaturedMediaConfig,
    FeaturedMediaEditSession,
    GetNodeInput,
    RenderFeaturedMediaInput,
    SaveFeaturedMediaInput,
    build_widget_rows,
    run_create_node,
    run_get_node,
    run_render_featured_media,
    run_save_featured_media,
)
from content_model.domain.entities import Media, Node, ReferenceCaptionItem

FIELD = "featured_media_field"

# --- Mock Repositories ---


class MockNodeRepo:
    """In-memory node repository for testing."""

    def __init__(self) -> None:
        self._nodes: dict[UUID, Node] = {}
        self.saves = 0

    def save(self, node: Node) -> Node:
        self.saves += 1
        saved = node.model_copy(update={"revision_id": node.revision_id + 1}, deep=True)
        self._nodes[saved.id] = saved
        return saved.model_copy(deep=True)

    def get_by_id(self, node_id: UUID) -> Node | None:
        node = self._nodes.get(node_id)
        return node.model_copy(deep=True) if node else None


class FailingNodeRepo(MockNodeRepo):
    def save(self, node: Node) -> Node:
        raise RuntimeError("storage unavailable")


class MockMediaLookup:
    def __init__(self) -> None:
        self._media = {
            "1": Media(id="1", name="Image 1"),
            "2": Media(id="2", name="Image 2"),
        }

    def get_by_id(self, media_id: str) -> Media | None:
        return self._media.get(media_id)


@pytest.fixture
def repo() -> MockNodeRepo:
    return MockNodeRepo()


@pytest.fixture
def node(repo: MockNodeRepo) -> Node:
    result = run_create_node(CreateNodeInput(title="Node with featured media"), repo=repo)
    assert result.node is not None
    return result.node


def _pairs(items) -> list[tuple[str | None, str]]:
    return [(i.target_id, i.caption) for i in items]


# --- Edit Session Tests ---


class TestEditSession:
    """Test the editing/validating/persisted cycle."""

    def test_caption_then_target_scenario(self, repo: MockNodeRepo, node: Node) -> None:
        """Caption without media fails, selecting media fixes it, save round-trips."""
        session = FeaturedMediaEditSession.open(node.id, FIELD, repo=repo)
        assert session is not None

        session.add()
        session.set_caption(0, "x")
        assert session.submit() is False
        assert session.state == "editing"
        assert [e.delta for e in session.errors] == [0]
        assert repo.saves == 1  # only the create

        session.set_target(0, "media:1")
        assert session.submit() is True
        assert session.state == "persisted"
        assert session.errors == []

        reloaded = repo.get_by_id(node.id)
        assert reloaded is not None
        assert _pairs(reloaded.featured_media[FIELD]) == [("media:1", "x")]

    def test_persisted_order_matches_last_edit(self, repo: MockNodeRepo, node: Node) -> None:
        session = FeaturedMediaEditSession(node, FIELD, repo=repo)
        session.add(ReferenceCaptionItem(target_id="1", caption="Image 1 caption"))
        session.add(ReferenceCaptionItem(target_id="2", caption="Image 2 caption"))
        session.add(ReferenceCaptionItem(target_id="3"))
        session.reorder([2, 0, 1])
        session.remove(1)
        session.reorder([1, 0])

        before_save = session.get_values()
        assert session.submit() is True

        reloaded = repo.get_by_id(node.id)
        assert reloaded is not None
        assert tuple(reloaded.featured_media[FIELD]) == before_save

    def test_blank_rows_are_not_saved(self, repo: MockNodeRepo, node: Node) -> None:
        session = FeaturedMediaEditSession(node, FIELD, repo=repo)
        session.add(ReferenceCaptionItem(target_id="1"))
        session.add()

        assert session.submit() is True
        assert _pairs(session.node.featured_media[FIELD]) == [("1", "")]

    def test_invalid_save_blocks_valid_items(self, repo: MockNodeRepo, node: Node) -> None:
        session = FeaturedMediaEditSession(node, FIELD, repo=repo)
        session.add(ReferenceCaptionItem(target_id="1", caption="ok"))
        session.add(ReferenceCaptionItem(caption="orphan"))

        assert session.submit() is False

        reloaded = repo.get_by_id(node.id)
        assert reloaded is not None
        assert FIELD not in reloaded.featured_media

    def test_edit_after_persist_resumes_editing(self, repo: MockNodeRepo, node: Node) -> None:
        session = FeaturedMediaEditSession(node, FIELD, repo=repo)
        session.add(ReferenceCaptionItem(target_id="1"))
        session.submit()
        assert session.state == "persisted"

        session.add(ReferenceCaptionItem(target_id="2"))
        assert session.state == "editing"
        assert session.submit() is True
        assert session.node.revision_id == node.revision_id + 2

    def test_other_fields_are_untouched(self, repo: MockNodeRepo) -> None:
        created = run_create_node(
            CreateNodeInput(title="Page", references={"news_reference_field": ["n1"]}),
            repo=repo,
        )
        assert created.node is not None

        session = FeaturedMediaEditSession(created.node, FIELD, repo=repo)
        session.add(ReferenceCaptionItem(target_id="1"))
        session.submit()

        assert session.node.references == {"news_reference_field": ["n1"]}

    def test_repository_failure_propagates(self, node: Node) -> None:
        session = FeaturedMediaEditSession(node, FIELD, repo=FailingNodeRepo())
        session.add(ReferenceCaptionItem(target_id="1"))

        with pytest.raises(RuntimeError, match="storage unavailable"):
            session.submit()
        assert session.state == "editing"

    def test_open_missing_node(self, repo: MockNodeRepo) -> None:
        assert FeaturedMediaEditSession.open(uuid4(), FIELD, repo=repo) is None


# --- Shell Function Tests ---


class TestShellFunctions:
    """Test run_* entry points."""

    def test_create_requires_title(self, repo: MockNodeRepo) -> None:
        result = run_create_node(CreateNodeInput(title="  "), repo=repo)

        assert result.success is False
        assert result.errors[0].code == "title_required"

    def test_get_node_not_found(self, repo: MockNodeRepo) -> None:
        result = run_get_node(GetNodeInput(node_id=uuid4()), repo=repo)

        assert result.success is False
        assert result.errors[0].code == "node_not_found"

    def test_save_in_submitted_order(self, repo: MockNodeRepo, node: Node) -> None:
        inp = SaveFeaturedMediaInput(
            node_id=node.id,
            field_name=FIELD,
            items=(
                {"target_id": "2", "caption": "Image 2 caption"},
                {"target_id": "1", "caption": "Image 1 caption"},
            ),
        )
        result = run_save_featured_media(inp, repo=repo, media_lookup=MockMediaLookup())

        assert result.success is True
        assert result.node is not None
        assert _pairs(result.node.featured_media[FIELD]) == [
            ("2", "Image 2 caption"),
            ("1", "Image 1 caption"),
        ]

    def test_save_reports_all_errors(self, repo: MockNodeRepo, node: Node) -> None:
        inp = SaveFeaturedMediaInput(
            node_id=node.id,
            field_name=FIELD,
            items=({"caption": "a"}, {"caption": "b"}),
        )
        result = run_save_featured_media(inp, repo=repo)

        assert result.success is False
        assert result.node is None
        assert [e.delta for e in result.errors] == [0, 1]

    def test_save_missing_node(self, repo: MockNodeRepo) -> None:
        inp = SaveFeaturedMediaInput(node_id=uuid4(), field_name=FIELD, items=())
        result = run_save_featured_media(inp, repo=repo)

        assert result.success is False
        assert result.errors[0].code == "node_not_found"

    def test_render_skips_missing_media(self, repo: MockNodeRepo, node: Node) -> None:
        node.featured_media[FIELD] = [
            ReferenceCaptionItem(target_id="2", caption="Image 2 caption"),
            ReferenceCaptionItem(target_id="99", caption="gone"),
            ReferenceCaptionItem(target_id="1", caption="Image 1 caption"),
        ]
        repo.save(node)

        result = run_render_featured_media(
            RenderFeaturedMediaInput(node_id=node.id, field_name=FIELD),
            repo=repo,
            media_lookup=MockMediaLookup(),
        )

        assert [(i.label, i.caption, i.url) for i in result.items] == [
            ("Image 2", "Image 2 caption", "/media/2"),
            ("Image 1", "Image 1 caption", "/media/1"),
        ]

    def test_widget_rows_toggle_buttons(self, node: Node) -> None:
        config = FeaturedMediaConfig()
        session = FeaturedMediaEditSession(node, FIELD, repo=MockNodeRepo(), config=config)
        session.add()
        session.select(0, ["media:1"])
        session.add()

        rows = build_widget_rows(session.field, MockMediaLookup())

        assert [(r.target_label, r.show_select_button, r.show_remove_button) for r in rows] == [
            ("Image 1", False, True),
            (None, True, False),
        ]
        assert rows[0].caption_description == "The caption that goes with the referenced media."
