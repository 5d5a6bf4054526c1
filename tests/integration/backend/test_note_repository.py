"""
Integration Tests for Note Repository.

Filters, ordering and tag storage against a real SQLite database.
"""

from datetime import datetime

import pytest

from scribe.backend.core.exceptions import InvalidIdError, NotFoundError
from scribe.backend.domain.query import NoteFilter, build_filter
from scribe.backend.repositories.note import NoteRepository, filter_clauses


@pytest.fixture
def repo(db_session) -> NoteRepository:
    return NoteRepository(db_session)


class TestFilterClauses:
    def test_empty_filter_has_no_clauses(self):
        assert filter_clauses(NoteFilter()) == []

    def test_one_clause_per_tag(self):
        assert len(filter_clauses(NoteFilter(archived=False, tags=("a", "b")))) == 3


class TestListFiltered:
    @pytest.mark.asyncio
    async def test_pinned_first_then_most_recent(self, repo, make_note):
        await make_note(title="old", updated_at=datetime(2024, 1, 1))
        await make_note(title="pinned", pinned=True, updated_at=datetime(2023, 1, 1))
        await make_note(title="new", updated_at=datetime(2024, 6, 1))

        notes = await repo.list_filtered(NoteFilter())

        assert [n.title for n in notes] == ["pinned", "new", "old"]

    @pytest.mark.asyncio
    async def test_text_matches_title_or_content_case_insensitively(self, repo, make_note):
        await make_note(title="Shopping", content="<p>Milk</p>")
        await make_note(title="MILKSHAKE recipe", content="<p>Blend</p>")
        await make_note(title="Other", content="<p>Nothing</p>")

        notes = await repo.list_filtered(build_filter(q="milk"))

        assert sorted(n.title for n in notes) == ["MILKSHAKE recipe", "Shopping"]

    @pytest.mark.asyncio
    async def test_text_match_folds_non_ascii(self, repo, make_note):
        await make_note(title="ÉTUDE", content="<p>Straße</p>")
        await make_note(title="etude", content="<p>ascii only</p>")

        accented = await repo.list_filtered(build_filter(q="étude"))
        sharp_s = await repo.list_filtered(build_filter(q="STRASSE"))

        assert [n.title for n in accented] == ["ÉTUDE"]
        assert [n.title for n in sharp_s] == ["ÉTUDE"]

    @pytest.mark.asyncio
    async def test_text_wildcards_match_literally(self, repo, make_note):
        await make_note(title="100% done")
        await make_note(title="1000 done")

        notes = await repo.list_filtered(build_filter(q="0%"))

        assert [n.title for n in notes] == ["100% done"]

    @pytest.mark.asyncio
    async def test_tags_must_all_be_present(self, repo, make_note):
        await make_note(title="both", tags=["a", "b", "c"])
        await make_note(title="only a", tags=["a"])

        notes = await repo.list_filtered(build_filter(tags="a,b"))

        assert [n.title for n in notes] == ["both"]

    @pytest.mark.asyncio
    async def test_mood_alias_matches_stored_alias(self, repo, make_note):
        await make_note(title="canonical", mood="feliz")
        await make_note(title="legacy", mood="happy")
        await make_note(title="sad", mood="triste")

        notes = await repo.list_filtered(build_filter(mood="feliz"))

        assert sorted(n.title for n in notes) == ["canonical", "legacy"]

    @pytest.mark.asyncio
    async def test_archived_flag(self, repo, make_note):
        await make_note(title="active")
        await make_note(title="archived", archived=True)

        active = await repo.list_filtered(build_filter(archived="false"))
        archived = await repo.list_filtered(build_filter(archived="true"))
        both = await repo.list_filtered(build_filter())

        assert [n.title for n in active] == ["active"]
        assert [n.title for n in archived] == ["archived"]
        assert len(both) == 2


class TestMutations:
    @pytest.mark.asyncio
    async def test_tags_keep_their_order(self, repo):
        note = await repo.create(title="t", content="<p>x</p>", tags=["zeta", "alpha"])

        assert list(note.tags) == ["zeta", "alpha"]

    @pytest.mark.asyncio
    async def test_tag_only_update_refreshes_updated_at(self, repo, make_note):
        note = await make_note(tags=["a"], updated_at=datetime(2024, 1, 1))

        updated = await repo.update(note.id, tags=["b", "a"])

        assert list(updated.tags) == ["b", "a"]
        assert updated.updated_at > datetime(2024, 1, 1)

    @pytest.mark.asyncio
    async def test_toggles(self, repo, make_note):
        note = await make_note()

        assert (await repo.toggle_pinned(note.id)).pinned is True
        assert (await repo.toggle_pinned(note.id)).pinned is False
        assert (await repo.toggle_archived(note.id)).archived is True

    @pytest.mark.asyncio
    async def test_delete_removes_tags(self, repo, make_note):
        note = await make_note(tags=["gone"])

        await repo.delete(note.id)

        assert await repo.distinct_tags() == []
        with pytest.raises(NotFoundError):
            await repo.get_by_id(note.id)

    @pytest.mark.asyncio
    async def test_malformed_id(self, repo):
        with pytest.raises(InvalidIdError):
            await repo.get_by_id("not-a-uuid")


class TestDistinctTags:
    @pytest.mark.asyncio
    async def test_sorted_and_deduplicated(self, repo, make_note):
        await make_note(tags=["work", "home"])
        await make_note(tags=["home", "books"], archived=True)

        assert await repo.distinct_tags() == ["books", "home", "work"]
