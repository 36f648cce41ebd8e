"""Tests for local state reconciliation."""

import unittest

from notekeeper.exceptions import CreateError, DeleteError, FetchError, UpdateError
from notekeeper.models import Category, Note
from notekeeper.state import (
    NotesState,
    with_created_note,
    with_updated_note,
    without_note,
)

from .fakes import FakeNotesServer, note_payload


def _note(note_id, title="T", category=None):
    return Note(id=note_id, title=title, category=category)


class NotesStateTest(unittest.TestCase):
    def test_stats_for_single_uncategorized_note(self):
        state = NotesState(
            notes=(
                Note.model_validate(
                    {
                        "id": 1,
                        "title": "A",
                        "content": "x",
                        "tags": [{"id": 1, "name": "work"}],
                        "category": None,
                    }
                ),
            )
        )
        self.assertEqual(state.stats.total, 1)
        self.assertEqual(state.stats.categories, 0)

    def test_stats_count_distinct_category_names(self):
        home = Category(id=1, name="Home")
        work = Category(id=2, name="Work")
        notes = tuple(
            _note(i, category=c) for i, c in enumerate([home, work, home, None])
        )
        stats = NotesState(notes=notes).stats
        self.assertEqual(stats.total, 4)
        self.assertEqual(stats.categories, 2)

    def test_recent_is_capped_at_ten(self):
        state = NotesState(notes=tuple(_note(i) for i in range(15)))
        self.assertEqual(state.stats.recent, 10)

    def test_created_note_goes_to_front_by_default(self):
        state = NotesState(notes=(_note(1),))
        self.assertEqual([n.id for n in with_created_note(state, _note(2)).notes], [2, 1])
        self.assertEqual(
            [n.id for n in with_created_note(state, _note(2), prepend=False).notes],
            [1, 2],
        )

    def test_update_replaces_matching_entry(self):
        state = NotesState(notes=(_note(1, "a"), _note(2, "b")))
        new = with_updated_note(state, _note(2, "B"))
        self.assertEqual([n.title for n in new.notes], ["a", "B"])
        self.assertEqual([n.title for n in state.notes], ["a", "b"])

    def test_update_of_unknown_note_is_a_noop(self):
        state = NotesState(notes=(_note(1),))
        with self.assertLogs("notekeeper.state", level="WARNING"):
            self.assertIs(with_updated_note(state, _note(9)), state)

    def test_delete_removes_entry(self):
        state = NotesState(notes=(_note(1), _note(2)))
        self.assertEqual([n.id for n in without_note(state, 1).notes], [2])


class StateSynchronizerTest(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.server = FakeNotesServer()
        self.server.add_note(note_payload(1, "A"))
        self.server.add_note(note_payload(2, "B"))
        self.api = self.server.api()

    async def asyncSetUp(self):
        await self.api.sync.refresh_notes()

    async def test_create_adds_server_copy_first(self):
        before = self.api.state
        created = await self.api.sync.create_note(Note(title="C"))
        after = self.api.state
        self.assertEqual(len(after.notes), len(before.notes) + 1)
        self.assertEqual(after.notes[0].id, created.id)
        self.assertIsNotNone(created.id)

    async def test_failed_create_leaves_state_unchanged(self):
        before = self.api.state
        self.server.fail_path("POST", "/api/notes", 500, {"error": "boom"})
        with self.assertRaises(CreateError):
            await self.api.sync.create_note(Note(title="C"))
        self.assertIs(self.api.state, before)
        self.assertEqual(len(self.server.requests_to("POST", "/api/notes")), 1)

    async def test_update_replaces_entry(self):
        note = self.api.state.find(2).model_copy(update={"title": "B2"})
        await self.api.sync.update_note(note)
        self.assertEqual([n.title for n in self.api.state.notes], ["A", "B2"])

    async def test_failed_update_leaves_state_unchanged(self):
        before = self.api.state
        self.server.break_path("PUT", "/api/notes/2")
        with self.assertRaises(UpdateError):
            await self.api.sync.update_note(before.find(2).model_copy(update={"title": "x"}))
        self.assertIs(self.api.state, before)

    async def test_delete_removes_entry(self):
        await self.api.sync.delete_note(1)
        self.assertEqual([n.id for n in self.api.state.notes], [2])

    async def test_failed_delete_leaves_state_unchanged(self):
        before = self.api.state
        self.server.fail_path("DELETE", "/api/notes/1", 403)
        with self.assertRaises(DeleteError):
            await self.api.sync.delete_note(1)
        self.assertIs(self.api.state, before)

    async def test_tag_mutations(self):
        tag = await self.api.sync.create_tag("books")
        self.assertEqual(self.api.state.tags[0], tag)
        await self.api.sync.delete_tag(tag.id)
        self.assertEqual(self.api.state.tags, ())

    async def test_listeners_see_each_new_snapshot(self):
        seen = []
        unsubscribe = self.api.sync.subscribe(seen.append)
        await self.api.sync.delete_note(1)
        unsubscribe()
        await self.api.sync.delete_note(2)
        self.assertEqual(len(seen), 1)
        self.assertEqual([n.id for n in seen[0].notes], [2])

    async def test_failed_refresh_keeps_previous_state(self):
        before = self.api.state
        self.server.break_path("GET", "/api/notes")
        with self.assertRaises(FetchError):
            await self.api.sync.refresh_notes()
        self.assertIs(self.api.state, before)


class DashboardLoadTest(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.server = FakeNotesServer()
        self.server.add_note(
            note_payload(1, "A", tags=[(1, "work")], category={"id": 1, "name": "Work"})
        )
        self.server.add_category(1, "Work")
        self.server.add_tag(1, "work", system=True)
        self.api = self.server.api()

    async def test_load_dashboard(self):
        state = await self.api.load_dashboard()
        self.assertIs(self.api.state, state)
        self.assertEqual(state.stats.total, 1)
        self.assertEqual(state.stats.categories, 1)
        self.assertEqual([c.name for c in state.categories], ["Work"])
        self.assertEqual([t.name for t in state.tags], ["work"])

    async def test_batch_is_all_or_nothing(self):
        before = self.api.state
        self.server.break_path("GET", "/api/categories")
        with self.assertRaises(FetchError):
            await self.api.load_dashboard()
        self.assertIs(self.api.state, before)
        self.assertEqual(before.notes, ())

    async def test_search_options_fall_back_only_for_tags(self):
        self.server.break_path("GET", "/api/tags")
        tags, categories = await self.api.load_search_options()
        self.assertEqual(len(tags), 6)
        self.assertEqual([c.name for c in categories], ["Work"])


if __name__ == "__main__":
    unittest.main()
