"""Tests for payload normalization."""

import unittest
from collections import OrderedDict

from notekeeper.models import Note, Tag
from notekeeper.normalize import (
    normalize_note,
    normalize_note_list,
    normalize_tag_collection,
)

WORK = {"id": 1, "name": "work"}
IDEA = {"id": 2, "name": "idea"}


class NormalizeTagCollectionTest(unittest.TestCase):
    def test_absent_is_empty(self):
        self.assertEqual(normalize_tag_collection(None), [])

    def test_list_is_returned_as_is(self):
        tags = [WORK, IDEA]
        self.assertIs(normalize_tag_collection(tags), tags)

    def test_tuple_keeps_order(self):
        self.assertEqual(normalize_tag_collection((IDEA, WORK)), [IDEA, WORK])

    def test_set_of_tags(self):
        tags = {Tag(name="x"), Tag(name="y")}
        out = normalize_tag_collection(tags)
        self.assertEqual(out, list(tags))

    def test_object_map_values_without_nulls(self):
        tags = OrderedDict([("0", WORK), ("1", None), ("2", IDEA)])
        self.assertEqual(normalize_tag_collection(tags), [WORK, IDEA])

    def test_scalars_fail_soft(self):
        for value in ("work", 42, 3.5, True, b"tags"):
            with self.subTest(value=value):
                self.assertEqual(normalize_tag_collection(value), [])

    def test_idempotent(self):
        encodings = [
            None,
            [WORK, IDEA],
            {"a": WORK, "b": IDEA},
            {Tag(name="x")},
            "garbage",
        ]
        for raw in encodings:
            with self.subTest(raw=raw):
                once = normalize_tag_collection(raw)
                self.assertEqual(normalize_tag_collection(once), once)


class NormalizeNoteTest(unittest.TestCase):
    def test_object_map_tags_from_server(self):
        raw = {
            "id": 5,
            "title": "T",
            "content": "C",
            "tags": {"0": {"name": "x"}, "1": {"name": "y"}},
            "category": None,
        }
        out = normalize_note(raw)
        self.assertEqual(out["tags"], [{"name": "x"}, {"name": "y"}])
        self.assertEqual(Note.model_validate(out).tag_names, ["x", "y"])

    def test_shallow_copy_leaves_input_alone(self):
        category = {"id": 3, "name": "Work"}
        raw = {"id": 1, "title": "A", "tags": None, "category": category, "pinned": True}
        out = normalize_note(raw)
        self.assertIsNot(out, raw)
        self.assertIsNone(raw["tags"])
        self.assertIs(out["category"], category)
        self.assertTrue(out["pinned"])

    def test_missing_tags_become_empty(self):
        self.assertEqual(normalize_note({"id": 1, "title": "A"})["tags"], [])


class NormalizeNoteListTest(unittest.TestCase):
    def test_bare_object_becomes_single_item_list(self):
        out = normalize_note_list({"id": 1, "title": "A", "tags": {"0": WORK}})
        self.assertEqual(len(out), 1)
        self.assertEqual(out[0]["tags"], [WORK])

    def test_list_order_preserved(self):
        raw = [{"id": 2, "title": "B"}, {"id": 1, "title": "A"}]
        self.assertEqual([n["id"] for n in normalize_note_list(raw)], [2, 1])

    def test_empty_and_absent(self):
        self.assertEqual(normalize_note_list(None), [])
        self.assertEqual(normalize_note_list([]), [])

    def test_non_object_entries_are_skipped(self):
        out = normalize_note_list([{"id": 1, "title": "A"}, None, "x"])
        self.assertEqual([n["id"] for n in out], [1])


if __name__ == "__main__":
    unittest.main()
