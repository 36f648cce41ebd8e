import unittest

from notekeeper.drafts import add_tag, remove_tag, toggle_tag
from notekeeper.models import Note, Tag


class DraftTagsTest(unittest.TestCase):
    def setUp(self):
        self.draft = Note(title="T", tags=[Tag(name="work")])

    def test_add_tag_trims_and_dedupes(self):
        note = add_tag(self.draft, "  idea ")
        self.assertEqual(note.tag_names, ["work", "idea"])
        self.assertIs(add_tag(note, "idea"), note)
        self.assertIs(add_tag(note, "   "), note)
        self.assertEqual(self.draft.tag_names, ["work"])

    def test_remove_tag(self):
        self.assertEqual(remove_tag(self.draft, "work").tags, [])

    def test_toggle_matches_by_id_when_known(self):
        note = Note(title="T", tags=[Tag(id=4, name="work")])
        renamed = Tag(id=4, name="job")
        self.assertIs(toggle_tag(note, renamed, True), note)
        self.assertEqual(toggle_tag(note, renamed, False).tags, [])

    def test_toggle_matches_by_name_without_id(self):
        persisted = Tag(id=4, name="work")
        self.assertIs(toggle_tag(self.draft, persisted, True), self.draft)
        selected = toggle_tag(self.draft, Tag(id=5, name="idea"), True)
        self.assertEqual(selected.tag_names, ["work", "idea"])

    def test_tag_identity(self):
        self.assertTrue(Tag(id=3, name="x").matches(Tag(id=3, name="y")))
        self.assertFalse(Tag(id=3, name="x").matches(Tag(id=4, name="x")))
        self.assertTrue(Tag(id=3, name="x").matches(Tag(name="x")))
        self.assertFalse(Tag(name="x").matches(Tag(name="y")))


if __name__ == "__main__":
    unittest.main()
