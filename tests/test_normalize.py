import unittest

from audio_tagedit.models import NormalizedFields, TagEditRequest
from audio_tagedit.normalize import normalize_fields, trim_to_none


class TestNormalizeFields(unittest.TestCase):
    def test_blank_and_whitespace_become_none(self) -> None:
        fields = normalize_fields(
            TagEditRequest(
                file_id=1, track="", artist="   ", album="\t\n", title=None, year=" ", genre=""
            )
        )
        self.assertEqual(fields, NormalizedFields())

    def test_strings_are_trimmed(self) -> None:
        fields = normalize_fields(
            TagEditRequest(file_id=1, artist="  Bowie ", album=" Heroes", title="V-2 Schneider  ")
        )
        self.assertEqual(fields.artist, "Bowie")
        self.assertEqual(fields.album, "Heroes")
        self.assertEqual(fields.title, "V-2 Schneider")

    def test_numbers_are_parsed(self) -> None:
        fields = normalize_fields(TagEditRequest(file_id=1, track=" 7 ", year="1977"))
        self.assertEqual(fields.track_number, 7)
        self.assertEqual(fields.year, 1977)

    def test_zero_is_a_value_not_absent(self) -> None:
        fields = normalize_fields(TagEditRequest(file_id=1, track="0"))
        self.assertEqual(fields.track_number, 0)

    def test_malformed_numbers_degrade_to_none_with_warning(self) -> None:
        with self.assertLogs("audio_tagedit.normalize", level="WARNING") as captured:
            fields = normalize_fields(
                TagEditRequest(file_id=1, track="abc", year="19x7", genre="Rock")
            )
        self.assertIsNone(fields.track_number)
        self.assertIsNone(fields.year)
        self.assertEqual(fields.genre, "Rock")
        joined = "\n".join(captured.output)
        self.assertIn("Illegal track number: abc", joined)
        self.assertIn("Illegal year: 19x7", joined)

    def test_numbers_tag_formats_cannot_store_are_illegal(self) -> None:
        with self.assertLogs("audio_tagedit.normalize", level="WARNING") as captured:
            fields = normalize_fields(TagEditRequest(file_id=1, track="-2", year="12345"))
        self.assertIsNone(fields.track_number)
        self.assertIsNone(fields.year)
        joined = "\n".join(captured.output)
        self.assertIn("Illegal track number: -2", joined)
        self.assertIn("Illegal year: 12345", joined)

    def test_range_bounds(self) -> None:
        fields = normalize_fields(TagEditRequest(file_id=1, track="65535", year="0"))
        self.assertEqual(fields.track_number, 65535)
        self.assertEqual(fields.year, 0)
        with self.assertLogs("audio_tagedit.normalize", level="WARNING"):
            fields = normalize_fields(TagEditRequest(file_id=1, track="65536", year="+77"))
        self.assertIsNone(fields.track_number)
        self.assertEqual(fields.year, 77)

    def test_track_with_total_is_not_a_number(self) -> None:
        fields = normalize_fields(TagEditRequest(file_id=1, track="3/12"))
        self.assertIsNone(fields.track_number)

    def test_trim_to_none(self) -> None:
        self.assertIsNone(trim_to_none(None))
        self.assertIsNone(trim_to_none("  "))
        self.assertEqual(trim_to_none(" x "), "x")


if __name__ == "__main__":
    unittest.main()
