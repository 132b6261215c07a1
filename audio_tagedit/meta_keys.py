from __future__ import annotations

# Field names shared by NormalizedFields, MetaData and MediaFileRecord.
# Keep these centralized so the detector, the writer and the CLI agree on order.

TRACK = "track_number"
ARTIST = "artist"
ALBUM = "album"
TITLE = "title"
YEAR = "year"
GENRE = "genre"

ALBUM_ARTIST = "album_artist"
DISC = "disc_number"

EDITABLE_FIELDS = (TRACK, ARTIST, ALBUM, TITLE, YEAR, GENRE)
PRESERVED_FIELDS = (ALBUM_ARTIST, DISC)

UPDATED = "UPDATED"
SKIPPED = "SKIPPED"
