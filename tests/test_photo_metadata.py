"""Tests for capture date resolution and photo listing."""

import datetime
import pathlib

import photo_metadata
from conftest import FakeExif
from photo_metadata import (
    PRIMARY_DATE_TAG,
    SECONDARY_DATE_TAG,
    ZERO_DATE,
    MetadataResolver,
    PhotoRecord,
    is_photo_file,
    list_photo_files,
    try_read_date,
)


# =============================================================================
# Decoder
# =============================================================================


def test_try_read_date_reads_exif_tags(photo_dir, write_photo):
    photo = write_photo(photo_dir / "a.jpg", original="2020:01:01 10:30:00", digitized="2019:05:05 08:00:00")

    assert try_read_date(photo, PRIMARY_DATE_TAG) == datetime.datetime(2020, 1, 1, 10, 30)
    assert try_read_date(photo, SECONDARY_DATE_TAG) == datetime.datetime(2019, 5, 5, 8, 0)


def test_try_read_date_absent_tag_is_none(photo_dir, write_photo):
    photo = write_photo(photo_dir / "a.jpg", digitized="2019:05:05 08:00:00")

    assert try_read_date(photo, PRIMARY_DATE_TAG) is None


def test_try_read_date_zeroed_tag_is_none(photo_dir, write_photo):
    photo = write_photo(photo_dir / "a.jpg", original="0000:00:00 00:00:00")

    assert try_read_date(photo, PRIMARY_DATE_TAG) is None


# =============================================================================
# Resolver
# =============================================================================


def test_record_processable_requires_non_zero_date():
    assert not PhotoRecord(path=pathlib.Path("a.jpg")).processable
    assert not PhotoRecord(path=pathlib.Path("a.jpg"), captured_at=ZERO_DATE).processable
    assert PhotoRecord(path=pathlib.Path("a.jpg"), captured_at=datetime.datetime(2020, 1, 1)).processable


def test_primary_tag_wins_over_secondary(photo_dir, write_photo):
    photo = write_photo(photo_dir / "a.jpg", original="2020:01:01 10:00:00", digitized="2021:02:02 10:00:00")

    record = MetadataResolver().resolve(photo)

    assert record.processable
    assert record.captured_at == datetime.datetime(2020, 1, 1, 10, 0)


def test_falls_back_to_digitized_when_original_missing(photo_dir, write_photo):
    photo = write_photo(photo_dir / "a.jpg", digitized="2021:02:02 11:00:00")

    record = MetadataResolver().resolve(photo)

    assert record.captured_at == datetime.datetime(2021, 2, 2, 11, 0)


def test_falls_back_to_digitized_when_original_zeroed(photo_dir, write_photo):
    photo = write_photo(photo_dir / "a.jpg", original="0000:00:00 00:00:00", digitized="2021:02:02 11:00:00")

    record = MetadataResolver().resolve(photo)

    assert record.captured_at == datetime.datetime(2021, 2, 2, 11, 0)


def test_no_usable_tags_yields_zero_date(photo_dir, write_photo):
    photo = write_photo(photo_dir / "a.jpg", original="0000:00:00 00:00:00", digitized="0000:00:00 00:00:00")

    record = MetadataResolver().resolve(photo)

    assert record.captured_at == ZERO_DATE
    assert not record.processable


def test_non_image_file_is_unprocessable(photo_dir):
    photo = photo_dir / "notes.jpg"
    photo.write_text("definitely not a jpeg")

    record = MetadataResolver().resolve(photo)

    assert not record.processable


def test_decoder_failure_is_swallowed():
    fake = FakeExif()
    fake.broken.add("corrupt.jpg")

    record = MetadataResolver(date_reader=fake).resolve(pathlib.Path("/photos/corrupt.jpg"))

    assert record.captured_at is None
    assert not record.processable


def test_secondary_tag_not_read_when_primary_usable(fake_exif, resolver):
    fake_exif.set("a.jpg", original=datetime.datetime(2020, 1, 1))

    resolver.resolve(pathlib.Path("/photos/a.jpg"))

    assert [tag for _, tag in fake_exif.calls] == [PRIMARY_DATE_TAG]


def test_fallback_parses_the_file_once(photo_dir, write_photo, monkeypatch):
    photo = write_photo(photo_dir / "a.jpg", digitized="2021:02:02 11:00:00")
    parsed = []
    real_process_file = photo_metadata.exifread.process_file

    def counting(f, **kwargs):
        parsed.append(f)
        return real_process_file(f, **kwargs)

    monkeypatch.setattr(photo_metadata.exifread, "process_file", counting)

    record = MetadataResolver().resolve(photo)

    assert record.captured_at == datetime.datetime(2021, 2, 2, 11, 0)
    assert len(parsed) == 1


def test_tags_are_not_shared_between_calls(photo_dir, write_photo):
    photo = write_photo(photo_dir / "a.jpg", original="2020:01:01 10:00:00")
    resolver = MetadataResolver()
    assert resolver.resolve(photo).captured_at == datetime.datetime(2020, 1, 1, 10, 0)

    write_photo(photo, original="2022:03:03 09:00:00")

    assert resolver.resolve(photo).captured_at == datetime.datetime(2022, 3, 3, 9, 0)


# =============================================================================
# Listing
# =============================================================================


def test_is_photo_file():
    assert is_photo_file(pathlib.Path("a.jpg"))
    assert is_photo_file(pathlib.Path("a.jpeg"))
    assert not is_photo_file(pathlib.Path("a.mov"))
    assert not is_photo_file(pathlib.Path("a.jpg.txt"))


def test_listing_is_flat_and_photo_only(photo_dir):
    (photo_dir / "a.jpg").write_bytes(b"")
    (photo_dir / "b.jpeg").write_bytes(b"")
    (photo_dir / "a.mov").write_bytes(b"")
    for folder in ("Organized/2020 01 01", "Not Processed"):
        (photo_dir / folder).mkdir(parents=True)
        (photo_dir / folder / "c.jpg").write_bytes(b"")
    (photo_dir / "folder.jpg").mkdir()

    files = list_photo_files(photo_dir)

    assert sorted(f.name for f in files) == ["a.jpg", "b.jpeg"]
