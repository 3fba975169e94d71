import struct

import pytest

from livewall.reader import Atom, Reader, ReadError, VideoTrack

MATRIX = struct.pack(">9I", 0x10000, 0, 0, 0, 0x10000, 0, 0, 0, 0x40000000)


def box(kind, payload=b""):
    return struct.pack(">I4s", 8 + len(payload), kind) + payload


def tkhd(width, height, duration, version=0):
    if version == 0:
        times = struct.pack(">IIIII", 0, 0, 1, 0, duration)
    else:
        times = struct.pack(">QQIIQ", 0, 0, 1, 0, duration)
    body = (
        bytes([version, 0, 0, 0])
        + times
        + bytes(8)
        + struct.pack(">hhhH", 0, 0, 0, 0)
        + MATRIX
        + struct.pack(">II", width << 16, height << 16)
    )
    return box(b"tkhd", body)


def build_mp4(width=1920, height=1080, timescale=600, duration=6000, version=0,
              edts=False, handler=b"vide", prefix=b"", movie_header=b"mvhd"):
    mvhd = box(movie_header, struct.pack(">IIIII", 0, 0, 0, timescale, duration) + bytes(80))
    children = tkhd(width, height, duration, version)
    if edts:
        children += box(b"edts", box(b"elst", bytes(8)))
    hdlr = box(b"hdlr", struct.pack(">I4s4s", 0, b"mhlr", handler) + bytes(12))
    children += box(b"mdia", box(b"mdhd", bytes(24)) + hdlr)
    moov = box(b"moov", mvhd + box(b"trak", children))
    return box(b"ftyp", b"isom\x00\x00\x02\x00") + prefix + box(b"mdat", bytes(16)) + moov


@pytest.fixture
def write(tmp_path):
    def _write(data, name="movie.mp4"):
        path = tmp_path / name
        path.write_bytes(data)
        return str(path)
    return _write


def read(path):
    with Reader(path) as reader:
        return reader.get_video_data()


def test_reads_basic_track(write):
    track = read(write(build_mp4(width=1280, height=720, timescale=1000, duration=5000)))
    assert track.width == 1280
    assert track.height == 720
    assert track.timescale == 1000
    assert track.duration == 5000
    assert track.version == 0
    assert track.duration_seconds * track.timescale <= track.duration


def test_matrix_is_copied(write):
    track = read(write(build_mp4()))
    assert track.matrix_structure == MATRIX


def test_edit_list_is_skipped(write):
    assert read(write(build_mp4(edts=True))) == read(write(build_mp4(), "plain.mp4"))


def test_extended_size_atom_before_movie(write):
    padding = bytes(24)
    free = struct.pack(">I4sQ", 1, b"free", 16 + len(padding)) + padding
    track = read(write(build_mp4(width=320, height=240, prefix=free)))
    assert (track.width, track.height) == (320, 240)


def test_non_video_handler_rejected(write):
    with pytest.raises(ReadError, match="Only Accepting video-first mp4 files"):
        read(write(build_mp4(handler=b"soun")))


def test_missing_movie_header(write):
    with pytest.raises(ReadError, match="Couldn't find movie header"):
        read(write(build_mp4(movie_header=b"junk")))


def test_missing_movie_atom_sets_eof(write):
    path = write(box(b"ftyp", b"isom") + box(b"mdat", bytes(4)))
    with Reader(path) as reader:
        with pytest.raises(ReadError):
            reader.get_video_data()
        assert reader.is_eof() is True


def test_eof_starts_false(write):
    with Reader(write(build_mp4())) as reader:
        assert reader.is_eof() is False


def test_zero_timescale_rejected(write):
    with pytest.raises(ReadError):
        read(write(build_mp4(timescale=0)))


def test_truncated_file_rejected(write):
    data = build_mp4()
    with pytest.raises(ReadError):
        read(write(data[:-20]))


def test_missing_file(tmp_path):
    with pytest.raises(ReadError, match="file could not be opened"):
        Reader(str(tmp_path / "absent.mp4"))


def test_relative_name_resolved_from_cwd(write, tmp_path, monkeypatch):
    write(build_mp4(width=100, height=50), "rel.mp4")
    monkeypatch.chdir(tmp_path)
    assert read("rel.mp4").width == 100


def test_close_via_context_manager(write):
    with Reader(write(build_mp4())) as reader:
        pass
    assert reader.closed is True
    with pytest.raises(ReadError):
        reader.get_video_data()


def test_atom_length_properties():
    plain = Atom(offset=4, size=24, type_name="moov")
    extended = Atom(offset=0, size=1, type_name="mdat", size64=40)
    assert (plain.length, plain.header_length, plain.end) == (24, 8, 28)
    assert (extended.length, extended.header_length, extended.end) == (40, 16, 40)


def test_video_track_defaults_are_empty():
    track = VideoTrack()
    assert (track.width, track.height, track.matrix_structure) == (0, 0, b"")