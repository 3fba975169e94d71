"""Reading video track metadata from MP4 (QuickTime) files."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

ATOM_HEADER_LENGTH = 8
EXTENDED_HEADER_LENGTH = 16

# Offsets inside a version 0 track header atom, counted from the atom start.
_TKHD_DURATION_V0 = 28
_TKHD_MATRIX_V0 = 48
_TKHD_WIDTH_V0 = 84
_TKHD_HEIGHT_V0 = 88
# Version 1 track headers use 64-bit times, shifting later fields by 12 bytes.
_TKHD_V1_SHIFT = 12
_TKHD_DURATION_V1 = 36

_MVHD_TIMESCALE = 20
_HDLR_SUBTYPE = 16
_MATRIX_LENGTH = 36


class ReadError(Exception):
    """Raised when an MP4 file cannot be opened, read or understood."""


@dataclass(frozen=True)
class Atom:
    """Header of one atom: where it starts, its size fields and its type."""

    offset: int
    size: int
    type_name: str
    size64: int = 0

    @property
    def length(self) -> int:
        """Total length of the atom in bytes, header included."""
        return self.size64 if self.size == 1 else self.size

    @property
    def header_length(self) -> int:
        """Length of the atom header in bytes."""
        return EXTENDED_HEADER_LENGTH if self.size == 1 else ATOM_HEADER_LENGTH

    @property
    def end(self) -> int:
        """File offset just past this atom."""
        return self.offset + self.length


@dataclass
class VideoTrack:
    """Metadata of the first video track of a movie."""

    version: int = 0
    matrix_structure: bytes = b""
    width: int = 0
    height: int = 0
    timescale: int = 0
    duration: int = 0  # in movie timescale units
    duration_seconds: int = 0


class Reader:
    """Reads atoms from an MP4 file."""

    def __init__(self, filename: str | Path) -> None:
        self._eof = False
        self._file: BinaryIO | None = None
        for candidate in (Path.cwd() / filename, Path(filename)):
            try:
                self._file = open(candidate, "rb")
            except OSError:
                continue
            self.filepath = candidate
            break
        else:
            raise ReadError("file could not be opened")

    def __enter__(self) -> Reader:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying file."""
        if self._file is not None:
            self._file.close()

    @property
    def closed(self) -> bool:
        return self._file is None or self._file.closed

    def is_eof(self) -> bool:
        """Whether an atom read has run past the end of the file."""
        return self._eof

    def get_video_data(self) -> VideoTrack:
        """Locate the video track and return its metadata."""
        moov = self._find_top_level("moov")
        mvhd = self._expect(moov.offset + moov.header_length, "mvhd", "Couldn't find movie header")
        timescale = self._uint(mvhd.offset + _MVHD_TIMESCALE, 4)

        trak = self._expect(self._after(mvhd), "trak", "Couldn't find track atom")
        tkhd = self._expect(trak.offset + trak.header_length, "tkhd", "Couldn't find track header")

        atom = self._read_atom(self._after(tkhd))
        if atom is not None and atom.type_name == "edts":
            inner = self._required(atom.offset + atom.header_length, "Couldn't find edit list")
            atom = self._read_atom(self._after(inner))
        if atom is None or atom.type_name != "mdia":
            raise ReadError("Couldn't find media atom")

        mdhd = self._required(atom.offset + atom.header_length, "Couldn't find media header")
        self._expect(self._after(mdhd), "hdlr", "Couldn't find handler reference atom")
        hdlr = self._read_atom(self._after(mdhd))
        if self._read_field(hdlr.offset + _HDLR_SUBTYPE, 4) != b"vide":
            raise ReadError("Only Accepting video-first mp4 files")

        version = self._uint(tkhd.offset + 8, 1)
        if version == 1:
            duration = self._uint(tkhd.offset + _TKHD_DURATION_V1, 8)
            shift = _TKHD_V1_SHIFT
        else:
            duration = self._uint(tkhd.offset + _TKHD_DURATION_V0, 4)
            shift = 0

        matrix = self._read_field(tkhd.offset + _TKHD_MATRIX_V0 + shift, _MATRIX_LENGTH)
        # Width and height are 16.16 fixed point; keep the integer part.
        width = self._uint(tkhd.offset + _TKHD_WIDTH_V0 + shift, 4) >> 16
        height = self._uint(tkhd.offset + _TKHD_HEIGHT_V0 + shift, 4) >> 16

        if timescale == 0:
            raise ReadError("Movie timescale is zero")

        return VideoTrack(
            version=version,
            matrix_structure=matrix,
            width=width,
            height=height,
            timescale=timescale,
            duration=duration,
            duration_seconds=duration // timescale,
        )

    def _read_at(self, position: int, count: int) -> bytes:
        if self.closed:
            raise ReadError("file is closed")
        self._file.seek(position)
        return self._file.read(count)

    def _read_field(self, position: int, count: int) -> bytes:
        data = self._read_at(position, count)
        if len(data) != count:
            raise ReadError("Could not get atom data")
        return data

    def _uint(self, position: int, count: int) -> int:
        return int.from_bytes(self._read_field(position, count), "big")

    def _read_atom(self, position: int) -> Atom | None:
        header = self._read_at(position, ATOM_HEADER_LENGTH)
        if len(header) < ATOM_HEADER_LENGTH:
            self._eof = True
            return None
        size, raw_type = struct.unpack(">I4s", header)
        size64 = 0
        if size == 1:
            extended = self._read_at(position + ATOM_HEADER_LENGTH, 8)
            if len(extended) < 8:
                self._eof = True
                return None
            (size64,) = struct.unpack(">Q", extended)
        return Atom(position, size, raw_type.decode("latin-1"), size64)

    def _after(self, atom: Atom) -> int:
        if atom.length < atom.header_length:
            raise ReadError(f"Invalid size for atom {atom.type_name!r}")
        return atom.end

    def _required(self, position: int, message: str) -> Atom:
        atom = self._read_atom(position)
        if atom is None:
            raise ReadError(message)
        return atom

    def _expect(self, position: int, type_name: str, message: str) -> Atom:
        atom = self._read_atom(position)
        if atom is None or atom.type_name != type_name:
            raise ReadError(message)
        return atom

    def _find_top_level(self, type_name: str) -> Atom:
        position = 0
        while True:
            atom = self._read_atom(position)
            if atom is None:
                raise ReadError("Couldn't find movie atom")
            if atom.type_name == type_name:
                return atom
            position = self._after(atom)