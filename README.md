# livewall

Reads the video track metadata of an MP4 (QuickTime) file. It walks the
file's atom structure and reports the frame dimensions, the movie timescale
and the track duration.

The walk goes: the top-level `moov` atom, then its `mvhd` movie header
(for the timescale), then the first `trak` and its `tkhd` track header.
After the track header an optional `edts` atom is skipped, and the `mdia`
atom's `hdlr` handler must have the subtype `vide`. Only files whose first
track is a video track are accepted.

## Installation

```
pip install .
```

No dependencies beyond the standard library.

## Command line

```
live-wallpaper clip.mp4
```

prints something like:

```

Video Data:
	Height: 1080
	Width: 1920
	Timescale: 1000
	Duration: 12000
	Duration (s): 12
```

`live-wallpaper --help` (or `-h`) prints the usage message and exits with
status 0. Any number of arguments other than one prints the usage and exits
with status 1. If the file cannot be opened or its structure is not
understood, the error message goes to standard error and the exit status
is 1.

## Library

```python
from livewall.reader import Reader, ReadError

try:
    with Reader("clip.mp4") as reader:
        track = reader.get_video_data()
except ReadError as exc:
    print("unreadable:", exc)
else:
    print(track.width, track.height, track.timescale, track.duration)
```

- `Reader(filename)` opens the file relative to the current directory
  first and then as given; if neither opens it raises `ReadError`. It is a
  context manager; `close()` closes the file and `closed` tells whether it
  is closed. `is_eof()` tells whether an atom header read ran past the end
  of the file.
- `Reader.get_video_data()` returns a `VideoTrack` with `version` (of the
  track header), `matrix_structure` (the 36 raw bytes of the track matrix),
  `width` and `height` (integer part of the 16.16 fixed-point values),
  `timescale`, `duration` (in timescale units) and `duration_seconds`
  (whole seconds). Both version 0 and version 1 track headers are read.
  A missing atom, a truncated field, an invalid atom size, a non-video
  first track or a zero timescale raises `ReadError`.
- `Atom` describes one atom header: `offset`, `size`, `type_name`,
  `size64`, and the derived `length`, `header_length` and `end`. 64-bit
  extended sizes are understood.
- `livewall.cli.format_video_data(track)` gives the text that the command
  prints, and `livewall.cli.main(argv=None)` runs the command and returns
  its exit status.

## What it does not do

The package only reads metadata. It does not decode or read video frames,
does not look at sample tables or codecs, and does not display anything
or set a desktop wallpaper.

## Running the tests

```
pip install .[test]
pytest
```