"""Command line entry point: print a movie's video track metadata."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from livewall.reader import Reader, ReadError, VideoTrack

PROGRAM = "live-wallpaper"
USAGE_FORMS = ("[filename]", "--help (-h)")
USAGE_NOTE = "It isn't hard."


def _usage_text() -> str:
    forms = "\n".join(f"{PROGRAM} {form}" for form in USAGE_FORMS)
    return f"Usage:\n{forms}\n\n{USAGE_NOTE}"


USAGE = _usage_text()


def usage() -> None:
    """Write the usage message to standard output."""
    stream = sys.stdout
    stream.write(_usage_text())
    stream.write("\n")
    stream.flush()


def format_video_data(track: VideoTrack) -> str:
    """Render the video track metadata as shown on the command line."""
    lines = [
        "",
        "Video Data:",
        f"\tHeight: {track.height}",
        f"\tWidth: {track.width}",
        f"\tTimescale: {track.timescale}",
        f"\tDuration: {track.duration}",
        f"\tDuration (s): {track.duration_seconds}",
    ]
    return "\n".join(lines)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command and return its exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        usage()
        return 1
    if args[0] in ("-h", "--help"):
        usage()
        return 0

    try:
        with Reader(args[0]) as reader:
            track = reader.get_video_data()
    except ReadError as error:
        print(error, file=sys.stderr)
        return 1

    print(format_video_data(track))
    return 0


if __name__ == "__main__":
    sys.exit(main())