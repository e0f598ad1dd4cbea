"""Exception hierarchy for id3chap.

Mirrors the mutagen error tree (MutagenError -> ID3Error -> ...) and adds
the chapter frame failures.
"""


class MutagenError(Exception):
    """Base class for all errors raised by this package."""


class ID3Error(MutagenError):
    """Malformed or unsupported ID3v2 data."""


class ID3NoHeaderError(ID3Error, ValueError):
    """The data does not start with an ID3v2 header."""


class ID3UnsupportedVersionError(ID3Error, NotImplementedError):
    """The tag uses a major version other than 2.2, 2.3 or 2.4."""


class ID3BadFrameError(ID3Error):
    """A frame payload could not be decoded."""


class ID3FrameHeaderError(ID3BadFrameError):
    """A frame header is invalid or its payload is cut short.

    Unlike other frame errors the end of the frame is unknown, so nothing
    after it can be read.
    """


class ChapterError(ID3Error):
    """A CHAP or CTOC payload could not be decoded."""


class ChapterElementIDError(ChapterError):
    """No null terminator was found for the element id."""

    def __init__(self, frame_id):
        super().__init__(f'{frame_id}: no null terminator found for element id')
        self.frame_id = frame_id


class ChapterFieldError(ChapterError):
    """A fixed-width field was cut short."""

    def __init__(self, field):
        super().__init__(f'error reading {field}: unexpected end of data')
        self.field = field


class ChapterEntryError(ChapterError):
    """A CTOC child element id could not be read."""

    def __init__(self, index):
        super().__init__(f'error reading entry {index}: missing terminator')
        self.index = index


class EmbeddedFrameError(ChapterError):
    """The embedded sub-frame region is malformed or overruns its payload."""
