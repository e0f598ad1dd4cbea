"""id3chap.id3 - ID3 tag and frame types.

Same names as the mutagen.id3 module, for code written against it.
"""
from . import (
    # Tag container
    ID3,
    ID3Header,
    # Errors
    MutagenError,
    ID3Error,
    ID3NoHeaderError,
    ID3UnsupportedVersionError,
    ID3BadFrameError,
    ID3FrameHeaderError,
    # Enums
    Encoding,
    PictureType,
    CTOCFlags,
    ID3Version,
    # Frame classes
    Frame,
    TextFrame,
    TXXX,
    COMM,
    UrlFrame,
    UrlFrameU,
    WXXX,
    BinaryFrame,
    APIC,
    CHAP,
    CTOC,
    # Frame dicts
    Frames, Frames_2_2,
)

Open = ID3

__all__ = [
    'ID3', 'Open', 'ID3Header', 'MutagenError', 'ID3Error', 'ID3NoHeaderError',
    'ID3UnsupportedVersionError', 'ID3BadFrameError', 'ID3FrameHeaderError',
    'Encoding', 'PictureType', 'CTOCFlags', 'ID3Version',
    'Frame', 'TextFrame', 'TXXX', 'COMM', 'UrlFrame', 'UrlFrameU', 'WXXX',
    'BinaryFrame', 'APIC', 'CHAP', 'CTOC', 'Frames', 'Frames_2_2',
]
