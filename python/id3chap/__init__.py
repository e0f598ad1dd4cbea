"""id3chap - ID3v2 chapter (CHAP/CTOC) frame reader.

Decodes the Chapter and Table of Contents frames of the ID3v2 Chapter
Frame Addendum, including their embedded sub-frames, and reads whole
ID3v2.2/2.3/2.4 tags into a mutagen-style frame container.
"""

from importlib.metadata import version as _pkg_version

try:
    __version__ = _pkg_version("id3chap")
except Exception:
    __version__ = "0.0.0"

version = tuple(int(x) for x in __version__.split('.')[:3])
version_string = __version__

from ._errors import (  # noqa: E402
    MutagenError,
    ID3Error,
    ID3NoHeaderError,
    ID3UnsupportedVersionError,
    ID3BadFrameError,
    ID3FrameHeaderError,
    ChapterError,
    ChapterElementIDError,
    ChapterFieldError,
    ChapterEntryError,
    EmbeddedFrameError,
)
from ._id3frames import (  # noqa: E402
    # Enums
    ID3Version, PictureType, CTOCFlags, Encoding,
    # Frame classes
    Frame, TextFrame, TXXX, COMM, UrlFrame, UrlFrameU, WXXX,
    BinaryFrame, APIC, CHAP, CTOC,
    # Frame id tables
    Frames, Frames_2_2,
)
from ._util import read_uint, read_terminated  # noqa: E402
from ._chapters import (  # noqa: E402
    read_chapter_uint32,
    read_embedded_frames,
    read_chap_frame,
    read_ctoc_frame,
)
from ._framereader import read_frame  # noqa: E402
from ._tags import ID3, ID3Header  # noqa: E402

# mutagen.id3 style alias
Open = ID3
