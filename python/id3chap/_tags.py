"""ID3v2 tag header parsing and the ID3 frame container."""

import io
import logging
import os

from ._errors import (
    ID3Error,
    ID3FrameHeaderError,
    ID3NoHeaderError,
    ID3UnsupportedVersionError,
)
from ._framereader import read_frame
from ._id3frames import CHAP, CTOC, ID3Version
from ._util import syncsafe, unsynch_decode

logger = logging.getLogger(__name__)


class ID3Header:
    """The 10 byte header at the start of an ID3v2 tag."""

    def __init__(self, fileobj):
        data = fileobj.read(10)
        if len(data) != 10 or data[:3] != b'ID3':
            raise ID3NoHeaderError("data doesn't start with an ID3 tag")
        major, self.revision, self.flags = data[3], data[4], data[5]
        if major not in ID3Version:
            raise ID3UnsupportedVersionError(f'ID3v2.{major} not supported')
        self.version = ID3Version(major)
        self.size = syncsafe(data[6:10])

    @property
    def unsynch(self):
        return bool(self.flags & 0x80)

    @property
    def extended(self):
        # 0x40 means compression in v2.2, which nobody implements
        return self.version > ID3Version.V22 and bool(self.flags & 0x40)

    def __repr__(self):
        return (f'ID3Header(version=2.{int(self.version)}.{self.revision}, '
                f'flags=0x{self.flags:02x}, size={self.size})')


class ID3(dict):
    """Frames of one ID3v2 tag, keyed by HashKey in tag order.

    `filething` is a path or a binary file object positioned at the tag.
    """

    def __init__(self, filething=None):
        super().__init__()
        self._header = None
        if filething is not None:
            self.load(filething)

    @property
    def version(self):
        if self._header is None:
            return (2, 4, 0)
        return (2, int(self._header.version), self._header.revision)

    def load(self, filething):
        """Replace the contents with the frames of the tag in `filething`."""
        if isinstance(filething, (str, bytes, os.PathLike)):
            with open(filething, 'rb') as fileobj:
                self._load(fileobj)
        else:
            self._load(filething)

    def _load(self, fileobj):
        self.clear()
        self._header = None
        header = ID3Header(fileobj)
        body = fileobj.read(header.size)
        if len(body) != header.size:
            raise ID3Error(
                f'tag is {header.size} bytes but only {len(body)} are present')
        # v2.4 marks unsynchronisation per frame
        if header.unsynch and header.version < ID3Version.V24:
            body = unsynch_decode(body)
        if header.extended:
            if header.version == ID3Version.V23:
                body = body[4 + int.from_bytes(body[:4], 'big'):]
            else:
                body = body[syncsafe(body[:4]):]
        self._header = header

        stream = io.BytesIO(body)
        while True:
            try:
                frame = read_frame(stream, header.version)
            except ID3FrameHeaderError as e:
                logger.warning('stopped reading tag: %s', e)
                break
            except ID3Error as e:
                logger.warning('skipping bad frame: %s', e)
                continue
            if frame is None:
                break
            self.add(frame)
        logger.debug('read %d frames from ID3v2.%d tag',
                     len(self), int(header.version))

    def add(self, frame):
        """Add a frame by its HashKey, replacing any frame with the same key."""
        self[frame.HashKey] = frame

    def getall(self, key):
        """Return all frames matching key (supports 'TXXX:desc' colon matching)."""
        if ':' in key:
            v = self.get(key)
            return [v] if v is not None else []
        return [v for k, v in self.items()
                if k == key or k.startswith(key + ':')]

    def chapters(self):
        """CHAP frames in tag order."""
        return [f for f in self.values() if isinstance(f, CHAP)]

    def tocs(self):
        """CTOC frames in tag order."""
        return [f for f in self.values() if isinstance(f, CTOC)]

    def toc(self):
        """The top-level CTOC frame, or None."""
        for toc in self.tocs():
            if toc.is_top_level:
                return toc
        return None

    def pprint(self):
        """Pretty-print the frames, one per line."""
        return '\n'.join(frame.pprint() for frame in self.values())

    def __repr__(self):
        return f'ID3({list(self.keys())!r})'
