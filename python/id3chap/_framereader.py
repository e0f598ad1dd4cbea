"""Generic ID3v2 frame decoder.

Reads one frame header and payload from a stream and turns the payload
into the matching frame class from `_id3frames`.
"""

import logging
import re

from ._chapters import read_chap_frame, read_ctoc_frame
from ._errors import (
    ID3BadFrameError,
    ID3FrameHeaderError,
    ID3UnsupportedVersionError,
)
from ._id3frames import (
    APIC,
    COMM,
    ENCODINGS,
    TXXX,
    WXXX,
    BinaryFrame,
    Frames,
    Frames_2_2,
    ID3Version,
    PictureType,
    TextFrame,
    UrlFrame,
)
from ._util import decode_terminated, syncsafe, unsynch_decode

logger = logging.getLogger(__name__)

_FRAME_ID = re.compile(r'[A-Z0-9]{3,4}\Z')

# v2.2 PIC frames name the image format instead of a mime type
_PIC_MIME = {'JPG': 'image/jpeg', 'PNG': 'image/png'}


def header_size(version):
    """Size in bytes of a frame header for the given tag version."""
    return 6 if version == ID3Version.V22 else 10


def read_frame(fileobj, version, depth=0):
    """Read the next frame from `fileobj`.

    Returns None when there is no further frame: end of data, a partial
    header, or padding. Raises ID3FrameHeaderError for an invalid frame id
    or a payload shorter than its header claims, and ID3BadFrameError (or a
    ChapterError for CHAP/CTOC) when the payload can't be decoded.
    `depth` is the number of chapter frames enclosing this one.
    """
    if version not in ID3Version:
        raise ID3UnsupportedVersionError(f'unsupported ID3v2.{version}')
    version = ID3Version(version)

    size_of_header = header_size(version)
    header = fileobj.read(size_of_header)
    if len(header) < size_of_header or header[:1] == b'\x00':
        return None

    if version == ID3Version.V22:
        raw_id, size, flags = header[:3], int.from_bytes(header[3:6], 'big'), 0
    else:
        raw_id, flags = header[:4], int.from_bytes(header[8:10], 'big')
        if version == ID3Version.V24:
            size = syncsafe(header[4:8])
        else:
            size = int.from_bytes(header[4:8], 'big')

    frame_id = raw_id.decode('latin1')
    if not _FRAME_ID.match(frame_id):
        raise ID3FrameHeaderError(f'invalid frame id {frame_id!r}')

    data = fileobj.read(size)
    if len(data) != size:
        raise ID3FrameHeaderError(
            f'{frame_id}: expected {size} bytes of data, got {len(data)}')

    if version == ID3Version.V22:
        frame_id = Frames_2_2.get(frame_id, frame_id)

    logger.debug('reading %s frame (%d bytes, flags 0x%04x)',
                 frame_id, size, flags)
    frame = _read_payload(frame_id, data, flags, version, depth)
    frame._set_wire_info(flags, size_of_header + size)
    return frame


def _read_payload(frame_id, data, flags, version, depth):
    if version == ID3Version.V24:
        if flags & 0x0040:
            data = data[1:]  # group id
        if flags & 0x000C:
            return BinaryFrame(data, frame_id=frame_id)
        if flags & 0x0001:
            data = data[4:]  # data length indicator
        if flags & 0x0002:
            data = unsynch_decode(data)
    elif version == ID3Version.V23:
        if flags & 0x00C0:
            return BinaryFrame(data, frame_id=frame_id)
        if flags & 0x0020:
            data = data[1:]  # group id

    if frame_id == 'CHAP':
        return read_chap_frame(data, version, depth)
    if frame_id == 'CTOC':
        return read_ctoc_frame(data, version, depth)

    reader = _READERS.get(frame_id)
    if reader is None:
        if frame_id.startswith('T'):
            reader = _read_text
        elif frame_id.startswith('W'):
            reader = _read_url
        else:
            return BinaryFrame(data, frame_id=frame_id)
    try:
        return reader(frame_id, data, version)
    except (ValueError, IndexError) as e:
        raise ID3BadFrameError(f'{frame_id}: {e}') from e


# ──────────────────────────────────────────────────────────────
# Payload readers
# ──────────────────────────────────────────────────────────────

def _read_encoding(data):
    if not data:
        raise ValueError('missing text encoding')
    encoding = ENCODINGS.get(data[0])
    if encoding is None:
        raise ValueError(f'invalid text encoding {data[0]}')
    return encoding, data[1:]


def _split_text(data, codec, version):
    values = []
    while data:
        value, data = decode_terminated(data, codec, strict=False)
        values.append(value)
        # pre-2.4 tags have a single value, possibly followed by padding
        if version < ID3Version.V24 and not data.strip(b'\x00'):
            break
    return values


def _read_text(frame_id, data, version):
    encoding, data = _read_encoding(data)
    return TextFrame(encoding, _split_text(data, encoding.codec, version),
                     frame_id=frame_id)


def _read_txxx(frame_id, data, version):
    encoding, data = _read_encoding(data)
    desc, data = decode_terminated(data, encoding.codec)
    return TXXX(encoding, desc, _split_text(data, encoding.codec, version))


def _read_url(frame_id, data, version):
    url = data.split(b'\x00', 1)[0].decode('latin1')
    return Frames.get(frame_id, UrlFrame)(url, frame_id=frame_id)


def _read_wxxx(frame_id, data, version):
    encoding, data = _read_encoding(data)
    desc, data = decode_terminated(data, encoding.codec, strict=False)
    return WXXX(encoding, desc, data.split(b'\x00', 1)[0].decode('latin1'))


def _read_comm(frame_id, data, version):
    encoding, data = _read_encoding(data)
    if len(data) < 3:
        raise ValueError('missing language')
    lang, data = data[:3].decode('latin1'), data[3:]
    desc, data = decode_terminated(data, encoding.codec, strict=False)
    return COMM(encoding, lang, desc, _split_text(data, encoding.codec, version))


def _read_apic(frame_id, data, version):
    encoding, data = _read_encoding(data)
    if version == ID3Version.V22:
        fmt = data[:3].decode('latin1').upper()
        mime, data = _PIC_MIME.get(fmt, 'image/' + fmt.lower()), data[3:]
    else:
        mime, data = decode_terminated(data, 'latin1')
    pic_type, data = PictureType(data[0]), data[1:]
    desc, data = decode_terminated(data, encoding.codec)
    return APIC(encoding, mime, pic_type, desc, data)


_READERS = {
    'TXXX': _read_txxx,
    'WXXX': _read_wxxx,
    'COMM': _read_comm,
    'APIC': _read_apic,
}
