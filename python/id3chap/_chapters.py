"""Decoders for the CHAP and CTOC frames of the ID3v2 chapter addendum.

CHAP payload::

    element id      latin1, null terminated
    start time      uint32, milliseconds
    end time        uint32, milliseconds
    start offset    uint32, bytes
    end offset      uint32, bytes
    sub-frames      ID3 frames filling the rest of the payload

CTOC payload::

    element id      latin1, null terminated
    flags           uint8
    entry count     uint8
    entries         entry count x latin1, null terminated
    sub-frames      ID3 frames filling the rest of the payload

All four uint32 fields use 0xFFFFFFFF for "not set", which is decoded as 0.
"""

import io
import logging

from ._errors import (
    ChapterElementIDError,
    ChapterEntryError,
    ChapterFieldError,
    EmbeddedFrameError,
    ID3Error,
)
from ._id3frames import CHAP, CTOC
from ._util import read_terminated, read_uint

logger = logging.getLogger(__name__)

UNSET = 0xFFFFFFFF

# CHAP/CTOC frames may contain further CHAP/CTOC frames
MAX_NESTING = 32


def read_chapter_uint32(fileobj, field):
    """Read a CHAP time/offset, mapping 0xFFFFFFFF to 0."""
    try:
        value = read_uint(fileobj, 4)
    except EOFError as e:
        raise ChapterFieldError(field) from e
    if value == UNSET:
        return 0
    return value


def read_embedded_frames(fileobj, remaining, version, depth=0):
    """Read sub-frames from `fileobj` until `remaining` bytes are used up.

    Returns a dict of frame id -> frame. A later frame with the same id
    replaces the earlier one. Raises EmbeddedFrameError if a frame can't
    be decoded, if the frame sizes don't add up to exactly `remaining`, or
    if chapter frames are nested more than MAX_NESTING levels deep.
    `depth` is the nesting level of the frame that owns the region.
    """
    # imported here, the frame reader dispatches CHAP/CTOC back to us
    from ._framereader import read_frame

    if remaining > 0 and depth >= MAX_NESTING:
        raise EmbeddedFrameError('embedded frames nested too deeply')

    frames = {}
    while remaining > 0:
        try:
            frame = read_frame(fileobj, version, depth + 1)
        except ID3Error as e:
            raise EmbeddedFrameError(f'error reading embedded frames: {e}') from e
        if frame is None:
            raise EmbeddedFrameError(
                f'error reading embedded frames: no frame where '
                f'{remaining} bytes were expected')
        if frame.total_size > remaining:
            raise EmbeddedFrameError(
                f'embedded frame {frame.FrameID} is {frame.total_size} bytes '
                f'but only {remaining} remain')
        if frame.FrameID in frames:
            logger.debug('embedded %s replaces an earlier one', frame.FrameID)
        frames[frame.FrameID] = frame
        remaining -= frame.total_size
    return frames


def _split_element_id(frame_id, data):
    index = data.find(b'\x00')
    if index == -1:
        raise ChapterElementIDError(frame_id)
    return data[:index].decode('latin1'), index + 1


def read_chap_frame(data, version, depth=0):
    """Decode a CHAP payload into a CHAP frame.

    An empty payload gives an empty CHAP instead of an error.
    """
    if not data:
        return CHAP()

    element_id, pos = _split_element_id('CHAP', data)
    fileobj = io.BytesIO(data)
    fileobj.seek(pos)

    start_time = read_chapter_uint32(fileobj, 'start time')
    end_time = read_chapter_uint32(fileobj, 'end time')
    start_offset = read_chapter_uint32(fileobj, 'start offset')
    end_offset = read_chapter_uint32(fileobj, 'end offset')

    sub_frames = read_embedded_frames(
        fileobj, len(data) - fileobj.tell(), version, depth)

    return CHAP(element_id, start_time, end_time, start_offset, end_offset,
                sub_frames)


def read_ctoc_frame(data, version, depth=0):
    """Decode a CTOC payload into a CTOC frame."""
    element_id, pos = _split_element_id('CTOC', data)
    fileobj = io.BytesIO(data)
    fileobj.seek(pos)

    try:
        flags = read_uint(fileobj, 1)
    except EOFError as e:
        raise ChapterFieldError('flags') from e
    try:
        count = read_uint(fileobj, 1)
    except EOFError as e:
        raise ChapterFieldError('entry count') from e

    entries = []
    for i in range(count):
        try:
            entries.append(read_terminated(fileobj))
        except EOFError as e:
            raise ChapterEntryError(i) from e

    sub_frames = read_embedded_frames(
        fileobj, len(data) - fileobj.tell(), version, depth)

    return CTOC(element_id, flags, entries, sub_frames)
