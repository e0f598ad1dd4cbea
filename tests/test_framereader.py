"""Tests for the generic frame reader and the frame value types."""

import io

import pytest

from id3chap import (
    APIC,
    COMM,
    TXXX,
    WXXX,
    BinaryFrame,
    Encoding,
    ID3BadFrameError,
    ID3FrameHeaderError,
    ID3UnsupportedVersionError,
    ID3Version,
    PictureType,
    TextFrame,
    UrlFrame,
    UrlFrameU,
    read_frame,
)


def syncsafe(size):
    return bytes([(size >> 21) & 0x7F, (size >> 14) & 0x7F,
                  (size >> 7) & 0x7F, size & 0x7F])


def frame24(frame_id, payload, flags=0):
    return (frame_id.encode('latin1') + syncsafe(len(payload))
            + flags.to_bytes(2, 'big') + payload)


def frame23(frame_id, payload, flags=0):
    return (frame_id.encode('latin1') + len(payload).to_bytes(4, 'big')
            + flags.to_bytes(2, 'big') + payload)


def frame22(frame_id, payload):
    return frame_id.encode('latin1') + len(payload).to_bytes(3, 'big') + payload


def read24(data):
    return read_frame(io.BytesIO(data), ID3Version.V24)


# ──────────────────────────────────────────────────────────────
# Frame headers
# ──────────────────────────────────────────────────────────────

class TestFrameHeader:

    def test_end_of_data(self):
        assert read_frame(io.BytesIO(b''), 4) is None

    def test_padding(self):
        assert read_frame(io.BytesIO(b'\x00' * 20), 4) is None

    def test_partial_header(self):
        assert read_frame(io.BytesIO(b'TIT2\x00\x00'), 4) is None

    def test_invalid_id(self):
        with pytest.raises(ID3FrameHeaderError):
            read24(frame24('ti t', b'\x00x'))

    def test_short_payload(self):
        with pytest.raises(ID3FrameHeaderError):
            read24(frame24('TIT2', b'\x00abc')[:-1])

    def test_unsupported_version(self):
        with pytest.raises(ID3UnsupportedVersionError):
            read_frame(io.BytesIO(frame24('TIT2', b'\x00a')), 5)

    def test_v24_syncsafe_size(self):
        payload = b'\x00' + b'a' * 200
        frame = read24(frame24('TIT2', payload))
        assert frame.text == ['a' * 200]
        assert frame.total_size == 10 + 201

    def test_v23_plain_size(self):
        payload = b'\x00' + b'a' * 200
        frame = read_frame(io.BytesIO(frame23('TIT2', payload)), 3)
        assert frame.text == ['a' * 200]
        assert frame.total_size == 10 + 201

    def test_v22_header(self):
        frame = read_frame(io.BytesIO(frame22('TT2', b'\x00Title')), 2)
        assert frame.FrameID == 'TIT2'
        assert frame.total_size == 6 + 6

    def test_v22_unknown_id_kept(self):
        frame = read_frame(io.BytesIO(frame22('XYZ', b'\x01\x02')), 2)
        assert frame.FrameID == 'XYZ'
        assert isinstance(frame, BinaryFrame)

    def test_stream_left_after_frame(self):
        f = io.BytesIO(frame24('TIT2', b'\x00a') + frame24('TIT3', b'\x00b'))
        assert read_frame(f, 4).FrameID == 'TIT2'
        assert read_frame(f, 4).FrameID == 'TIT3'
        assert read_frame(f, 4) is None

    def test_flags_kept(self):
        frame = read24(frame24('TIT2', b'\x00a', flags=0x4000))
        assert frame.flags == 0x4000


class TestFrameFlags:

    def test_v24_data_length_indicator(self):
        payload = (4).to_bytes(4, 'big') + b'\x00abc'
        frame = read24(frame24('TIT2', payload, flags=0x0001))
        assert frame.text == ['abc']

    def test_v24_unsynchronised(self):
        frame = read24(frame24('TIT2', b'\x00\xff\x00\xe0', flags=0x0002))
        assert frame.text == ['\xff\xe0']

    def test_v24_group_id(self):
        frame = read24(frame24('TIT2', b'\x07\x00abc', flags=0x0040))
        assert frame.text == ['abc']

    def test_v24_compressed_kept_raw(self):
        frame = read24(frame24('TIT2', b'x\x9c...', flags=0x0008))
        assert isinstance(frame, BinaryFrame)
        assert frame.FrameID == 'TIT2'
        assert frame.data == b'x\x9c...'

    def test_v23_encrypted_kept_raw(self):
        frame = read_frame(io.BytesIO(frame23('TIT2', b'\x01abc', 0x0040)), 3)
        assert isinstance(frame, BinaryFrame)


# ──────────────────────────────────────────────────────────────
# Payload shapes
# ──────────────────────────────────────────────────────────────

class TestTextFrames:

    def test_utf8_multiple_values(self):
        frame = read24(frame24('TPE1', b'\x03One\x00Two'))
        assert isinstance(frame, TextFrame)
        assert frame.encoding == Encoding.UTF8
        assert frame.text == ['One', 'Two']
        assert str(frame) == 'One\x00Two'
        assert frame.HashKey == 'TPE1'

    def test_trailing_terminator(self):
        assert read24(frame24('TIT2', b'\x03Intro\x00')).text == ['Intro']

    def test_latin1(self):
        frame = read24(frame24('TIT2', b'\x00caf\xe9'))
        assert frame.encoding == Encoding.LATIN1
        assert frame.text == ['caf\xe9']

    def test_utf16_bom(self):
        payload = b'\x01' + 'Intro'.encode('utf16') + b'\x00\x00'
        frame = read_frame(io.BytesIO(frame23('TIT2', payload)), 3)
        assert frame.encoding == Encoding.UTF16
        assert frame.text == ['Intro']

    def test_utf16be(self):
        frame = read24(frame24('TIT2', b'\x02' + 'Hi'.encode('utf_16_be')))
        assert frame.text == ['Hi']

    def test_v23_padding_ignored(self):
        frame = read_frame(io.BytesIO(frame23('TIT2', b'\x00abc\x00\x00\x00')), 3)
        assert frame.text == ['abc']

    def test_empty(self):
        assert read24(frame24('TIT2', b'\x03')).text == []

    def test_bad_encoding(self):
        with pytest.raises(ID3BadFrameError):
            read24(frame24('TIT2', b'\x04abc'))

    def test_missing_encoding(self):
        with pytest.raises(ID3BadFrameError):
            read24(frame24('TIT2', b''))

    def test_txxx(self):
        frame = read24(frame24('TXXX', b'\x03key\x00value'))
        assert isinstance(frame, TXXX)
        assert frame.desc == 'key'
        assert frame.text == ['value']
        assert frame.HashKey == 'TXXX:key'

    def test_comm(self):
        frame = read24(frame24('COMM', b'\x03engdesc\x00hello'))
        assert isinstance(frame, COMM)
        assert frame.lang == 'eng'
        assert frame.desc == 'desc'
        assert frame.text == ['hello']
        assert frame.HashKey == 'COMM:desc:eng'

    def test_comm_without_language(self):
        with pytest.raises(ID3BadFrameError):
            read24(frame24('COMM', b'\x03en'))


class TestUrlFrames:

    def test_url(self):
        frame = read24(frame24('WOAF', b'https://example.com/a.mp3'))
        assert type(frame) is UrlFrame
        assert frame == 'https://example.com/a.mp3'
        assert frame.HashKey == 'WOAF'

    def test_repeatable_url(self):
        frame = read24(frame24('WCOM', b'https://shop.example.com'))
        assert isinstance(frame, UrlFrameU)
        assert frame.HashKey == 'WCOM:https://shop.example.com'

    def test_wxxx(self):
        frame = read24(frame24('WXXX', b'\x03chapter url\x00https://example.com'))
        assert isinstance(frame, WXXX)
        assert frame.desc == 'chapter url'
        assert frame.url == 'https://example.com'
        assert frame.HashKey == 'WXXX:chapter url'


class TestPictureFrames:

    def test_apic(self):
        frame = read24(frame24('APIC', b'\x00image/jpeg\x00\x03front\x00\xff\xd8\xff'))
        assert isinstance(frame, APIC)
        assert frame.mime == 'image/jpeg'
        assert frame.type == PictureType.COVER_FRONT
        assert frame.desc == 'front'
        assert frame.data == b'\xff\xd8\xff'
        assert frame.HashKey == 'APIC:front'

    def test_apic_utf16_description(self):
        desc = 'art'.encode('utf16') + b'\x00\x00'
        frame = read_frame(io.BytesIO(
            frame23('APIC', b'\x01image/png\x00\x04' + desc + b'\x00\x01')), 3)
        assert frame.desc == 'art'
        assert frame.type == PictureType.COVER_BACK
        assert frame.data == b'\x00\x01'

    def test_v22_pic(self):
        frame = read_frame(io.BytesIO(frame22('PIC', b'\x00PNG\x03\x00data')), 2)
        assert isinstance(frame, APIC)
        assert frame.FrameID == 'APIC'
        assert frame.mime == 'image/png'
        assert frame.data == b'data'

    def test_missing_type(self):
        with pytest.raises(ID3BadFrameError):
            read24(frame24('APIC', b'\x00image/png\x00'))


class TestBinaryFrames:

    def test_unknown_frame(self):
        frame = read24(frame24('PRIV', b'owner\x00\x01\x02'))
        assert isinstance(frame, BinaryFrame)
        assert frame.FrameID == 'PRIV'
        assert frame.data == b'owner\x00\x01\x02'
        assert frame.pprint() == 'PRIV=8 bytes'
