"""ID3 frame value types.

Every frame the decoder produces is an instance of one of the classes
below. Together they form a closed set of payload shapes (text, URL,
comment, picture, chapter, table of contents, raw binary), so callers can
dispatch on the class instead of guessing at loosely typed values.
"""

from types import MappingProxyType


# ──────────────────────────────────────────────────────────────
# Enums
# ──────────────────────────────────────────────────────────────

def _make_int_enum(name, members, flags=False):
    """Create a simple int-enum class with named members.

    With `flags`, a value that matches no single member is named by the
    members it combines (`TOP_LEVEL|ORDERED`).
    """

    class EnumMeta(type):
        def __iter__(cls):
            return iter(cls._members.values())
        def __contains__(cls, item):
            return item in cls._members.values()

    class IntEnum(int, metaclass=EnumMeta):
        _name = ''
        _members = {}
        def __new__(cls, val, mname=None):
            obj = int.__new__(cls, val)
            if mname is None:
                mname = next(
                    (k for k, v in cls._members.items() if v == val), '')
            if not mname and flags:
                parts = [k for k, v in cls._members.items() if v and val & v == v]
                if sum(cls._members[k] for k in parts) == val:
                    mname = '|'.join(parts)
            obj._name = mname
            return obj
        def __repr__(self):
            if not self._name:
                return f'<{name}: {int(self)}>'
            return f'<{name}.{self._name}: {int(self)}>'
        def __str__(self):
            if not self._name:
                return f'{name}({int(self)})'
            return f'{name}.{self._name}'

    IntEnum.__name__ = name
    IntEnum.__qualname__ = name
    member_dict = {}
    for mname, mval in members:
        inst = IntEnum(mval, mname)
        setattr(IntEnum, mname, inst)
        member_dict[mname] = inst
    IntEnum._members = member_dict
    return IntEnum


ID3Version = _make_int_enum('ID3Version', [
    ('V22', 2), ('V23', 3), ('V24', 4),
])

PictureType = _make_int_enum('PictureType', [
    ('OTHER', 0), ('FILE_ICON', 1), ('OTHER_FILE_ICON', 2),
    ('COVER_FRONT', 3), ('COVER_BACK', 4), ('LEAFLET_PAGE', 5),
    ('MEDIA', 6), ('LEAD_ARTIST', 7), ('ARTIST', 8),
    ('CONDUCTOR', 9), ('BAND', 10), ('COMPOSER', 11),
    ('LYRICIST', 12), ('RECORDING_LOCATION', 13),
    ('DURING_RECORDING', 14), ('DURING_PERFORMANCE', 15),
    ('SCREEN_CAPTURE', 16), ('FISH', 17), ('ILLUSTRATION', 18),
    ('BAND_LOGOTYPE', 19), ('PUBLISHER_LOGOTYPE', 20),
])

CTOCFlags = _make_int_enum('CTOCFlags', [
    ('TOP_LEVEL', 2), ('ORDERED', 1),
], flags=True)


class Encoding(int):
    """ID3 text encoding byte."""
    _name = ''
    def __new__(cls, val, name=''):
        obj = super().__new__(cls, val)
        obj._name = name
        return obj
    def __repr__(self):
        return f'<Encoding.{self._name}: {int(self)}>'
    def __str__(self):
        return f'Encoding.{self._name}'

    @property
    def codec(self):
        """Python codec name used to decode text in this encoding."""
        return _CODECS[self]

Encoding.LATIN1 = Encoding(0, 'LATIN1')
Encoding.UTF16 = Encoding(1, 'UTF16')
Encoding.UTF16BE = Encoding(2, 'UTF16BE')
Encoding.UTF8 = Encoding(3, 'UTF8')

_CODECS = {0: 'latin1', 1: 'utf16', 2: 'utf_16_be', 3: 'utf8'}
ENCODINGS = {int(e): e for e in (
    Encoding.LATIN1, Encoding.UTF16, Encoding.UTF16BE, Encoding.UTF8)}


# ──────────────────────────────────────────────────────────────
# Frame base classes
# ──────────────────────────────────────────────────────────────

class Frame:
    """Base ID3 frame.

    Subclasses list their fields in `_framespec` as (name, default) pairs;
    positional arguments fill them in order and keywords override. Frames
    without a class of their own take their id from the `frame_id` keyword.
    """

    _framespec = []
    _frame_id = None

    # Filled in by the frame reader from the frame header.
    flags = 0
    total_size = 0

    def __init__(self, *args, frame_id=None, **kwargs):
        if frame_id is not None:
            self.__dict__['_frame_id'] = frame_id
        for attr, default in self._framespec:
            setattr(self, attr, default)
        for i, val in enumerate(args):
            if i < len(self._framespec):
                setattr(self, self._framespec[i][0], val)
        for k, v in kwargs.items():
            setattr(self, k, v)

    def _set_wire_info(self, flags, total_size):
        self.__dict__['flags'] = flags
        self.__dict__['total_size'] = total_size

    @property
    def FrameID(self):
        return self._frame_id or type(self).__name__

    @property
    def HashKey(self):
        return self.FrameID

    def _pprint(self):
        return str(self)

    def pprint(self):
        return f'{self.FrameID}={self._pprint()}'

    def __repr__(self):
        return f'{self.FrameID}({self._pprint()!r})'

    def __eq__(self, other):
        if not isinstance(other, Frame):
            return NotImplemented
        return self.HashKey == other.HashKey

    __hash__ = None


class TextFrame(Frame):
    """Text string frame (T??? frames other than TXXX)."""

    _framespec = [('encoding', Encoding.UTF8), ('text', None)]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.text is None:
            self.text = []
        elif isinstance(self.text, str):
            self.text = [self.text]

    def __str__(self):
        return '\u0000'.join(str(x) for x in self.text)

    def __eq__(self, other):
        if isinstance(other, str):
            return str(self) == other
        if isinstance(other, TextFrame):
            return self.HashKey == other.HashKey and self.text == other.text
        return NotImplemented

    def __getitem__(self, item):
        return self.text[item]

    def __iter__(self):
        return iter(self.text)

    def __len__(self):
        return len(self.text)

    def _pprint(self):
        return ' / '.join(str(x) for x in self.text)

    def __repr__(self):
        return f'{self.FrameID}(encoding={self.encoding!r}, text={self.text!r})'


class TXXX(TextFrame):
    """User-defined text."""
    _framespec = [('encoding', Encoding.UTF8), ('desc', ''), ('text', None)]

    @property
    def HashKey(self):
        return f'TXXX:{self.desc}'

    def _pprint(self):
        return f'{self.desc}={" / ".join(str(x) for x in self.text)}'


class COMM(TextFrame):
    """Comment."""
    _framespec = [
        ('encoding', Encoding.UTF8), ('lang', 'eng'), ('desc', ''), ('text', None),
    ]

    @property
    def HashKey(self):
        return f'COMM:{self.desc}:{self.lang}'

    def _pprint(self):
        return f'{self.desc}={" / ".join(str(x) for x in self.text)}'


class UrlFrame(Frame):
    """URL frame (W??? frames other than WXXX)."""
    _framespec = [('url', '')]

    def __str__(self):
        return self.url

    def _pprint(self):
        return self.url

    def __eq__(self, other):
        if isinstance(other, str):
            return self.url == other
        if isinstance(other, UrlFrame):
            return self.HashKey == other.HashKey and self.url == other.url
        return NotImplemented


class UrlFrameU(UrlFrame):
    """URL frame that may repeat, keyed by its URL (WCOM, WOAR)."""
    @property
    def HashKey(self):
        return f'{self.FrameID}:{self.url}'


class WXXX(UrlFrame):
    """User-defined URL."""
    _framespec = [('encoding', Encoding.UTF8), ('desc', ''), ('url', '')]

    @property
    def HashKey(self):
        return f'WXXX:{self.desc}'

    def _pprint(self):
        return f'{self.desc}={self.url}'


class BinaryFrame(Frame):
    """Frame kept as its raw payload."""
    _framespec = [('data', b'')]

    def _pprint(self):
        return f'{len(self.data)} bytes'

    def __eq__(self, other):
        if isinstance(other, BinaryFrame):
            return self.HashKey == other.HashKey and self.data == other.data
        return NotImplemented


class APIC(Frame):
    """Attached Picture."""
    _framespec = [
        ('encoding', Encoding.UTF8), ('mime', 'image/jpeg'),
        ('type', PictureType.COVER_FRONT), ('desc', ''), ('data', b''),
    ]

    @property
    def HashKey(self):
        return f'APIC:{self.desc}'

    def _pprint(self):
        return f'{self.desc} ({self.mime}, {len(self.data)} bytes, type {int(self.type)})'

    def __eq__(self, other):
        if isinstance(other, APIC):
            return (self.HashKey == other.HashKey and self.mime == other.mime
                    and self.type == other.type and self.data == other.data)
        return NotImplemented


# ──────────────────────────────────────────────────────────────
# Chapter frames
# ──────────────────────────────────────────────────────────────

class _ChapterFrame(Frame):
    """Common behaviour of CHAP and CTOC: read-only after construction.

    The fields and the `sub_frames` mapping can't change; the sub-frames
    in it are ordinary frames and stay as mutable as any other frame.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._normalize()
        self.sub_frames = MappingProxyType(dict(self.sub_frames or {}))
        self.__dict__['_frozen'] = True

    def _normalize(self):
        pass

    def __setattr__(self, name, value):
        if self.__dict__.get('_frozen'):
            raise AttributeError(f'{self.FrameID} frames are read-only')
        super().__setattr__(name, value)

    def __delattr__(self, name):
        raise AttributeError(f'{self.FrameID} frames are read-only')

    @property
    def HashKey(self):
        return f'{self.FrameID}:{self.element_id}'

    @property
    def title(self):
        """First value of the embedded TIT2 frame, or '' if there is none."""
        frame = self.sub_frames.get('TIT2')
        if isinstance(frame, TextFrame) and frame.text:
            return str(frame.text[0])
        return ''

    def _fields(self):
        values = [getattr(self, attr) for attr, _ in self._framespec]
        values[-1] = dict(values[-1])  # sub_frames
        return tuple(values)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._fields() == other._fields()


class CHAP(_ChapterFrame):
    """Chapter.

    Times are in milliseconds and offsets in bytes; 0 means the value was
    not given (stored on the wire as 0xFFFFFFFF).
    """
    _framespec = [
        ('element_id', ''), ('start_time', 0), ('end_time', 0),
        ('start_offset', 0), ('end_offset', 0), ('sub_frames', None),
    ]

    def _pprint(self):
        return (f'{self.element_id}: {self.start_time}-{self.end_time} ms '
                f'{self.title!r}')


class CTOC(_ChapterFrame):
    """Table of Contents.

    `child_element_ids` keeps the order the entries had in the frame.
    """
    _framespec = [
        ('element_id', ''), ('flags', CTOCFlags(0)),
        ('child_element_ids', ()), ('sub_frames', None),
    ]

    def _normalize(self):
        self.child_element_ids = tuple(self.child_element_ids)
        self.flags = CTOCFlags(self.flags)

    def _set_wire_info(self, flags, total_size):
        # the header flags would clash with the payload flags byte
        self.__dict__['frame_flags'] = flags
        self.__dict__['total_size'] = total_size

    @property
    def is_top_level(self):
        return bool(self.flags & CTOCFlags.TOP_LEVEL)

    @property
    def is_ordered(self):
        return bool(self.flags & CTOCFlags.ORDERED)

    def _pprint(self):
        return f'{self.element_id}: {", ".join(self.child_element_ids)}'


# ──────────────────────────────────────────────────────────────
# Frame id tables
# ──────────────────────────────────────────────────────────────

Frames = {
    'TXXX': TXXX, 'WXXX': WXXX, 'COMM': COMM, 'APIC': APIC,
    'WCOM': UrlFrameU, 'WOAR': UrlFrameU,
    'CHAP': CHAP, 'CTOC': CTOC,
}

# v2.2 three character ids and their v2.3/v2.4 names
Frames_2_2 = {
    'UFI': 'UFID', 'TT1': 'TIT1', 'TT2': 'TIT2', 'TT3': 'TIT3',
    'TP1': 'TPE1', 'TP2': 'TPE2', 'TP3': 'TPE3', 'TP4': 'TPE4',
    'TCM': 'TCOM', 'TXT': 'TEXT', 'TLA': 'TLAN', 'TCO': 'TCON',
    'TAL': 'TALB', 'TPA': 'TPOS', 'TRK': 'TRCK', 'TRC': 'TSRC',
    'TYE': 'TYER', 'TDA': 'TDAT', 'TIM': 'TIME', 'TRD': 'TRDA',
    'TMT': 'TMED', 'TFT': 'TFLT', 'TBP': 'TBPM', 'TCP': 'TCMP',
    'TCR': 'TCOP', 'TPB': 'TPUB', 'TEN': 'TENC', 'TST': 'TSOT',
    'TSA': 'TSOA', 'TS2': 'TSO2', 'TSP': 'TSOP', 'TSC': 'TSOC',
    'TSS': 'TSSE', 'TOF': 'TOFN', 'TLE': 'TLEN', 'TSI': 'TSIZ',
    'TDY': 'TDLY', 'TKE': 'TKEY', 'TOT': 'TOAL', 'TOA': 'TOPE',
    'TOL': 'TOLY', 'TOR': 'TORY', 'TXX': 'TXXX',
    'WAF': 'WOAF', 'WAR': 'WOAR', 'WAS': 'WOAS', 'WCM': 'WCOM',
    'WCP': 'WCOP', 'WPB': 'WPUB', 'WXX': 'WXXX',
    'COM': 'COMM', 'PIC': 'APIC', 'GEO': 'GEOB', 'CNT': 'PCNT',
    'POP': 'POPM',
}
