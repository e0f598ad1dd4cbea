"""Low level byte readers shared by the frame and tag decoders."""

_TERMINATORS = {
    'latin1': b'\x00',
    'utf8': b'\x00',
    'utf16': b'\x00\x00',
    'utf_16_be': b'\x00\x00',
}


def xread(fileobj, size):
    """Read exactly `size` bytes or raise EOFError."""
    data = fileobj.read(size)
    if len(data) != size:
        raise EOFError(f'expected {size} bytes, got {len(data)}')
    return data


def read_uint(fileobj, width):
    """Read a big-endian unsigned integer `width` bytes wide."""
    return int.from_bytes(xread(fileobj, width), 'big')


def syncsafe(data):
    """Decode a syncsafe integer (7 significant bits per byte)."""
    value = 0
    for b in bytearray(data):
        value = (value << 7) | (b & 0x7F)
    return value


def unsynch_decode(data):
    """Undo ID3v2 unsynchronisation."""
    return data.replace(b'\xff\x00', b'\xff')


def read_terminated(fileobj, encoding='latin1'):
    """Read a null-terminated string from `fileobj`.

    Bytes are consumed one at a time up to and including the terminator,
    which is not part of the result. Running out of data before the
    terminator raises EOFError; a string cut off by the end of its frame
    is treated as corrupt rather than silently shortened.
    """
    buf = bytearray()
    while True:
        ch = fileobj.read(1)
        if not ch:
            raise EOFError('end of data before string terminator')
        if ch == b'\x00':
            break
        buf += ch
    return buf.decode(encoding)


def decode_terminated(data, encoding, strict=True):
    """Split the first terminated string off `data`.

    Returns (text, remaining_data). For the two byte encodings the
    terminator has to start on an even offset. Without a terminator,
    ValueError is raised if `strict`, otherwise all of `data` is decoded.
    """
    term = _TERMINATORS[encoding]
    if len(term) == 1:
        index = data.find(term)
    else:
        index = 0
        while True:
            index = data.find(term, index)
            if index == -1 or index % 2 == 0:
                break
            index += 1
    if index == -1:
        if strict:
            raise ValueError('string is not terminated')
        return data.decode(encoding), b''
    return data[:index].decode(encoding), data[index + len(term):]
