"""Builders for Standard MIDI File bytes used by the tests."""


def var_int(value):
    array = bytearray([value & 0x7f])
    value >>= 7
    while value:
        array.append((value & 0x7f) | 0x80)
        value >>= 7
    return bytes(reversed(array))


def chunk(id, data, length=None):
    if length is None:
        length = len(data)
    return id.encode('ascii') + length.to_bytes(4, 'big') + data


def header(format=0, tracks=1, division=480):
    return chunk('MThd', format.to_bytes(2, 'big') + tracks.to_bytes(2, 'big')
            + division.to_bytes(2, 'big', signed=True))


def event(delta, *data):
    return var_int(delta) + bytes(data)


END_TRACK = event(0, 0xff, 0x2f, 0x00)


def track(*events, end=True, length=None):
    data = b''.join(events)
    if end:
        data += END_TRACK
    return chunk('MTrk', data, length)


def midi_file(*tracks, format=0, division=480):
    return header(format, len(tracks), division) + b''.join(tracks)


def note(pitch, start, length, channel=0):
    """A note on after start ticks and its note off length ticks later."""
    return (event(start, 0x90 | channel, pitch, 64)
            + event(length, 0x80 | channel, pitch, 0))
