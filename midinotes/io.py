#!/usr/bin/env python3

import io
from .error import MIDIError, TruncatedStreamError


class Reader:
    """
    A forward-only byte cursor over a MIDI file.

    Reader accepts a binary file object or anything bytes-like. It never
    seeks, so pipes and sockets work as well as files. Bytes looked at with
    peek or peek_id are buffered until they are read.
    """

    def __init__(self, source):
        """
        Create a new Reader.

        Bytes, bytearrays and memoryviews are wrapped in a BytesIO. File
        objects must be opened in binary mode.
        """
        if isinstance(source, (bytes, bytearray, memoryview)):
            source = io.BytesIO(source)
        elif isinstance(source, io.TextIOBase):
            raise MIDIError('Cannot parse text mode file.')
        self.source = source
        self._buffer = bytearray()
        self._position = 0

    def _fill(self, n):
        """Buffer up to n bytes. Fewer are buffered at end of stream."""
        while len(self._buffer) < n:
            data = self.source.read(n - len(self._buffer))
            if not data:
                return
            self._buffer.extend(data)

    def read(self, n):
        """Read exactly n bytes."""
        if n <= 0:
            return bytes()
        self._fill(n)
        data = bytes(self._buffer[:n])
        del self._buffer[:n]
        self._position += len(data)
        if len(data) < n:
            raise TruncatedStreamError(
                    'Unexpected end of stream. Read {got}/{total} bytes.'
                    .format(got=len(data), total=n))
        return data

    def read_int(self, size, signed=False):
        """Read a big endian integer of size bytes."""
        return int.from_bytes(self.read(size), 'big', signed=signed)

    def read_byte(self):
        return self.read(1)[0]

    def read_var_int(self):
        """Read a MIDI variable length quantity."""
        value = 0
        while True:
            try:
                byte = self.read_byte()
            except TruncatedStreamError:
                raise TruncatedStreamError(
                        'Incomplete variable length integer.') from None
            value = (value << 7) | (byte & 0x7f)
            if ~byte & 0x80:
                return value

    def read_id(self):
        """Read a four character chunk ID."""
        return self.read(4).decode('iso8859-1')

    def peek(self):
        """Return the next byte without consuming it."""
        self._fill(1)
        if not self._buffer:
            raise TruncatedStreamError('Unexpected end of stream.')
        return self._buffer[0]

    def peek_id(self):
        """
        Return the next four bytes as a chunk ID without consuming them.

        Near the end of the stream the result is shorter, or empty.
        """
        self._fill(4)
        return bytes(self._buffer[:4]).decode('iso8859-1')

    def skip(self, n):
        """Discard the next n bytes."""
        while n > 0:
            count = min(n, io.DEFAULT_BUFFER_SIZE)
            self.read(count)
            n -= count

    def tell(self):
        """The number of bytes consumed so far."""
        return self._position

    def close(self):
        self.source.close()

    def __repr__(self):
        return 'Reader({source!r})'.format(source=self.source)
