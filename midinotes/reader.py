#!/usr/bin/env python3

import io
import logging
from .config import ReaderConfig
from .error import TruncatedStreamError
from .io import Reader
from .note import Note
from .sequence import Header, Track

log = logging.getLogger(__name__)


class NoteReader:
    """
    Reads the notes of a MIDI file, one at a time.

    The header is parsed when the reader is created; a reader is true if the
    header is valid. next_note returns notes until it returns Note.invalid(),
    which it then keeps returning. Tracks are read one after another: every
    note of one track, in order of start time, comes before any note of the
    next. Chunks that aren't tracks are skipped.

    Iterating over a NoteReader yields the notes without the sentinel.
    """

    def __init__(self, source, config=None):
        """
        Create a new NoteReader from a binary file object, bytes, or Reader.
        """
        if config is None:
            config = ReaderConfig()
        if not isinstance(source, Reader):
            source = Reader(source)
        self.config = config
        self.source = source
        self.header = Header.parse(source)
        self.track = None
        self._exhausted = not self.header

    def next_note(self):
        """Return the next note, or Note.invalid() at the end of the file."""
        while self.track is None or self.track.drained:
            self.track = self._next_track()
            if self.track is None:
                return Note.invalid()
        return self.track.next_note()

    def _next_track(self):
        while not self._exhausted:
            try:
                id = self.source.read_id()
                if id == 'MTrk':
                    return Track.parse(self.source, self.header.division,
                            self.config, id=id)
                length = self.source.read_int(4)
                log.debug('Skipping %r chunk of %d bytes.', id, length)
                self.source.skip(length)
            except TruncatedStreamError as error:
                log.debug('End of file: %s', error)
                self._exhausted = True
        return None

    def ticks_per_quarter_note(self, mpqn=None):
        if mpqn is None:
            mpqn = self.config.default_tempo
        return self.header.ticks_per_quarter_note(mpqn)

    def close(self):
        self.track = None
        self._exhausted = True
        self.source.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def __iter__(self):
        while True:
            note = self.next_note()
            if not note:
                return
            yield note

    def __bool__(self):
        return bool(self.header)

    def __str__(self):
        return str(self.header)

    def __repr__(self):
        return 'NoteReader({header!r})'.format(header=self.header)


def open(path, config=None):
    """Open a MIDI file for reading notes. Close it with close() or 'with'."""
    return NoteReader(io.open(path, 'rb'), config)


def read_notes(source, config=None):
    """Return a list of every note in a MIDI file object or bytes."""
    return list(NoteReader(source, config))
