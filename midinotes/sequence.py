#!/usr/bin/env python3

import enum
import heapq
import itertools
import logging
import math
from .config import ReaderConfig
from .error import InvalidHeaderError, InvalidTrackError, TruncatedStreamError
from .event import (Event, NoteOn, NoteOff, SequenceNumber, Name, EndTrack,
        SetTempo, SetTimeSignature, SetKeySignature, UnknownEvent)
from .note import Note
from .time import TimeDivision

log = logging.getLogger(__name__)


class Format(enum.IntEnum):
    SINGLE_TRACK = 0
    MULTI_TRACK = 1
    MULTI_SONG = 2

    def __str__(self):
        return self.name.lower().replace('_', '-')


class Header:
    """
    The contents of the MThd chunk.

    A header that fails to parse is still returned, with valid set to False
    and any fields that weren't reached left as None. Check it before using
    anything else from the file.
    """

    def __init__(self, format=None, tracks=None, division=None):
        self.format = format
        self.tracks = tracks
        self.division = division
        self.valid = False

    @staticmethod
    def parse(source):
        header = Header()
        try:
            id = source.read_id()
            if id != 'MThd':
                raise InvalidHeaderError('MThd chunk not found.')
            length = source.read_int(4)
            if length != 6:
                raise InvalidHeaderError(
                        'MThd chunk is {length} bytes long, expected 6.'
                        .format(length=length))
            format = source.read_int(2)
            if format not in tuple(Format):
                raise InvalidHeaderError(
                        'Unknown MIDI format {format}.'.format(format=format))
            header.format = Format(format)
            header.tracks = source.read_int(2)
            header.division = TimeDivision(source.read_int(2, signed=True))
        except (InvalidHeaderError, TruncatedStreamError) as error:
            log.warning('Invalid MIDI header: %s', error)
            return header
        header.valid = True
        return header

    def ticks_per_quarter_note(self, mpqn):
        return self.division.ticks_per_quarter_note(mpqn)

    def __bool__(self):
        return self.valid

    def __str__(self):
        if not self.valid:
            return 'invalid MIDI header'
        return ('format {number} ({format}), {tracks} track(s), '
                'division {division}'.format(number=int(self.format),
                format=str(self.format), tracks=self.tracks,
                division=self.division))

    def __repr__(self):
        return 'Header({format!r}, {tracks}, {division!r})'.format(
                format=self.format, tracks=self.tracks,
                division=self.division)


def quantize(ticks, ticks_per_quarter_note, config=None):
    """
    Snap a length in ticks to the nearest dotted power-of-two note value.

    The length is converted to quarter notes and rounded to the nearest
    multiple of config.shortest_note. Dots are then removed one at a time,
    dividing by 1.5, until the base-2 logarithm is within
    config.dot_tolerance of an integer. Returns a (duration, dots) tuple,
    where 2 ** duration is the base length as a fraction of a whole note, or
    None if the length rounds to nothing or doesn't settle within
    config.max_dots dots.
    """
    if config is None:
        config = ReaderConfig()
    if ticks_per_quarter_note <= 0:
        return None
    fraction = ticks / ticks_per_quarter_note
    grid = config.shortest_note
    if not math.isfinite(fraction / grid):
        return None
    fraction = math.floor(fraction / grid + 0.5) * grid
    if fraction <= 0:
        return None
    for dots in range(config.max_dots + 1):
        part, whole = math.modf(math.log2(fraction))
        if abs(part) < config.dot_tolerance:
            # log2 counts in quarter notes, durations in whole notes.
            return int(whole) - 2, dots
        fraction /= 1.5
    return None


class NoteSequence:
    """
    Pairs note on and off events and hands out the finished notes.

    Sounding notes are kept in a dict keyed by (channel, pitch). When a note
    is released it is quantized and pushed onto a heap ordered by start
    time, so notes come out in the order they started even when a long note
    finishes after a short one that started later.
    """

    def __init__(self, division, config=None):
        if config is None:
            config = ReaderConfig()
        self.division = division
        self.config = config
        self.tempo = config.default_tempo
        self._sounding = dict()
        self._pending = list()
        self._order = itertools.count()

    def note_on(self, channel, time, pitch):
        # A second note on for a sounding key ends the first one.
        self.note_off(channel, time, pitch)
        self._sounding[(channel, pitch)] = time

    def note_off(self, channel, time, pitch):
        start = self._sounding.pop((channel, pitch), None)
        if start is None:
            return
        ticks_per_quarter_note = self.division.ticks_per_quarter_note(
                self.tempo)
        value = quantize(time - start, ticks_per_quarter_note, self.config)
        if value is None:
            log.debug('Dropping note %d on channel %d: %d ticks at %d PPQN.',
                    pitch, channel, time - start, ticks_per_quarter_note)
            return
        duration, dots = value
        seconds = start * self.tempo / (ticks_per_quarter_note * 1000000)
        heapq.heappush(self._pending, (start, next(self._order), channel,
                Note(pitch, duration, dots, seconds)))

    def next_note(self):
        """Remove and return the earliest note, or Note.invalid()."""
        if self._pending:
            return heapq.heappop(self._pending)[-1]
        return Note.invalid()

    @property
    def sounding(self):
        """The number of notes turned on but not yet off."""
        return len(self._sounding)

    def clear(self):
        self._sounding.clear()
        del self._pending[:]

    def __len__(self):
        return len(self._pending)


def _is_chunk_id(id):
    return len(id) == 4 and id.isascii() and id.isalpha()


class Track:
    """
    Decodes one MTrk chunk.

    Track.parse runs the event loop to the End Track meta event, collecting
    notes into the track's NoteSequence (the notes attribute). The End Track
    event decides where the track stops, since some files store wrong
    lengths. Past the declared chunk length, decoding only stops early if
    the next bytes are a chunk ID, which means End Track is missing. A track
    is valid only if it reached End Track. Decoding also stops early,
    leaving the track invalid, on an unknown status byte or if the stream
    runs out.

    The track name, sequence number, tempo, time signature and key
    signature last seen are kept as attributes. The signatures are None
    until the track sets them.
    """

    def __init__(self, division=None, config=None):
        if config is None:
            config = ReaderConfig()
        if division is None:
            division = TimeDivision()
        self.config = config
        self.length = None
        self.start = None
        self.name = None
        self.sequence_number = 0
        self.running_status = 0
        self.time = 0
        self.signature = None
        self.key = None
        self.ended = False
        self.valid = False
        self.done = False
        self.notes = NoteSequence(division, config)

    @staticmethod
    def parse(source, division, config=None, *, id=None):
        """
        Read and decode a whole track from a Reader.

        If the caller has already consumed the chunk ID, pass it as id.
        """
        track = Track(division, config)
        try:
            if id is None:
                id = source.read_id()
            if id != 'MTrk':
                raise InvalidTrackError('MTrk chunk not found.')
            track.length = source.read_int(4)
            track.start = source.tell()
            end = track.start + track.length
            while not track.ended:
                if source.tell() >= end and _is_chunk_id(source.peek_id()):
                    raise InvalidTrackError(
                            'No End Track before the next chunk at byte {end}.'
                            .format(end=source.tell()))
                event = track.handle_next_event(source)
                if isinstance(event, UnknownEvent):
                    raise InvalidTrackError(
                            'Encountered an unknown event: {status:X}.'
                            .format(status=event.status))
        except (InvalidTrackError, TruncatedStreamError) as error:
            log.warning('Invalid track: %s', error)
            track._resync(source)
            if not track.config.emit_partial_tracks:
                track.notes.clear()
        else:
            track.valid = True
            if source.tell() != end:
                log.warning('Track length says it ends at byte %d, '
                        'End Track is at byte %d.', end, source.tell())
        track.done = True
        return track

    def _resync(self, source):
        """Skip what's left of the declared chunk length."""
        if self.length is None:
            return
        remaining = self.start + self.length - source.tell()
        if remaining <= 0:
            return
        try:
            source.skip(remaining)
        except TruncatedStreamError as error:
            log.debug('Track chunk runs past the end of the file: %s', error)

    def handle_next_event(self, source):
        """
        Decode and apply one event. Returns the Event.

        Reads the delta time, then the status byte. A byte below 0x80 is a
        data byte, so the last status (running status) is reused and the
        byte is left for the event to read.
        """
        self.time += source.read_var_int()
        status = source.peek()
        if status & 0x80:
            source.read_byte()
            self.running_status = status
        else:
            status = self.running_status
        event = Event.parse(source, status)
        event.time = self.time
        self._apply(event)
        return event

    def _apply(self, event):
        if isinstance(event, NoteOn):
            if event.released:
                self.notes.note_off(event.channel, event.time, event.note)
            else:
                self.notes.note_on(event.channel, event.time, event.note)
        elif isinstance(event, NoteOff):
            self.notes.note_off(event.channel, event.time, event.note)
        elif isinstance(event, EndTrack):
            self.ended = True
        elif isinstance(event, SetTempo):
            self.tempo = event.tempo.mpqn
        elif isinstance(event, SetTimeSignature):
            self.signature = event.signature
        elif isinstance(event, SetKeySignature):
            self.key = event.key
        elif isinstance(event, Name):
            self.name = event.text
        elif isinstance(event, SequenceNumber):
            self.sequence_number = event.number

    @property
    def tempo(self):
        """The current tempo in microseconds per quarter note."""
        return self.notes.tempo

    @tempo.setter
    def tempo(self, value):
        self.notes.tempo = value

    @property
    def drained(self):
        """True once the track has been decoded and all its notes taken."""
        return self.done and len(self.notes) == 0

    def next_note(self):
        return self.notes.next_note()

    def __bool__(self):
        return self.valid

    def __repr__(self):
        return 'Track({name!r}, valid={valid}, notes={notes})'.format(
                name=self.name, valid=self.valid, notes=len(self.notes))
