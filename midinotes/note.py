#!/usr/bin/env python3

import operator

NOTE_NAMES = ('C', 'C#', 'D', 'D#', 'E', 'F', 'F#', 'G', 'G#', 'A', 'A#', 'B')

_DURATION_NAMES = {
        1: 'breve',
        0: 'whole',
        -1: 'half',
        -2: 'quarter',
        -3: 'eighth',
        -4: 'sixteenth',
        -5: 'thirty-second',
        -6: 'sixty-fourth'}


class Note:
    """
    A single quantized note read from a MIDI track.

    The duration is stored as an exponent of 2, as a fraction of a whole
    note: a quarter note has duration -2 because 2 ** -2 = 1/4. Every dot
    multiplies the length by 1.5, so a dotted quarter note has duration -2
    and dots 1, and a double-dotted whole note has duration 0 and dots 2.

    The start attribute is the time in seconds from the beginning of the
    track. Notes are immutable.

    A note is true if it is valid. Readers return Note.invalid() when they
    run out of notes.
    """

    __slots__ = ('_pitch', '_duration', '_dots', '_start')

    def __init__(self, pitch, duration, dots=0, start=0.0):
        self._pitch = pitch
        self._duration = duration
        self._dots = dots
        self._start = start

    @staticmethod
    def invalid():
        """The sentinel note returned at the end of a stream."""
        return Note(255, 0, -1)

    @property
    def pitch(self):
        """The MIDI note number, 60 is middle C."""
        return self._pitch

    @property
    def duration(self):
        return self._duration

    @property
    def dots(self):
        return self._dots

    @property
    def start(self):
        return self._start

    @property
    def name(self):
        """The pitch name with octave, e.g.: 'C4' for middle C."""
        if not self:
            return None
        return '{name}{octave}'.format(name=NOTE_NAMES[self.pitch % 12],
                octave=self.pitch // 12 - 1)

    @property
    def length(self):
        """The length as a fraction of a whole note, dots included."""
        return 2.0 ** self.duration * 1.5 ** self.dots

    def _key(self):
        return (self._pitch, self._duration, self._dots, self._start)

    def _comparison(self, other, comparison):
        if isinstance(other, Note):
            return comparison(self._key(), other._key())
        return NotImplemented

    def __eq__(self, other):
        return self._comparison(other, operator.eq)

    def __ne__(self, other):
        return self._comparison(other, operator.ne)

    def __hash__(self):
        return hash(self._key())

    def __bool__(self):
        return self.pitch <= 127 and self.dots >= 0

    def __str__(self):
        if not self:
            return 'invalid note'
        duration = _DURATION_NAMES.get(self.duration,
                '2^{exponent}'.format(exponent=self.duration))
        dotted = {0: '', 1: 'dotted ', 2: 'double-dotted '}.get(
                self.dots, '{dots}-dotted '.format(dots=self.dots))
        return '{name} {dotted}{duration} at {start:.3f} s'.format(
                name=self.name, dotted=dotted, duration=duration,
                start=self.start)

    def __repr__(self):
        return 'Note({pitch}, {duration}, {dots}, {start!r})'.format(
                pitch=self.pitch, duration=self.duration, dots=self.dots,
                start=self.start)
