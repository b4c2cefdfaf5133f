#!/usr/bin/env python3

import numbers
import operator


class Tempo:
    """Stores musical tempo and provides unit conversions."""

    def __init__(self, bpm=120, *, mpqn=None):
        """
        Create a new Tempo object.

        If called without arguments, the tempo defaults to 120 BPM.

        Otherwise, if passed a single number, assume it is the tempo in beats
        per minute. If passed a bytes object, assume it is the body of a
        SetTempo event: microseconds per quarter note in 3 bytes.
        """
        self._mpqn = 500000
        if isinstance(bpm, numbers.Number):
            self.bpm = bpm
        else:
            self.mpqn = int.from_bytes(bpm, 'big')
        if mpqn is not None:
            self.mpqn = mpqn

    @property
    def mpqn(self):
        """The tempo in microseconds per quarter note."""
        return self._mpqn

    @mpqn.setter
    def mpqn(self, value):
        self._mpqn = int(value)

    @property
    def bpm(self):
        """The tempo in beats per minute."""
        return 60000000 / self._mpqn

    @bpm.setter
    def bpm(self, value):
        self._mpqn = round(60000000 / value)

    def _comparison(self, other, comparison):
        if isinstance(other, Tempo):
            return comparison(self.mpqn, other.mpqn)
        return NotImplemented

    def __eq__(self, other):
        return self._comparison(other, operator.eq)

    def __ne__(self, other):
        return self._comparison(other, operator.ne)

    def __hash__(self):
        return hash(self.mpqn)

    def __str__(self):
        return '{bpm} BPM'.format(bpm=round(self.bpm))

    def __repr__(self):
        return 'Tempo(mpqn={mpqn})'.format(mpqn=self.mpqn)


class TimeDivision:
    """
    Represents the time division field from a MIDI file header.

    The field is a signed 16 bit number. A positive value is the number of
    ticks per quarter note (PPQN). A negative value is SMPTE based: the high
    byte is the negated number of frames per second and the low byte is the
    number of ticks per frame. The mode attribute is either 'ppqn' or
    'smpte'.
    """

    def __init__(self, value=480):
        """
        Create a new TimeDivision object.

        Accepts the signed integer from the header, or the 2 raw bytes.
        """
        if not isinstance(value, numbers.Number):
            value = int.from_bytes(value, 'big', signed=True)
        self.value = value

    @property
    def mode(self):
        return 'smpte' if self.value < 0 else 'ppqn'

    @property
    def ppqn(self):
        """Ticks per quarter note in PPQN mode, otherwise None."""
        if self.value < 0:
            return None
        return self.value

    @property
    def frames(self):
        """SMPTE frames per second in SMPTE mode, otherwise None."""
        if self.value >= 0:
            return None
        # The high byte is signed, >> keeps the sign.
        return -(self.value >> 8)

    @property
    def subframes(self):
        """Ticks per SMPTE frame in SMPTE mode, otherwise None."""
        if self.value >= 0:
            return None
        return self.value & 0xff

    def ticks_per_quarter_note(self, mpqn):
        """
        Convert the division to ticks per quarter note at a given tempo.

        PPQN divisions don't depend on tempo and are returned unchanged.
        SMPTE divisions count ticks per second, so the tempo, in
        microseconds per quarter note, is needed. The result is truncated to
        an integer.
        """
        if self.value >= 0:
            return self.value
        # [ticks/frame] * [frames/s] * [us/quarter] / [us/s]
        return self.subframes * self.frames * mpqn // 1000000

    def __eq__(self, other):
        if isinstance(other, TimeDivision):
            return self.value == other.value
        return NotImplemented

    def __hash__(self):
        return hash(self.value)

    def __str__(self):
        if self.mode == 'ppqn':
            return '{ppqn} PPQN'.format(ppqn=self.ppqn)
        else:
            return '{frames} FPS x {subframes}'.format(
                    frames=self.frames, subframes=self.subframes)

    def __repr__(self):
        return 'TimeDivision({value})'.format(value=self.value)


class TimeSignature:
    """
    Represents a MIDI time signature.

    The numerator and denominator of a time signature, e.g.: 6/8, are
    available through the numerator and denominator attributes.

    MIDI time signatures also store the number of MIDI clocks per metronome
    click (metronome) and the number of 32nd notes per 24 MIDI clocks
    (clock), which is usually 8.
    """

    def __init__(self, numerator=4, denominator=4, metronome=24, clock=8):
        """
        Create a new TimeSignature object.

        If given a single bytes-like object, assume it's the body of a
        SetTimeSignature event, where the denominator is stored as a power
        of two.
        """
        if isinstance(numerator, (bytes, bytearray)):
            source = numerator
            numerator = source[0]
            denominator = 2 ** source[1]
            metronome = source[2]
            clock = source[3]
        self.numerator = numerator
        self.denominator = denominator
        self.metronome = metronome
        self.clock = clock

    def __eq__(self, other):
        if isinstance(other, TimeSignature):
            return (self.numerator == other.numerator and
                    self.denominator == other.denominator and
                    self.metronome == other.metronome and
                    self.clock == other.clock)
        return NotImplemented

    def __str__(self):
        return '{numerator}/{denominator}'.format(
                numerator=self.numerator, denominator=self.denominator)

    def __repr__(self):
        return ('TimeSignature({num}, {denom}, {metro}, {clock})'
                .format(num=self.numerator, denom=self.denominator,
                        metro=self.metronome, clock=self.clock))


class KeySignature:
    """
    Represents a MIDI key signature.

    The key attribute is the number of sharps (positive) or flats
    (negative). The minor attribute is True for minor keys.
    """

    def __init__(self, key=0, minor=False):
        if isinstance(key, (bytes, bytearray)):
            source = key
            key = int.from_bytes(source[0:1], 'big', signed=True)
            minor = bool(source[1])
        self.key = key
        self.minor = minor

    def __eq__(self, other):
        if isinstance(other, KeySignature):
            return self.key == other.key and self.minor == other.minor
        return NotImplemented

    def __str__(self):
        if self.key == 0:
            accidentals = 'no accidentals'
        else:
            accidentals = '{count} {kind}'.format(count=abs(self.key),
                    kind='sharp(s)' if self.key > 0 else 'flat(s)')
        return '{accidentals}, {scale}'.format(accidentals=accidentals,
                scale='minor' if self.minor else 'major')

    def __repr__(self):
        return 'KeySignature({key}, {minor})'.format(
                key=self.key, minor=self.minor)
