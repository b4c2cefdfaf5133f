#!/usr/bin/env python3

"""
Track events.

Every call to Event.parse consumes exactly one event from a track and
returns an object of one of the classes below. The classes form a closed set:
channel events (NoteOff, NoteOn, ControlChange, ProgramChange), meta events
(SequenceNumber, Name, EndTrack, SetTempo, SetTimeSignature, SetKeySignature
and the generic MetaEvent for everything else), SysExEvent, and
UnknownEvent for status bytes that can't be decoded. Events don't change any
state themselves; the track applies them.
"""

import logging
from .error import MalformedMetaPayload
from .time import Tempo, TimeSignature, KeySignature

log = logging.getLogger(__name__)


class Event:
    """Base class for track events."""

    def __init__(self, *, time=None):
        """
        Create a new Event object.

        The time keyword is the absolute time of the event in ticks from the
        start of its track.
        """
        self.time = time

    @staticmethod
    def parse(source, status):
        """
        Create a new Event object of the appropriate type from a Reader.

        The status byte has already been consumed, or comes from running
        status. Raises TruncatedStreamError if the stream ends in the middle
        of the event. Unknown status bytes produce an UnknownEvent; nothing
        past the status byte is consumed for them.
        """
        if status == MetaEvent.status:
            return MetaEvent._parse(source)
        elif status == 0xf0 or status == 0xf7:
            return SysExEvent._parse(source, status)
        else:
            return ChannelEvent._parse(source, status)


class ChannelEvent(Event):
    """
    Base class for channel events.

    Channel events contain a channel nibble in their status byte that
    dictates what channel the event acts on.
    """

    def __init__(self, *, channel=None, **keywords):
        super().__init__(**keywords)
        self.channel = channel

    @classmethod
    def _parse(cls, source=None, status=None):
        """Delegate parser method. Called by Event.parse."""
        if cls == ChannelEvent:
            type = status & 0xf0
            if type not in ChannelEvent._events:
                return UnknownEvent(status)
            event = ChannelEvent._events[type]._parse(source)
            event.channel = status & 0x0f
            return event
        else:
            return cls(source.read_byte(), source.read_byte())


class NoteOff(ChannelEvent):
    """
    Indicates a key release.

    Available attributes are note and velocity.
    """

    def __init__(self, note=None, velocity=None, **keywords):
        super().__init__(**keywords)
        self.note = note
        self.velocity = velocity


class NoteOn(ChannelEvent):
    """
    Indicates a key press.

    A NoteOn with a velocity of 0 is a key release, as the MIDI
    specification allows. The released attribute tells them apart.
    """

    def __init__(self, note=None, velocity=None, **keywords):
        super().__init__(**keywords)
        self.note = note
        self.velocity = velocity

    @property
    def released(self):
        return self.velocity == 0


class ControlChange(ChannelEvent):
    """Indicates a change in a controller on a channel. Not interpreted."""

    def __init__(self, controller=None, value=None, **keywords):
        super().__init__(**keywords)
        self.controller = controller
        self.value = value


class ProgramChange(ChannelEvent):
    """Indicates a change of instrument on a channel. Not interpreted."""

    def __init__(self, program=None, **keywords):
        super().__init__(**keywords)
        self.program = program

    @classmethod
    def _parse(cls, source):
        """Delegate parser method. Called by ChannelEvent._parse."""
        return cls(source.read_byte())


class MetaEvent(Event):
    """
    Base class for meta events.

    Meta events contain data not sent to a synthesizer, such as the track
    name or timing information. Meta events of a type that isn't handled
    are returned as plain MetaEvent objects with their payload skipped.
    """

    status = 0xff
    length = None

    def __init__(self, *, meta_type=None, **keywords):
        super().__init__(**keywords)
        self._meta_type = meta_type

    @classmethod
    def _parse(cls, source):
        """Delegate parser method. Called by Event.parse."""
        meta_type = source.read_byte()
        length = source.read_var_int()
        event_class = MetaEvent._events.get(meta_type, None)
        if event_class is None:
            source.skip(length)
            return MetaEvent(meta_type=meta_type)
        try:
            return event_class._parse_payload(source, length)
        except MalformedMetaPayload as error:
            log.debug('Skipping meta event: %s', error)
            source.skip(length)
            return MetaEvent(meta_type=meta_type)

    @classmethod
    def _parse_payload(cls, source, length):
        """
        Read the payload of a known meta event type.

        Raises MalformedMetaPayload, before reading anything, if the type
        has a fixed length and the declared length doesn't match it.
        """
        if cls.length is not None and length != cls.length:
            raise MalformedMetaPayload(
                    '{name} event with {length} byte payload, expected '
                    '{expected}.'.format(name=cls.__name__, length=length,
                    expected=cls.length))
        return cls(source.read(length))

    @property
    def type(self):
        """Get the meta event's type byte."""
        return MetaEvent._types.get(type(self), self._meta_type)

    def __repr__(self):
        return '{name}(meta_type=0x{type:02X})'.format(
                name=type(self).__name__, type=self.type)


class SequenceNumber(MetaEvent):
    """The pattern number of a format 2 track or a format 0 or 1 sequence."""

    length = 2

    def __init__(self, number=None, **keywords):
        super().__init__(**keywords)
        try:
            self.number = int.from_bytes(number, 'big')
        except TypeError:
            self.number = number

    def __repr__(self):
        return '{name}({number})'.format(
                name=type(self).__name__, number=self.number)


class Name(MetaEvent):
    """Defines a sequence name or a track name."""

    def __init__(self, text=None, **keywords):
        super().__init__(**keywords)
        try:
            self.text = str(text, 'iso8859-1')
        except TypeError:
            self.text = text

    def __repr__(self):
        return '{name}({text!r})'.format(
                name=type(self).__name__, text=self.text)


class EndTrack(MetaEvent):
    """Indicates the end of a track. Any payload is ignored."""

    @classmethod
    def _parse_payload(cls, source, length):
        source.skip(length)
        return cls()

    def __repr__(self):
        return '{name}()'.format(name=type(self).__name__)


class SetTempo(MetaEvent):
    """
    Sets the tempo until the next SetTempo event.

    The associated Tempo object is accessible from the tempo attribute.
    """

    length = 3

    def __init__(self, tempo=None, **keywords):
        super().__init__(**keywords)
        if isinstance(tempo, (bytes, bytearray)):
            tempo = Tempo(tempo)
        elif isinstance(tempo, int):
            tempo = Tempo(mpqn=tempo)
        self.tempo = tempo

    def __repr__(self):
        return '{name}({tempo!r})'.format(
                name=type(self).__name__, tempo=self.tempo)


class SetTimeSignature(MetaEvent):
    """
    Sets the time signature until the next SetTimeSignature event.

    The associated TimeSignature object is accessible from the signature
    attribute.
    """

    length = 4

    def __init__(self, signature=None, **keywords):
        super().__init__(**keywords)
        if isinstance(signature, (bytes, bytearray)):
            signature = TimeSignature(signature)
        self.signature = signature

    def __repr__(self):
        return '{name}({signature!r})'.format(
                name=type(self).__name__, signature=self.signature)


class SetKeySignature(MetaEvent):
    """
    Sets the key signature until the next SetKeySignature event.

    The associated KeySignature object is accessible from the key attribute.
    """

    length = 2

    def __init__(self, key=None, **keywords):
        super().__init__(**keywords)
        if isinstance(key, (bytes, bytearray)):
            key = KeySignature(key)
        self.key = key

    def __repr__(self):
        return '{name}({key!r})'.format(
                name=type(self).__name__, key=self.key)


class SysExEvent(Event):
    """
    A system exclusive event is a manufacturer-specific event.

    The payload isn't interpreted. Bytes are discarded up to and including
    the next End of Exclusive byte (0xf7). The number of bytes discarded is
    available through the length attribute.
    """

    def __init__(self, status=None, length=0, **keywords):
        super().__init__(**keywords)
        self.status = status
        self.length = length

    @classmethod
    def _parse(cls, source, status):
        """Delegate parser method. Called by Event.parse."""
        length = 1
        while source.read_byte() != 0xf7:
            length += 1
        return cls(status, length)

    def __repr__(self):
        return '{name}(0x{status:02X}, {length})'.format(
                name=type(self).__name__, status=self.status,
                length=self.length)


class UnknownEvent(Event):
    """A status byte that can't be decoded. Ends the track."""

    def __init__(self, status=None, **keywords):
        super().__init__(**keywords)
        self.status = status

    def __repr__(self):
        return '{name}(0x{status:02X})'.format(
                name=type(self).__name__, status=self.status)


ChannelEvent._events = {
        0x80: NoteOff,
        0x90: NoteOn,
        0xb0: ControlChange,
        0xc0: ProgramChange}

MetaEvent._events = {
        0x00: SequenceNumber,
        0x03: Name,
        0x2f: EndTrack,
        0x51: SetTempo,
        0x58: SetTimeSignature,
        0x59: SetKeySignature}
MetaEvent._types = {value: key for key, value in MetaEvent._events.items()}
