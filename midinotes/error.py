#!/usr/bin/env python3


class MIDIError(Exception):
    """
    An exception raised when parsing fails or at an illegal operation.

    MIDIError is a thin wrapper for Exception. A MIDIError raised by the
    midinotes package will contain one argument: a string explaining what
    went wrong.
    """


class TruncatedStreamError(MIDIError):
    """The stream ended before a field could be read in full."""


class InvalidHeaderError(MIDIError):
    """The MThd chunk is missing, has the wrong length, or an unknown format."""


class InvalidTrackError(MIDIError):
    """The MTrk chunk is missing or contains an event that can't be decoded."""


class MalformedMetaPayload(MIDIError):
    """A meta event's declared length doesn't match its type."""
