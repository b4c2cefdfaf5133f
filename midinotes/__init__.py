#!/usr/bin/env python3

"""
Read the notes of a Standard MIDI File.

Standard MIDI files store music as one or more tracks of events separated by
relative times. The midinotes package hides the events behind a single call:
NoteReader.next_note returns the notes of the file one at a time, each with
a pitch, a duration quantized to a dotted power-of-two note value, and a
start time in seconds. Notes within a track come out in the order they
started. Tracks are read one after another.

    with midinotes.open('song.mid') as reader:
        if reader:
            for note in reader:
                print(note)

Malformed input never raises: a bad header makes the reader false, and a
bad track ends that track's notes early.
"""

from .config import ReaderConfig
from .error import (MIDIError, TruncatedStreamError, InvalidHeaderError,
        InvalidTrackError, MalformedMetaPayload)
from .note import Note
from .reader import NoteReader, open, read_notes
from .sequence import Format, Header, Track, NoteSequence, quantize
from .time import Tempo, TimeDivision, TimeSignature, KeySignature
