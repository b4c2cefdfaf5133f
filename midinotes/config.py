#!/usr/bin/env python3

from dataclasses import dataclass


@dataclass
class ReaderConfig:
    default_tempo: int = 500000     # microseconds per quarter note, 120 BPM
    shortest_note: float = 0.125    # quantization grid, in quarter notes
    dot_tolerance: float = 0.1      # how close log2 must be to an integer
    max_dots: int = 16
    emit_partial_tracks: bool = True
