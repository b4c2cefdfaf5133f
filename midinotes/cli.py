#!/usr/bin/env python3
"""
Print the notes of MIDI files.

For every file, prints a summary of the header, one numbered line per note,
and the number of half steps between each note and the next. If a file has
N notes, N-1 numbers are printed.

Usage:
  midinotes song.mid [other.mid ...]
  python -m midinotes song.mid

The exit status is the number of files that couldn't be read.
"""
import argparse
import logging
import sys

from .reader import open as open_midi


def report(reader, out):
    out.write('MIDI: {summary}\n'.format(summary=reader))
    intervals = list()
    last_pitch = None
    for count, note in enumerate(reader, 1):
        out.write('{count:4}. {note}\n'.format(count=count, note=note))
        if last_pitch is not None:
            intervals.append(note.pitch - last_pitch)
        last_pitch = note.pitch
    out.write('Sequence of half steps:')
    for interval in intervals:
        out.write(' {interval}'.format(interval=interval))
    out.write('\n')


def main(argv=None, out=None):
    if out is None:
        out = sys.stdout
    parser = argparse.ArgumentParser(prog='midinotes',
            description='Print the notes of MIDI files and the half steps '
                        'between them.')
    parser.add_argument('paths', nargs='+', metavar='FILE',
            help='path to a MIDI file')
    parser.add_argument('-v', '--verbose', action='store_true',
            help='log skipped chunks, events and notes')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
            format='%(levelname)s: %(message)s')

    failures = 0
    for index, path in enumerate(args.paths):
        if len(args.paths) > 1:
            if index > 0:
                out.write('\n')
            out.write('File: {path}\n'.format(path=path))
        try:
            reader = open_midi(path)
        except OSError as error:
            print('This file could not be opened: {error}'.format(
                    error=error.strerror or error), file=sys.stderr)
            failures += 1
            continue
        with reader:
            if not reader:
                print('This is not a supported MIDI file.', file=sys.stderr)
                failures += 1
                continue
            report(reader, out)
    return failures


if __name__ == '__main__':
    sys.exit(main())
