from midinotes.io import Reader
from midinotes.sequence import Format, Header
from midinotes.time import TimeDivision

from smf import chunk, header


class TestHeader:
    def test_valid(self):
        parsed = Header.parse(Reader(header(1, 3, 96)))
        assert parsed
        assert parsed.valid
        assert parsed.format == Format.MULTI_TRACK
        assert parsed.tracks == 3
        assert parsed.division == TimeDivision(96)
        assert parsed.ticks_per_quarter_note(500000) == 96

    def test_summary(self):
        parsed = Header.parse(Reader(header(0, 1, 480)))
        assert str(parsed) == (
                'format 0 (single-track), 1 track(s), division 480 PPQN')

    def test_smpte_division(self):
        parsed = Header.parse(Reader(header(2, 1, -6360)))
        assert parsed.format == Format.MULTI_SONG
        assert parsed.division.frames == 25
        assert parsed.division.subframes == 40

    def test_bad_magic(self):
        parsed = Header.parse(Reader(b'RIFF' + header()[4:]))
        assert not parsed
        assert parsed.format is None
        assert str(parsed) == 'invalid MIDI header'

    def test_wrong_length(self):
        data = chunk('MThd', b'\x00\x00\x00\x01\x01\xe0\x00')
        parsed = Header.parse(Reader(data))
        assert not parsed
        assert parsed.format is None

    def test_unknown_format(self):
        parsed = Header.parse(Reader(header(3, 1, 480)))
        assert not parsed
        assert parsed.tracks is None

    def test_truncated(self):
        parsed = Header.parse(Reader(header()[:11]))
        assert not parsed

    def test_empty(self):
        assert not Header.parse(Reader(b''))

    def test_stops_after_header(self):
        reader = Reader(header() + b'MTrk')
        Header.parse(reader)
        assert reader.tell() == 14
        assert reader.read_id() == 'MTrk'
