from midinotes.time import Tempo, TimeDivision, TimeSignature, KeySignature


class TestTimeDivision:
    def test_ppqn(self):
        division = TimeDivision(480)
        assert division.mode == 'ppqn'
        assert division.ppqn == 480
        assert division.frames is None
        assert division.ticks_per_quarter_note(500000) == 480
        assert division.ticks_per_quarter_note(1000000) == 480
        assert str(division) == '480 PPQN'

    def test_ppqn_from_bytes(self):
        assert TimeDivision(b'\x00\x60').ppqn == 96

    def test_smpte(self):
        # -25 frames per second, 40 ticks per frame
        division = TimeDivision(b'\xe7\x28')
        assert division.mode == 'smpte'
        assert division.value < 0
        assert division.ppqn is None
        assert division.frames == 25
        assert division.subframes == 40
        assert division.ticks_per_quarter_note(500000) == 500
        assert division.ticks_per_quarter_note(1000000) == 1000

    def test_smpte_truncates(self):
        # 29 frames per second (drop frame), 4 ticks per frame
        division = TimeDivision(b'\xe3\x04')
        assert division.frames == 29
        assert division.subframes == 4
        # 4 * 29 * 500000 / 1000000 = 58, 4 * 29 * 123456 / 1000000 = 14.3
        assert division.ticks_per_quarter_note(500000) == 58
        assert division.ticks_per_quarter_note(123456) == 14

    def test_equality(self):
        assert TimeDivision(480) == TimeDivision(b'\x01\xe0')
        assert TimeDivision(480) != TimeDivision(96)


class TestTempo:
    def test_default(self):
        tempo = Tempo()
        assert tempo.mpqn == 500000
        assert tempo.bpm == 120

    def test_from_bytes(self):
        tempo = Tempo(b'\x0f\x42\x40')
        assert tempo.mpqn == 1000000
        assert tempo.bpm == 60
        assert str(tempo) == '60 BPM'

    def test_mpqn_keyword(self):
        assert Tempo(mpqn=250000) == Tempo(240)


class TestSignatures:
    def test_time_signature_from_bytes(self):
        signature = TimeSignature(bytes((6, 3, 24, 8)))
        assert signature == TimeSignature(6, 8, 24, 8)
        assert str(signature) == '6/8'

    def test_key_signature_from_bytes(self):
        key = KeySignature(bytes((0xfd, 1)))
        assert key.key == -3
        assert key.minor
        assert key == KeySignature(-3, True)
        assert str(key) == '3 flat(s), minor'

    def test_key_signature_sharps(self):
        key = KeySignature(bytes((2, 0)))
        assert key.key == 2
        assert not key.minor
        assert str(key) == '2 sharp(s), major'
