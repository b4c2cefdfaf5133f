import pytest

from midinotes.note import Note


class TestNote:
    def test_accessors(self):
        note = Note(60, -2, 1, 0.5)
        assert note.pitch == 60
        assert note.duration == -2
        assert note.dots == 1
        assert note.start == 0.5
        assert note.name == 'C4'
        assert note.length == pytest.approx(0.375)
        assert note

    def test_invalid(self):
        note = Note.invalid()
        assert note.pitch == 255
        assert note.dots == -1
        assert not note
        assert note.name is None
        assert str(note) == 'invalid note'

    def test_validity_rules(self):
        assert Note(127, 0, 0)
        assert not Note(128, 0, 0)
        assert not Note(60, 0, -1)

    def test_immutable(self):
        note = Note(60, -2)
        with pytest.raises(AttributeError):
            note.pitch = 61

    def test_equality_and_hash(self):
        assert Note(60, -2, 0, 1.0) == Note(60, -2, 0, 1.0)
        assert Note(60, -2, 0, 1.0) != Note(60, -3, 0, 1.0)
        assert len({Note(60, -2), Note(60, -2)}) == 1

    @pytest.mark.parametrize('pitch, name', [
        (0, 'C-1'), (21, 'A0'), (61, 'C#4'), (69, 'A4'), (127, 'G9')])
    def test_names(self, pitch, name):
        assert Note(pitch, -2).name == name

    def test_str(self):
        assert str(Note(60, -2, 0, 0.0)) == 'C4 quarter at 0.000 s'
        assert str(Note(62, -3, 1, 1.25)) == 'D4 dotted eighth at 1.250 s'
        assert str(Note(64, 0, 2, 2.0)) == 'E4 double-dotted whole at 2.000 s'
        assert str(Note(65, -8, 3, 0.0)) == 'F4 3-dotted 2^-8 at 0.000 s'
