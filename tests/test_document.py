"""Tests for pyinifile.ini.model.IniFile."""

import tempfile
import warnings
from io import BytesIO, StringIO

import pytest

from pyinifile.ini.comparer import OrdinalComparer
from pyinifile.ini.errors import DuplicateKeyError
from pyinifile.ini.model import IniFile, IniSection
from pyinifile.ini.value import IniValue


SAMPLE = "[A]\nk=1\n\n[B]\nk2 = two \n"


# ---------------------------------------------------------------------------
# container
# ---------------------------------------------------------------------------

class TestContainer:
    def test_autovivification(self):
        doc = IniFile()
        sect = doc['New']
        assert isinstance(sect, IniSection)
        assert len(sect) == 0
        assert doc.contains_section('new')
        assert doc['NEW'] is sect

    def test_lookups_without_side_effect(self):
        doc = IniFile()
        assert doc.try_get_section('x') == (False, None)
        assert doc.get('x') is None
        assert 'x' not in doc
        assert not doc.contains_section('x')
        assert len(doc) == 0

    def test_add(self):
        doc = IniFile()
        sect = doc.add('General')
        sect['a'] = 1
        assert doc['general']['A'].to_int() == 1
        with pytest.raises(DuplicateKeyError):
            doc.add('GENERAL')

    def test_add_mapping(self):
        doc = IniFile()
        sect = doc.add('S', {'k': 'v'})
        assert isinstance(sect, IniSection)
        assert doc['s']['K'].value == 'v'

    def test_add_ordered(self):
        doc = IniFile()
        assert doc.add('S', ordered=True).ordered
        assert not doc.add('T').ordered

    def test_assignment_replaces(self):
        doc = IniFile()
        doc.add('S')['a'] = 1
        replacement = IniSection({'b': 2})
        doc['s'] = replacement
        assert doc['S'] is replacement
        assert list(doc) == ['S']

    def test_assignment_rekeys_foreign_comparer(self):
        doc = IniFile()
        foreign = IniSection({'Key': 'v'}, OrdinalComparer())
        doc['S'] = foreign
        assert doc['S'] is not foreign
        assert doc['S'].comparer is doc.comparer
        assert doc['S']['KEY'].value == 'v'

    def test_remove(self):
        doc = IniFile()
        doc.add('S')
        assert doc.remove('s')
        assert not doc.remove('s')
        with pytest.raises(KeyError):
            del doc['s']

    def test_ordinal_document(self):
        doc = IniFile(OrdinalComparer())
        doc['a']['k'] = 1
        doc['A']['K'] = 2
        assert list(doc) == ['a', 'A']
        assert len(doc['a']) == 1

    def test_ordered_sections_option(self):
        doc = IniFile(ordered_sections=True)
        assert doc['x'].ordered
        assert doc.add('y').ordered
        assert not doc.add('z', ordered=False).ordered


# ---------------------------------------------------------------------------
# load
# ---------------------------------------------------------------------------

class TestLoad:
    def test_sample(self):
        doc = IniFile.loads(SAMPLE)
        assert list(doc) == ['A', 'B']
        assert doc['A']['k'].value == '1'
        assert doc['B']['k2'].value == ' two '
        assert doc['B']['k2'].get_string() == 'two'

    def test_comments(self):
        doc = IniFile.loads("; comment\n[C]\n;skip\nfoo=bar")
        assert list(doc) == ['C']
        assert dict(doc['C']) == {'foo': IniValue('bar')}

    def test_crlf(self):
        doc = IniFile.loads("[A]\r\nk=v\r\nj= w \r\n")
        assert doc['A']['k'].value == 'v'
        assert doc['A']['j'].value == ' w '

    def test_malformed_lines_skipped(self):
        doc = IniFile.loads(
            "orphan=1\n[Broken\n[S]\nno assignment\n=novalue\n"
            "  indented = yes\n[Other\nk=v\n")
        assert list(doc) == ['S']
        assert dict(doc['S']) == {
            'indented': IniValue(' yes'), 'k': IniValue('v')}

    def test_header_name_trimmed(self):
        doc = IniFile.loads("  [  Spaced Name ] trailing\nk=v\n")
        assert list(doc) == ['Spaced Name']

    def test_split_on_first_equals(self):
        doc = IniFile.loads("[S]\nurl = a=b;c\n")
        assert doc['S']['url'].value == ' a=b;c'

    def test_repeated_section_starts_over(self):
        doc = IniFile.loads("[S]\na=1\n[T]\n[s]\nb=2\n")
        assert list(doc) == ['S', 'T']
        assert list(doc['S']) == ['b']

    def test_binary_stream(self):
        doc = IniFile()
        doc.load(BytesIO('\ufeff[Ü]\nschlüssel=wert\n'.encode('utf-8')))
        assert doc['ü']['SCHLÜSSEL'].value == 'wert'

    def test_load_into_existing(self):
        doc = IniFile()
        doc['Keep']['a'] = 1
        doc.load(StringIO("[New]\nb=2\n"))
        assert list(doc) == ['Keep', 'New']

    def test_ordered_sections_keep_file_order(self):
        doc = IniFile.loads("[S]\nz=1\na=2\nm=3\n", ordered_sections=True)
        assert doc['S'].ordered
        assert list(doc['S']) == ['z', 'a', 'm']


# ---------------------------------------------------------------------------
# save
# ---------------------------------------------------------------------------

class TestSave:
    def test_format(self):
        doc = IniFile()
        doc['A']['k'] = 1
        doc['B']['x'] = 'y'
        doc['B']['flag'] = True
        assert doc.get_contents() == "[A]\nk=1\n\n[B]\nx=y\nflag=True\n\n"

    def test_empty_sections(self):
        doc = IniFile()
        doc['Empty']
        doc['Full']['k'] = 'v'
        assert doc.get_contents() == "[Full]\nk=v\n\n"
        doc.keep_empty_sections = True
        assert doc.get_contents() == "[Empty]\n\n[Full]\nk=v\n\n"

    def test_default_value_written_blank(self):
        doc = IniFile()
        doc['S']['k'] = None
        assert doc.get_contents() == "[S]\nk=\n\n"

    def test_text_and_binary_streams(self):
        doc = IniFile.loads(SAMPLE)
        text, raw = StringIO(), BytesIO()
        doc.save(text)
        doc.save(raw)
        assert raw.getvalue().decode('utf-8') == text.getvalue()
        assert not raw.getvalue().startswith(b'\xef\xbb\xbf')

    def test_roundtrip_idempotent(self):
        source = ("; header\n[A]\nk=1\n j = spaced  \n\n[b]\n;c\n"
                  "x=\"q\"\n[Empty]\n")
        first = IniFile.loads(source).get_contents()
        second = IniFile.loads(first).get_contents()
        assert first == second
        assert IniFile.loads(second).get_contents() == second

    def test_unreadable_key_warns(self):
        doc = IniFile()
        doc['S']['a=b'] = 1
        with pytest.warns(UserWarning):
            doc.get_contents()


# ---------------------------------------------------------------------------
# stream kinds
# ---------------------------------------------------------------------------

LONE_CR = "[A]\nk=a\rb\nj=c\r\n"


@pytest.mark.parametrize('stream', [
    lambda: StringIO(LONE_CR),
    lambda: BytesIO(LONE_CR.encode('utf-8')),
])
def test_lone_carriage_return_stays_in_value(stream):
    doc = IniFile()
    doc.load(stream())
    assert doc['A']['k'].value == 'a\rb'
    assert doc['A']['j'].value == 'c'
    assert list(doc['A']) == ['k', 'j']


def test_text_temporary_file():
    with tempfile.NamedTemporaryFile('w+', encoding='utf-8') as fp:
        doc = IniFile.loads(SAMPLE)
        doc.save(fp)
        fp.seek(0)
        back = IniFile()
        back.load(fp)
    assert back.get_contents() == doc.get_contents()
    assert back['B']['k2'].value == ' two '


def test_binary_temporary_file():
    with tempfile.NamedTemporaryFile('w+b') as fp:
        IniFile.loads(SAMPLE).save(fp)
        fp.seek(0)
        assert fp.read() == b"[A]\nk=1\n\n[B]\nk2= two \n\n"
        fp.seek(0)
        back = IniFile()
        back.load(fp)
    assert list(back) == ['A', 'B']


@pytest.mark.parametrize('key, value', [
    ('', 'v'), (' padded', 'v'), ('padded ', 'v'), (';comment', 'v'),
    ('[head', 'v'), ('a=b', 'v'), ('multi\nline', 'v'),
    ('k', 'two\nlines'), ('k', 'ends\r'),
])
def test_save_warns_on_pairs_that_change(key, value):
    doc = IniFile()
    doc['S'][key] = value
    with pytest.warns(UserWarning):
        doc.get_contents()


def test_save_quiet_on_plain_pairs():
    doc = IniFile()
    doc['S']['k'] = ' spaced value; with = signs\r inside'
    with warnings.catch_warnings():
        warnings.simplefilter('error')
        doc.get_contents()
