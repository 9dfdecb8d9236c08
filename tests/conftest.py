"""Pytest configuration and shared fixtures."""
import pytest
import tempfile
from pathlib import Path


SAMPLE_PREAMBLE = """\
<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE JMdict [
<!ELEMENT JMdict (entry*)>
<!--                                                                   -->
<!ELEMENT entry (ent_seq, k_ele*, r_ele+, sense+)>
<!ATTLIST gloss xml:lang CDATA "eng">
<!-- <dial> (dialect) entities -->
<!ENTITY ksb "Kansai-ben">
<!ENTITY ktb "Kantou-ben">
<!-- <ke_inf> (kanji info) entities -->
<!ENTITY ateji "ateji (phonetic) reading">
<!-- <misc> (miscellaneous) entities -->
<!ENTITY arch "archaism">
<!ENTITY uk "word usually written using kana alone">
<!-- <pos> (part-of-speech) entities -->
<!ENTITY n "noun (common) (futsuumeishi)">
<!ENTITY adj-na "adjectival nouns or quasi-adjectives (keiyodoshi)">
<!ENTITY exp "expressions (phrases, clauses, etc.)">
<!-- <re_inf> (reading info) entities -->
<!ENTITY ok "out-dated or obsolete kana usage">
]>
<JMdict>
<!-- JMdict created: 2021-07-19 -->
"""

SAMPLE_ENTRIES = [
    """\
<entry>
<ent_seq>1000150</ent_seq>
<r_ele>
<reb>アールエスにさんにケーブル</reb>
</r_ele>
<sense>
<pos>&n;</pos>
<gloss>rs232 cable</gloss>
</sense>
</entry>
""",
    """\
<entry>
<ent_seq>1000220</ent_seq>
<k_ele>
<keb>明白</keb>
<ke_inf>&ateji;</ke_inf>
<ke_pri>ichi1</ke_pri>
<ke_pri>news1</ke_pri>
</k_ele>
<r_ele>
<reb>めいはく</reb>
<re_pri>ichi1</re_pri>
</r_ele>
<r_ele>
<reb>メイハク</reb>
<re_nokanji/>
<re_inf>&ok;</re_inf>
</r_ele>
<sense>
<pos>&adj-na;</pos>
<misc>&uk;</misc>
<dial>&ksb;</dial>
<lsource xml:lang="ger" ls_type="part" ls_wasei="y">Arbeit</lsource>
<gloss>obvious</gloss>
<gloss>clear</gloss>
<gloss xml:lang="dut">duidelijk</gloss>
</sense>
<sense>
<stagr>めいはく</stagr>
<pos>&exp;</pos>
<gloss g_type="expl">plain &amp; simple</gloss>
</sense>
</entry>
""",
    """\
<entry>
<ent_seq>1000225</ent_seq>
<r_ele>
<reb>あからさま</reb>
</r_ele>
<sense>
<pos>&adj-na;</pos>
<misc>&arch;</misc>
<gloss>plain</gloss>
</sense>
</entry>
""",
]

SAMPLE_DOCUMENT = SAMPLE_PREAMBLE + "".join(SAMPLE_ENTRIES) + "</JMdict>\n"


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_document():
    """A small JMdict-shaped document (3 entries, 5 entity sets)."""
    return SAMPLE_DOCUMENT


@pytest.fixture
def write_dump(temp_dir):
    """Write text to a dump file in temp_dir and return its path."""
    def _write(text: str, name: str = "JMdict") -> Path:
        path = temp_dir / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def sample_dump(write_dump, sample_document):
    """Path to the sample document on disk."""
    return write_dump(sample_document)
