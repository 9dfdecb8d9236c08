"""
Dictionary entry records and their compact JSON form.

Field names follow the JMdict DTD. In the JSON, common fields get
single-letter keys: across a few hundred thousand entries that is the
difference between roughly 90 MiB and 75 MiB of output.

    Entry         n (ent_seq), K (k_ele), R (r_ele), S (sense)
    KanjiElement  t (keb), i (ke_inf), p (ke_pri)
    ReadingElement t (reb), n (re_nokanji), r (re_restr), i (re_inf), p (re_pri)
    Sense         stagk, stagr, p (pos), xref, ant, f (field), m (misc),
                  i (s_inf), L (lsource), dial, G (gloss)
    LoanSource    t, l (xml:lang), type (ls_type), wasei (ls_wasei)
    Gloss         t, l (xml:lang), g_gend, g_type, pri

Empty lists, empty strings and false flags are left out. The text field `t`
is always written, even when empty.
"""

from dataclasses import dataclass, field


@dataclass
class KanjiElement:
    keb: str
    ke_inf: list[str] = field(default_factory=list)
    ke_pri: list[str] = field(default_factory=list)


@dataclass
class ReadingElement:
    reb: str
    re_nokanji: bool = False  # True iff <re_nokanji/> is present
    re_restr: list[str] = field(default_factory=list)
    re_inf: list[str] = field(default_factory=list)
    re_pri: list[str] = field(default_factory=list)


@dataclass
class LoanSource:
    text: str = ""
    lang: str = ""
    ls_type: str = ""  # "full" or "part"
    ls_wasei: str = ""  # "y" for wasei-eigo


@dataclass
class Gloss:
    text: str = ""
    lang: str = ""
    g_gend: str = ""
    g_type: str = ""  # expl, fig, lit, tm
    pri: list[str] = field(default_factory=list)


@dataclass
class Sense:
    stagk: list[str] = field(default_factory=list)
    stagr: list[str] = field(default_factory=list)
    pos: list[str] = field(default_factory=list)
    xref: list[str] = field(default_factory=list)
    ant: list[str] = field(default_factory=list)
    field_: list[str] = field(default_factory=list)  # <field>
    misc: list[str] = field(default_factory=list)
    s_inf: list[str] = field(default_factory=list)
    lsource: list[LoanSource] = field(default_factory=list)
    dial: list[str] = field(default_factory=list)
    gloss: list[Gloss] = field(default_factory=list)


@dataclass
class Entry:
    """One <entry> of the dictionary."""

    ent_seq: int
    k_ele: list[KanjiElement] = field(default_factory=list)
    r_ele: list[ReadingElement] = field(default_factory=list)
    sense: list[Sense] = field(default_factory=list)


# =============================================================================
# Entry -> dict
# =============================================================================


def _put(result: dict, key: str, value) -> None:
    """Store value under key unless it is empty."""
    if value:
        result[key] = value


def kanji_to_dict(k: KanjiElement) -> dict:
    result = {"t": k.keb}
    _put(result, "i", k.ke_inf)
    _put(result, "p", k.ke_pri)
    return result


def reading_to_dict(r: ReadingElement) -> dict:
    result = {"t": r.reb}
    if r.re_nokanji:
        result["n"] = True
    _put(result, "r", r.re_restr)
    _put(result, "i", r.re_inf)
    _put(result, "p", r.re_pri)
    return result


def lsource_to_dict(ls: LoanSource) -> dict:
    result = {"t": ls.text}
    _put(result, "l", ls.lang)
    _put(result, "type", ls.ls_type)
    _put(result, "wasei", ls.ls_wasei)
    return result


def gloss_to_dict(g: Gloss) -> dict:
    result = {"t": g.text}
    _put(result, "l", g.lang)
    _put(result, "g_gend", g.g_gend)
    _put(result, "g_type", g.g_type)
    _put(result, "pri", g.pri)
    return result


def sense_to_dict(s: Sense) -> dict:
    result: dict = {}
    _put(result, "stagk", s.stagk)
    _put(result, "stagr", s.stagr)
    _put(result, "p", s.pos)
    _put(result, "xref", s.xref)
    _put(result, "ant", s.ant)
    _put(result, "f", s.field_)
    _put(result, "m", s.misc)
    _put(result, "i", s.s_inf)
    _put(result, "L", [lsource_to_dict(ls) for ls in s.lsource])
    _put(result, "dial", s.dial)
    _put(result, "G", [gloss_to_dict(g) for g in s.gloss])
    return result


def entry_to_dict(entry: Entry) -> dict:
    """
    Convert Entry to its compact dictionary form.

    Key order matches the DTD: n, K, R, S.
    """
    result: dict = {"n": entry.ent_seq}
    _put(result, "K", [kanji_to_dict(k) for k in entry.k_ele])
    _put(result, "R", [reading_to_dict(r) for r in entry.r_ele])
    _put(result, "S", [sense_to_dict(s) for s in entry.sense])
    return result


# =============================================================================
# dict -> Entry
# =============================================================================


def entry_from_dict(obj: dict) -> Entry:
    """Inverse of entry_to_dict(); absent keys become empty values."""
    return Entry(
        ent_seq=obj["n"],
        k_ele=[
            KanjiElement(keb=k["t"], ke_inf=k.get("i", []), ke_pri=k.get("p", []))
            for k in obj.get("K", [])
        ],
        r_ele=[
            ReadingElement(
                reb=r["t"],
                re_nokanji=r.get("n", False),
                re_restr=r.get("r", []),
                re_inf=r.get("i", []),
                re_pri=r.get("p", []),
            )
            for r in obj.get("R", [])
        ],
        sense=[_sense_from_dict(s) for s in obj.get("S", [])],
    )


def _sense_from_dict(s: dict) -> Sense:
    return Sense(
        stagk=s.get("stagk", []),
        stagr=s.get("stagr", []),
        pos=s.get("p", []),
        xref=s.get("xref", []),
        ant=s.get("ant", []),
        field_=s.get("f", []),
        misc=s.get("m", []),
        s_inf=s.get("i", []),
        lsource=[
            LoanSource(
                text=ls["t"],
                lang=ls.get("l", ""),
                ls_type=ls.get("type", ""),
                ls_wasei=ls.get("wasei", ""),
            )
            for ls in s.get("L", [])
        ],
        dial=s.get("dial", []),
        gloss=[
            Gloss(
                text=g["t"],
                lang=g.get("l", ""),
                g_gend=g.get("g_gend", ""),
                g_type=g.get("g_type", ""),
                pri=g.get("pri", []),
            )
            for g in s.get("G", [])
        ],
    )
