from __future__ import annotations

import re

from .models import Member

# Surname particles kept lowercase when the name has more than one token.
_NAME_LOWER_PARTICLES = {
    "van", "der", "den", "de", "ten", "ter", "te",
    "von", "zu", "da", "di", "du", "des", "del", "della", "la", "le", "les",
}

_ROMAN_NUMERALS = {"i", "ii", "iii", "iv", "v", "vi", "vii", "viii", "ix", "x"}


def _cap_word(word: str) -> str:
    if not word:
        return word

    if "-" in word:
        return "-".join(_cap_word(p) for p in word.split("-"))

    wl = word.lower()
    if wl in _ROMAN_NUMERALS:
        return wl.upper()
    if wl.startswith("o'") and len(word) > 2:
        return "O'" + _cap_word(word[2:])
    if wl.startswith("d'") and len(word) > 2:
        return "d'" + _cap_word(word[2:])
    if wl.startswith("mc") and len(word) > 2 and word[2].isalpha():
        return "Mc" + word[2].upper() + word[3:].lower()

    return word[:1].upper() + word[1:].lower()


def _smart_title_case_name(raw: str | None) -> str | None:
    """Best-effort title casing of a personal name for display.

    Member records keep whatever casing they were created with; this only
    normalizes what the API shows and what relation descriptions say.
    """

    if raw is None:
        return None

    tokens = [t for t in re.split(r"\s+", str(raw).strip()) if t]
    if not tokens:
        return None

    multi = len(tokens) > 1
    out: list[str] = []
    for tok in tokens:
        if multi and tok.lower() in _NAME_LOWER_PARTICLES:
            out.append(tok.lower())
        else:
            out.append(_cap_word(tok))
    return " ".join(out)


def _display_first_name(member: Member) -> str:
    return _smart_title_case_name(member.first_name) or member.id


def _display_name(member: Member) -> str:
    full = f"{member.first_name} {member.last_name}"
    return _smart_title_case_name(full) or member.id
