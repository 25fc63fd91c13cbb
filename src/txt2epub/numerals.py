from __future__ import annotations

import re

__all__ = ["CHINESE_DIGITS", "CHINESE_UNITS", "chinese_numeral_to_int"]

CHINESE_DIGITS = {
    "零": 0,
    "一": 1,
    "二": 2,
    "三": 3,
    "四": 4,
    "五": 5,
    "六": 6,
    "七": 7,
    "八": 8,
    "九": 9,
    "两": 2,
}
CHINESE_UNITS = {
    "十": 10,
    "百": 100,
    "千": 1000,
    "万": 10000,
    "亿": 100000000,
}
_MYRIAD = 10000
_ARABIC_RE = re.compile(r"^[0-9]+$")


def chinese_numeral_to_int(token: object) -> int | None:
    """
    Read a chapter numeral such as ``十二``, ``一百零五`` or ``12`` as an int.

    Plain ASCII digit strings are parsed directly. Anything else is read left
    to right as a positional Chinese numeral: ``section`` accumulates the
    current group below 万, and 万/亿 close the group into ``result``.
    Characters outside both tables only reset the pending digit. Returns
    ``None`` for empty or non-string input; never raises.
    """
    if not token or not isinstance(token, str):
        return None
    if _ARABIC_RE.match(token):
        return int(token)

    result = 0
    section = 0
    pending = 0
    for ch in token:
        if ch in CHINESE_DIGITS:
            pending = CHINESE_DIGITS[ch]
            continue
        unit = CHINESE_UNITS.get(ch)
        if unit is None:
            pending = 0
            continue
        if unit >= _MYRIAD:
            result += (section + pending) * unit
            section = 0
        else:
            section += (pending or 1) * unit
        pending = 0
    return result + section + pending
