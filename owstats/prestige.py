# owstats/prestige.py
"""
Level border reference data.

The career page shows only the level within the current prestige (1-100);
the prestige itself is encoded in the border image, whose file name is a
resource id such as ``0x0250000000000918``. Borders come in runs of ten
per prestige, bronze through gold, so the true level is the displayed one
plus the offset looked up here.
"""

import re
from types import MappingProxyType
from typing import Mapping, Optional

from owstats.errors import UnknownPrestigeTier

TOKEN_PATTERN = re.compile(r"0x025[0-9A-Fa-f]{13}(?![0-9A-Fa-f])")

FIRST_BORDER_ID = 0x0250000000000918
BORDERS_PER_PRESTIGE = 10
PRESTIGE_COUNT = 18  # 6 bronze, 6 silver, 6 gold

PRESTIGE_OFFSETS: Mapping[str, int] = MappingProxyType({
    f"0x{FIRST_BORDER_ID + i:016X}": (i // BORDERS_PER_PRESTIGE) * 100
    for i in range(BORDERS_PER_PRESTIGE * PRESTIGE_COUNT)
})


def find_token(style: Optional[str]) -> Optional[str]:
    """Pull the border resource id out of an inline style, if there is one."""
    if not style:
        return None
    match = TOKEN_PATTERN.search(style)
    if not match:
        return None
    return "0x" + match.group(0)[2:].upper()


def level_offset(token: str) -> int:
    try:
        return PRESTIGE_OFFSETS[token]
    except KeyError:
        raise UnknownPrestigeTier(token) from None
