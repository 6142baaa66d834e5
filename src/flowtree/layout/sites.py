"""Connection site selection.

Shape primitives expose their attachment points in different orders; this
table maps a logical side to the concrete index for each site count.
"""

from __future__ import annotations

from flowtree.types import Side

_SITES_8: dict[Side, int] = {Side.LEFT: 3, Side.RIGHT: 7, Side.TOP: 1, Side.BOTTOM: 5}
_SITES_4: dict[Side, int] = {Side.LEFT: 1, Side.RIGHT: 3, Side.TOP: 0, Side.BOTTOM: 2}
_SITES_2: dict[Side, int] = {Side.LEFT: 1, Side.RIGHT: 0, Side.TOP: 0, Side.BOTTOM: 1}


def select_site(site_count: int, side: Side) -> int:
    """Pick the site index for ``side`` on a shape exposing ``site_count`` sites.

    Never fails: counts without a table entry, and indices that would fall
    outside the shape's site list, resolve to 0.
    """
    if site_count >= 8:
        index = _SITES_8[side]
    elif site_count == 4:
        index = _SITES_4[side]
    elif site_count == 2:
        index = _SITES_2[side]
    else:
        index = 0
    if index >= site_count:
        return 0
    return index
