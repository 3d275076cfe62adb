"""
Choose which detected faces get classified.
"""
from __future__ import annotations
from typing import Iterable, List

from facemood.models import FaceRegion

def select_faces(regions: Iterable[FaceRegion], k: int = 2) -> List[FaceRegion]:
    """Return at most `k` regions, largest area first.

    `sorted` is stable, so equal areas keep their detection order.
    """
    if k <= 0:
        return []
    return sorted(regions, key=lambda r: r.area, reverse=True)[:k]
