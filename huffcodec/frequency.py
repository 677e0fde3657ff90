from collections import Counter
from typing import Hashable, Iterable, List, Tuple

from .tree import Node


def frequency_table(symbols: Iterable[Hashable]) -> List[Tuple[int, Hashable]]:
    # Counter keeps first-seen order and sorted() is stable, so equal counts
    # stay in discovery order
    counts = Counter(symbols)
    return sorted(((count, sym) for sym, count in counts.items()), key=lambda pair: pair[0])


def leaves_from_table(table: List[Tuple[int, Hashable]]) -> List[Node]:
    return [Node(count, sym) for count, sym in table]
