"""An integer-keyed map backed by a contiguous, double-ended window of slots.

See README.md for complete documentation and usage examples.
"""

import logging

from consecvecmap.consecvecmap import ConsecVecMap, Iter, IterMut
from consecvecmap.entry import EMPTY, Empty, Entry, Full

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = ["EMPTY", "ConsecVecMap", "Empty", "Entry", "Full", "Iter", "IterMut"]
