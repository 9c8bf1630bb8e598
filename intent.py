# intent.py
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

COMPARE_SPEED = "compare_speed"
WEAKNESSES = "weaknesses"
EVOLUTION = "evolution"
STATS = "stats"
TYPES = "types"
MOVE = "move"
DEX = "dex"


@dataclass(frozen=True)
class Intent:
    kind: str
    name: Optional[str] = None   # creature; the first one for compare_speed
    other: Optional[str] = None  # second creature for compare_speed
    move: Optional[str] = None


_NAME = r"([a-z0-9\-\s\.]+)"

# first match wins, so the specific phrasings go before the looser ones
_MATCHERS: List[Tuple[re.Pattern, Callable[[re.Match], Intent]]] = [
    (re.compile(r"(who( is|'s)? faster|compare speed)\s+([a-z0-9\-\.]+)\s+(?:vs|or|versus)\s+([a-z0-9\-\.]+)"),
     lambda m: Intent(COMPARE_SPEED, name=m.group(3), other=m.group(4))),
    (re.compile(r"weak(ness|nesses)? of " + _NAME),
     lambda m: Intent(WEAKNESSES, name=m.group(2).strip())),
    (re.compile(r"(evolutions? of|evolutions?|evo(?: line)?) " + _NAME),
     lambda m: Intent(EVOLUTION, name=m.group(2).strip())),
    (re.compile(r"(base )?stats? of " + _NAME),
     lambda m: Intent(STATS, name=m.group(2).strip())),
    (re.compile(r"(what (is|are) )?(the )?types? of " + _NAME),
     lambda m: Intent(TYPES, name=m.group(4).strip())),
    (re.compile(r"(what does|info on|details for) move " + _NAME),
     lambda m: Intent(MOVE, move=m.group(2).strip())),
]


def classify(text: Optional[str]) -> Intent:
    """Map a free-text question to an Intent. Never fails: unmatched text becomes a dex lookup."""
    q = (text or "").lower().strip()
    for pattern, build in _MATCHERS:
        m = pattern.search(q)
        if m:
            return build(m)
    tokens = q.split()
    return Intent(DEX, name=tokens[-1] if tokens else "")
