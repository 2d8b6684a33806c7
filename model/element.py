import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional


# ---------------------------------------------------------------------------
# Element Status Enum: one bar colour each
# ---------------------------------------------------------------------------
class ElementStatus(Enum):
    DEFAULT        = "default"          # blue
    COMPARING      = "comparing"        # red: being looked at right now
    SWAP           = "swap"             # amber: moving / current minimum
    POTENTIAL_SWAP = "potential-swap"   # light green: left side of a pair
    SORTED         = "sorted"           # dark green: final position


@dataclass(frozen=True)
class ArrayElement:
    value:  int
    status: ElementStatus = ElementStatus.DEFAULT

    def with_status(self, status: ElementStatus, value: Optional[int] = None) -> "ArrayElement":
        if value is None:
            return replace(self, status=status)
        return ArrayElement(value=value, status=status)

    def to_dict(self) -> dict:
        return {"value": self.value, "status": self.status.value}


def random_elements(
    size: int,
    min_value: int = 10,
    max_value: int = 309,
    rng: Optional[random.Random] = None,
) -> List[ArrayElement]:
    """Fresh array of `size` bars with heights in [min_value, max_value]."""
    rng = rng or random.Random()
    return [ArrayElement(rng.randint(min_value, max_value)) for _ in range(size)]


def from_values(values: List[int]) -> List[ArrayElement]:
    return [ArrayElement(v) for v in values]


def values_of(elements: List[ArrayElement]) -> List[int]:
    return [e.value for e in elements]
