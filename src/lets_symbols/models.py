from dataclasses import dataclass


@dataclass(frozen=True)
class Command:
    """A named entry of the top-level `commands` section"""

    name: str
