"""Counting of bracket-like pairs across the lines of a code block."""

from __future__ import annotations

from dataclasses import dataclass, field


def pair_key_split(key: str) -> tuple[str, str]:
    """Split a pair key into its opening and closing text.

    A two-character key such as ``"{}"`` splits into its characters; a longer
    key holds both parts separated by one space, such as ``'\"\"\" \"\"\"'``.
    """
    if len(key) == 2:
        return key[:1], key[1:]
    parts = key.split(" ")
    if len(parts) != 2:
        raise ValueError(f"invalid pair keyword: {key}")
    return parts[0], parts[1]


@dataclass
class PairCount:
    """Open-pair counters, fed one line at a time.

    While a pair listed in ``origin_text`` is open, only that pair is counted,
    so brackets inside it are ignored.
    """

    keywords: list[str] = field(default_factory=list)
    origin_text: list[str] = field(default_factory=list)
    counts: dict[str, int] = field(default_factory=dict)

    def add(self, line: str) -> str:
        """Count the pairs in ``line`` and return the last pair key it touched."""
        in_origin = next(
            (key for key, value in self.counts.items() if value > 0 and key in (self.origin_text or ())),
            "",
        )
        effect_key = ""
        for key in self.keywords:
            if in_origin and key != in_origin:
                continue
            head, tail = pair_key_split(key)
            current = self.counts.get(key, 0)
            if head == tail:
                found = line.count(head)
                if found > 0:
                    if current > 0:
                        self.counts[key] = current - found % 2
                    else:
                        self.counts[key] = current + found % 2
                    effect_key = key
            else:
                opened = line.count(head)
                if opened > 0:
                    current += opened
                    self.counts[key] = current
                    effect_key = key
                closed = line.count(tail)
                if closed > 0:
                    self.counts[key] = current - closed
                    effect_key = key
            # a text counted for one pair must not be counted again for another
            line = line.replace(head, "").replace(tail, "")
        return effect_key

    def is_zero(self) -> bool:
        """Whether every pair is balanced."""
        return all(self.counts.get(key, 0) == 0 for key in self.keywords)