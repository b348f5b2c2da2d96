from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Channel(Enum):
    STDOUT = "stdout"
    STDERR = "stderr"


class RedirectionSource(Enum):
    STDOUT = "stdout"
    STDERR = "stderr"
    BOTH = "both"

    def covers(self, channel: Channel) -> bool:
        if self is RedirectionSource.BOTH:
            return True
        return self.value == channel.value


class RedirectionMode(Enum):
    WRITE = "write"
    APPEND = "append"

    @property
    def file_mode(self) -> str:
        return "ab" if self is RedirectionMode.APPEND else "wb"


@dataclass(frozen=True)
class Redirection:
    source: RedirectionSource
    mode: RedirectionMode
    target: str


def _take_while(raw: str, start: int, predicate) -> int:
    end = start
    while end < len(raw) and predicate(raw[end]):
        end += 1
    return end


def parse_redirection(raw: str) -> Optional[Redirection]:
    """Parse a raw tail such as ``2>> err.log`` into a :class:`Redirection`.

    Returns ``None`` for anything malformed: an unknown descriptor number, or
    a run of ``>`` that is not one or two characters long.
    """
    if not raw:
        return None

    pos = 0
    if raw[0] == "&":
        source = RedirectionSource.BOTH
        pos = 1
    else:
        end = _take_while(raw, pos, lambda c: "0" <= c <= "9")
        digits = raw[pos:end]
        pos = end
        fd = int(digits) if digits else 1
        if fd in (0, 1):
            source = RedirectionSource.STDOUT
        elif fd == 2:
            source = RedirectionSource.STDERR
        else:
            return None

    end = _take_while(raw, pos, lambda c: c == ">")
    arrows = end - pos
    pos = end
    if arrows == 1:
        mode = RedirectionMode.WRITE
    elif arrows == 2:
        mode = RedirectionMode.APPEND
    else:
        return None

    pos = _take_while(raw, pos, str.isspace)
    end = _take_while(raw, pos, lambda c: not c.isspace())
    return Redirection(source=source, mode=mode, target=raw[pos:end])
