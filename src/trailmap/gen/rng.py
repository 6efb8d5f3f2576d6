# gen/rng.py
from __future__ import annotations

from functools import cache
from zlib import crc32

import numpy as np


def _u32(x: int) -> int:
    return int(x & 0xFFFFFFFF)


def _tag(s: str) -> int:
    return _u32(crc32(s.encode("utf-8")))


class MapStreams:
    """
    Named numpy generators for one random map.
    Entropy path: [seed, map name, stream name, *parts]; adding a stream never
    shifts the draws of another.
    """

    def __init__(self, seed: int, *, name: str = "atlas"):
        self.seed = _u32(seed)
        self.name_tag = _tag(name)

    @cache
    def stream(self, name: str, *parts: int) -> np.random.Generator:
        ss = np.random.SeedSequence(
            entropy=[self.seed, self.name_tag, _tag(name), *(_u32(p) for p in parts)]
        )
        return np.random.Generator(np.random.PCG64(ss))
