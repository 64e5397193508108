from __future__ import annotations

from yamlcat.types import Strategy

from .base import DocumentStrategy
from .passthrough import PassthroughStrategy
from .reserialize import ReserializeStrategy


def build_strategy(strategy: Strategy | str, *, sort_keys: bool = False) -> DocumentStrategy:
    if Strategy(strategy) is Strategy.PASSTHROUGH:
        return PassthroughStrategy()
    return ReserializeStrategy(sort_keys=sort_keys)


__all__ = [
    "DocumentStrategy",
    "PassthroughStrategy",
    "ReserializeStrategy",
    "build_strategy",
]
