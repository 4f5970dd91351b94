from dataclasses import dataclass
from typing import Protocol, runtime_checkable

@dataclass(frozen=True)
class Geometry:
    width: int
    height: int

@runtime_checkable
class MediaProberPort(Protocol):
    async def probe(self, path: str) -> Geometry: ...

@runtime_checkable
class MediaRepackagerPort(Protocol):
    async def repackage(self, path: str) -> str:
        """Write a fast-start copy next to ``path`` and return its path.

        The caller owns the returned file and must delete it.
        """
        ...
