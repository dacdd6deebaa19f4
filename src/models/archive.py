"""Archive entry model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ArchiveEntry:
    """A PDF member read out of an archive.

    ``name`` is the member's final path component; ``content`` holds the
    fully decompressed bytes.
    """
    name: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)
