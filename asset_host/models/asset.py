"""
Asset collection model.
Each collection is one directory of binary + JSON sidecar pairs.
"""

import enum


class Collection(str, enum.Enum):
    """Asset kinds hosted by the server."""
    WORLD = "world"
    AVATAR = "avatar"

    @property
    def plural(self) -> str:
        """Directory name and public URL segment for the collection."""
        return f"{self.value}s"

    @classmethod
    def parse(cls, value: str | None) -> "Collection":
        """
        Resolve a collection identifier from a request.

        Only "world" selects the worlds collection; any other value,
        including an empty one, falls back to avatars.
        """
        if value == cls.WORLD.value:
            return cls.WORLD
        return cls.AVATAR
