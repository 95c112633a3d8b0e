"""Domain entity describing the public face of a profile."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Profile:
    """Display metadata of a profile as shown next to a notification."""

    id: str
    display_name: str
    avatar_url: str | None = None
