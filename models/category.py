"""Category model for grouping bills."""

from dataclasses import dataclass


@dataclass
class Category:
    """Represents a bill category owned by a profile.

    Attributes:
        id: Unique identifier (auto-generated).
        profile_id: Owning profile.
        name: Category name (unique per profile).
        color_hex: Display color, e.g. "#1976D2".
        icon: An emoji, or the name of a text icon.
        is_built_in: Seeded category that cannot be deleted.
    """

    id: int
    profile_id: int
    name: str
    color_hex: str
    icon: str
    is_built_in: bool = False
