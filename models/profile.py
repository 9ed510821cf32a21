from dataclasses import dataclass


@dataclass
class Profile:
    id: int
    name: str  # e.g. "Main", "Dad's house"
    color_hex: str
    is_main: bool = False  # only the profile with id 1

    def to_dict(self) -> dict:
        """Convert profile to dictionary for database storage."""
        return {
            "id": self.id,
            "name": self.name,
            "color_hex": self.color_hex,
            "is_main": int(self.is_main),
        }
