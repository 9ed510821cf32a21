"""Profile service for database operations."""

from typing import List, Optional
from db.manager import atomic
from models.profile import Profile

MAIN_PROFILE_ID = 1


class ProfileService:
    """Service for managing profiles (household members sharing the app)."""

    def __init__(self, db_manager, categories):
        """Initialize the profile service.

        Args:
            db_manager: Database manager instance for database operations.
            categories: CategoryService used to seed new profiles.
        """
        self.db_manager = db_manager
        self.categories = categories

    def find_all(self) -> List[Profile]:
        """Get all profiles, ordered by id (the main profile first)."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "SELECT id, name, color_hex, is_main FROM profiles ORDER BY id"
            )
            return [self._row_to_profile(row) for row in cursor.fetchall()]

    def find(self, profile_id: int) -> Optional[Profile]:
        """Get a single profile by ID.

        Args:
            profile_id: The profile ID to find.

        Returns:
            Profile object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "SELECT id, name, color_hex, is_main FROM profiles WHERE id = ?",
                (profile_id,),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_profile(row)
            return None

    def find_main(self) -> Optional[Profile]:
        """Get the main profile."""
        return self.find(MAIN_PROFILE_ID)

    def create(self, name: str, color_hex: str = "#FBC02D") -> Profile:
        """Create a profile and seed its built-in categories.

        Args:
            name: Display name, e.g. "Dad's house".
            color_hex: Display color.

        Returns:
            The created Profile object with id populated.

        Raises:
            ValueError: If the name is empty.
        """
        name = name.strip()
        if not name:
            raise ValueError("Profile name cannot be empty")

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "INSERT INTO profiles (name, color_hex, is_main) VALUES (?, ?, 0)",
                (name, color_hex),
            )
            conn.commit()
            profile_id = cursor.lastrowid

        self.categories.seed_defaults(profile_id)

        return Profile(id=profile_id, name=name, color_hex=color_hex, is_main=False)

    def update(self, profile_id: int, name: str, color_hex: str) -> Profile:
        """Rename or recolor a profile.

        Raises:
            Exception: If profile not found.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "UPDATE profiles SET name = ?, color_hex = ? WHERE id = ?",
                (name, color_hex, profile_id),
            )
            conn.commit()

            if cursor.rowcount == 0:
                raise Exception(f"Profile with ID {profile_id} not found")

        return Profile(
            id=profile_id,
            name=name,
            color_hex=color_hex,
            is_main=profile_id == MAIN_PROFILE_ID,
        )

    def delete(self, profile_id: int) -> bool:
        """Delete a profile together with all of its bills and categories.

        Args:
            profile_id: The profile ID to delete.

        Returns:
            True if the profile was deleted, False if not found.

        Raises:
            ValueError: If the profile is the main profile.
        """
        profile = self.find(profile_id)
        if profile is None:
            return False
        if profile.is_main or profile.id == MAIN_PROFILE_ID:
            raise ValueError("The main profile cannot be deleted")

        with atomic(self.db_manager) as conn:
            conn.execute("DELETE FROM bills WHERE profile_id = ?", (profile_id,))
            conn.execute("DELETE FROM categories WHERE profile_id = ?", (profile_id,))
            cursor = conn.execute("DELETE FROM profiles WHERE id = ?", (profile_id,))
            return cursor.rowcount > 0

    def _row_to_profile(self, row: tuple) -> Profile:
        return Profile(id=row[0], name=row[1], color_hex=row[2], is_main=bool(row[3]))
