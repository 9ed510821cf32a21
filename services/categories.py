"""Category service for database operations."""

from typing import List, Optional
from models.category import Category

# Built-in categories seeded for every profile: (name, color, icon).
DEFAULT_CATEGORIES = [
    ("Housing", "#1976D2", "🏠"),
    ("Transport", "#FBC02D", "🚗"),
    ("Health", "#2FD3B2", "💊"),
    ("Leisure", "#7B1FA2", "🎉"),
    ("Food", "#388E3C", "🍔"),
    ("Education", "#00796B", "🎓"),
    ("Other", "#9E9E9E", "🏷"),
]

FALLBACK_CATEGORY = "Other"

_CATEGORY_SELECT_FIELDS = "id, profile_id, name, color_hex, icon, is_built_in"


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db_manager):
        """Initialize the category service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_by_profile(self, profile_id: int) -> List[Category]:
        """Get the categories of one profile.

        Args:
            profile_id: Owning profile.

        Returns:
            List of Category objects, ordered by name.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_CATEGORY_SELECT_FIELDS} FROM categories "
                "WHERE profile_id = ? ORDER BY name",
                (profile_id,),
            )
            return [self._row_to_category(row) for row in cursor.fetchall()]

    def find_all(self) -> List[Category]:
        """Get the categories of every profile, ordered by id."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_CATEGORY_SELECT_FIELDS} FROM categories ORDER BY id"
            )
            return [self._row_to_category(row) for row in cursor.fetchall()]

    def find(self, category_id: int) -> Optional[Category]:
        """Get a single category by ID.

        Args:
            category_id: The category ID to find.

        Returns:
            Category object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_CATEGORY_SELECT_FIELDS} FROM categories WHERE id = ?",
                (category_id,),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_category(row)
            return None

    def find_by_name(self, profile_id: int, name: str) -> Optional[Category]:
        """Get a profile's category by name (case-sensitive).

        Args:
            profile_id: Owning profile.
            name: The category name to find.

        Returns:
            Category object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_CATEGORY_SELECT_FIELDS} FROM categories "
                "WHERE profile_id = ? AND name = ?",
                (profile_id, name),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_category(row)
            return None

    def find_fallback(self, profile_id: int) -> Optional[Category]:
        """The profile's "Other" category, used when a bill's category is unknown."""
        return self.find_by_name(profile_id, FALLBACK_CATEGORY)

    def create(
        self,
        profile_id: int,
        name: str,
        color_hex: str = "#9E9E9E",
        icon: str = "label",
        is_built_in: bool = False,
    ) -> Category:
        """Create a new category.

        Args:
            profile_id: Owning profile.
            name: Category name (unique within the profile).
            color_hex: Display color.
            icon: Emoji or text icon name.
            is_built_in: Protect the category from deletion.

        Returns:
            The created Category object with id populated.

        Raises:
            ValueError: If the name is empty.
            sqlite3.IntegrityError: If the profile already has a category with this name.
        """
        name = name.strip()
        if not name:
            raise ValueError("Category name cannot be empty")

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "INSERT INTO categories (profile_id, name, color_hex, icon, is_built_in) "
                "VALUES (?, ?, ?, ?, ?)",
                (profile_id, name, color_hex, icon, int(is_built_in)),
            )
            conn.commit()

            return Category(
                id=cursor.lastrowid,
                profile_id=profile_id,
                name=name,
                color_hex=color_hex,
                icon=icon,
                is_built_in=is_built_in,
            )

    def update(
        self, category_id: int, name: str, color_hex: str, icon: str
    ) -> Category:
        """Update an existing category's name, color and icon.

        Args:
            category_id: The category ID to update.
            name: New category name.
            color_hex: New display color.
            icon: New emoji or icon name.

        Returns:
            The updated Category object.

        Raises:
            Exception: If category not found.
        """
        existing = self.find(category_id)
        if existing is None:
            raise Exception(f"Category with ID {category_id} not found")

        with self.db_manager.connect() as conn:
            conn.execute(
                "UPDATE categories SET name = ?, color_hex = ?, icon = ? WHERE id = ?",
                (name, color_hex, icon, category_id),
            )
            conn.commit()

        return Category(
            id=category_id,
            profile_id=existing.profile_id,
            name=name,
            color_hex=color_hex,
            icon=icon,
            is_built_in=existing.is_built_in,
        )

    def delete(self, category_id: int) -> bool:
        """Delete a user-created category by ID.

        Bills that used it keep the dangling id and are shown under the
        fallback category.

        Args:
            category_id: The category ID to delete.

        Returns:
            True if category was deleted, False if not found.

        Raises:
            ValueError: If the category is built-in.
        """
        category = self.find(category_id)
        if category is None:
            return False
        if category.is_built_in:
            raise ValueError(f"Category '{category.name}' is built-in and cannot be deleted")

        with self.db_manager.connect() as conn:
            cursor = conn.execute("DELETE FROM categories WHERE id = ?", (category_id,))
            conn.commit()
            return cursor.rowcount > 0

    def seed_defaults(self, profile_id: int) -> int:
        """Insert the built-in categories a profile is missing.

        Args:
            profile_id: Profile to seed.

        Returns:
            Number of categories created.
        """
        existing = {category.name for category in self.find_by_profile(profile_id)}
        created = 0
        for name, color_hex, icon in DEFAULT_CATEGORIES:
            if name in existing:
                continue
            self.create(profile_id, name, color_hex, icon, is_built_in=True)
            created += 1
        return created

    def _row_to_category(self, row: tuple) -> Category:
        return Category(
            id=row[0],
            profile_id=row[1],
            name=row[2],
            color_hex=row[3],
            icon=row[4],
            is_built_in=bool(row[5]),
        )
