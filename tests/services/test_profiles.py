import pytest

from services.categories import DEFAULT_CATEGORIES
from services.profiles import MAIN_PROFILE_ID
from tests.helpers import make_bill


class TestProfileService:
    """Tests for ProfileService."""

    def test_main_profile_exists(self, services):
        """Test the schema creates the main profile with id 1."""
        main = services.profiles.find_main()

        assert main is not None
        assert main.id == MAIN_PROFILE_ID
        assert main.is_main is True

    def test_create_profile_seeds_categories(self, services):
        """Test a new profile gets its own built-in categories."""
        profile = services.profiles.create("Dad's house", "#FF0000")

        assert profile.id != MAIN_PROFILE_ID
        assert profile.is_main is False
        names = {c.name for c in services.categories.find_by_profile(profile.id)}
        assert names == {name for name, _, _ in DEFAULT_CATEGORIES}

    def test_create_empty_name_raises(self, services):
        """Test that a profile needs a name."""
        with pytest.raises(ValueError):
            services.profiles.create("")

    def test_find_all_main_first(self, services):
        """Test profiles are listed by id, main first."""
        services.profiles.create("Second")

        profiles = services.profiles.find_all()

        assert [p.name for p in profiles] == ["Main", "Second"]

    def test_update_profile(self, services):
        """Test renaming a profile."""
        profile = services.profiles.create("Old")

        services.profiles.update(profile.id, "New", "#00FF00")

        found = services.profiles.find(profile.id)
        assert found.name == "New"
        assert found.color_hex == "#00FF00"

    def test_update_not_found(self, services):
        """Test updating a missing profile raises an error."""
        with pytest.raises(Exception, match="not found"):
            services.profiles.update(9999, "Name", "#000000")

    def test_delete_profile_cascades(self, services):
        """Test deleting a profile removes its bills and categories too."""
        profile = services.profiles.create("Temporary")
        services.bills.create(make_bill(profile_id=profile.id))
        services.bills.create(make_bill(name="Main rent"))

        assert services.profiles.delete(profile.id) is True

        assert services.profiles.find(profile.id) is None
        assert services.bills.find_by_profile(profile.id) == []
        assert services.categories.find_by_profile(profile.id) == []
        assert len(services.bills.find_by_profile(MAIN_PROFILE_ID)) == 1

    def test_delete_main_profile_raises(self, services):
        """Test the main profile cannot be deleted."""
        with pytest.raises(ValueError, match="main profile"):
            services.profiles.delete(MAIN_PROFILE_ID)

    def test_delete_not_found(self, services):
        """Test deleting a missing profile returns False."""
        assert services.profiles.delete(9999) is False
