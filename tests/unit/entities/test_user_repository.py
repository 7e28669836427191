"""User entity and repository tests."""

from src.catalog.entities.core.user import User, UserRepository


class TestUserEntity:
    def test_user_defaults_to_non_admin(self):
        user = User(first_name="John", last_name="Doe")

        assert user.is_admin is False
        assert user.full_name == "John Doe"

    def test_user_equality_includes_role(self):
        user = User(id="1", first_name="John", last_name="Doe")
        admin = User(id="1", first_name="John", last_name="Doe", is_admin=True)

        assert user != admin
        assert user == User(id="1", first_name="John", last_name="Doe")


class TestUserRepository:
    def test_create_and_get(self, session):
        repository = UserRepository(session)

        created = repository.create(User(first_name="Jane", last_name="Smith", is_admin=True))

        fetched = repository.get(created.id)
        assert fetched == created
        assert fetched.is_admin is True

    def test_get_missing_returns_none(self, session):
        assert UserRepository(session).get("missing") is None

    def test_list_all_sorted_by_name(self, session, user, admin):
        users = UserRepository(session).list_all()

        assert [u.last_name for u in users] == ["Admin", "Shopper"]
