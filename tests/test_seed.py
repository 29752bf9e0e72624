import pytest
from unittest.mock import Mock

from bookstore_api.models import Role, User
from bookstore_api.seed import SEED_USERS, SeedUser, seed

# -----------------------------------------------------------------------------


def get_users(db):
    return {
        user.username: [role.name for role in user.roles]
        for user in db.session.query(User)
    }


# -----------------------------------------------------------------------------


def test_seed(db, identity):
    seed(identity)

    assert sorted(role.name for role in db.session.query(Role)) == [
        "Administrator",
        "Customer",
    ]
    assert get_users(db) == {
        "admin": ["Administrator"],
        "customer": ["Customer"],
        "customer1": ["Customer"],
    }


def test_seed_skips_weak_password(db, identity, caplog):
    seed(identity)

    assert not identity.user_exists_by_email("customer2@bookstore.local")
    assert "skipped seed user customer2" in caplog.text


def test_seed_twice(db, identity):
    seed(identity)
    seed(identity)

    assert db.session.query(Role).count() == 2
    assert get_users(db) == {
        "admin": ["Administrator"],
        "customer": ["Customer"],
        "customer1": ["Customer"],
    }


# -----------------------------------------------------------------------------


@pytest.fixture
def mock_identity():
    identity = Mock()
    identity.role_exists.return_value = False
    identity.user_exists_by_email.return_value = False
    return identity


def test_seed_creates_missing_roles(mock_identity):
    mock_identity.role_exists.side_effect = lambda name: name == "Customer"

    seed(mock_identity, users=())

    mock_identity.create_role.assert_called_once_with("Administrator")


def test_seed_skips_existing_users(mock_identity):
    mock_identity.user_exists_by_email.return_value = True

    seed(mock_identity)

    mock_identity.create_user.assert_not_called()
    mock_identity.add_user_to_role.assert_not_called()


def test_seed_adds_role_only_on_success(mock_identity):
    created = Mock()
    mock_identity.create_user.side_effect = (created, None)

    seed(
        mock_identity,
        roles=(),
        users=(
            SeedUser("one", "one@example.com", "Secr3t!x", "Customer"),
            SeedUser("two", "two@example.com", "weak", "Customer"),
        ),
    )

    assert mock_identity.create_user.call_count == 2
    mock_identity.add_user_to_role.assert_called_once_with(created, "Customer")


def test_seed_warns_on_missing_role(mock_identity, caplog):
    mock_identity.add_user_to_role.return_value = False

    seed(
        mock_identity,
        roles=(),
        users=(SeedUser("one", "one@example.com", "Secr3t!x", "Customer"),),
    )

    assert "seeded user one without role Customer" in caplog.text


def test_seed_users_constant():
    assert [seed_user.username for seed_user in SEED_USERS] == [
        "admin",
        "customer",
        "customer1",
        "customer2",
    ]
