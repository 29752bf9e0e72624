"""Seed the identity store with the fixed roles and accounts.

Seeding runs once per process start, from the entry point or the ``flask seed``
command. Every step checks for existing data first, so running it again is
harmless.
"""

import logging
from collections import namedtuple

from .authorization import ADMINISTRATOR, CUSTOMER

# -----------------------------------------------------------------------------

logger = logging.getLogger(__name__)

SeedUser = namedtuple("SeedUser", ("username", "email", "password", "role"))

SEED_ROLES = (ADMINISTRATOR, CUSTOMER)

# customer2's password has no digit, so the password policy rejects it and
# the account is never created.
SEED_USERS = (
    SeedUser("admin", "admin@bookstore.local", "P@ssword12345", ADMINISTRATOR),
    SeedUser(
        "customer", "customer@bookstore.local", "P@ssword12345", CUSTOMER
    ),
    SeedUser(
        "customer1", "customer1@bookstore.local", "P@ssword12345", CUSTOMER
    ),
    SeedUser("customer2", "customer2@bookstore.local", "P@ssword", CUSTOMER),
)

# -----------------------------------------------------------------------------


def seed(identity, *, roles=SEED_ROLES, users=SEED_USERS):
    """Create the seed roles, then the seed users.

    :param identity: The identity collaborator, e.g. an
        :py:class:`IdentityStore`.
    """
    seed_roles(identity, roles)
    seed_users(identity, users)


def seed_roles(identity, roles):
    for name in roles:
        if identity.role_exists(name):
            continue

        identity.create_role(name)
        logger.info("seeded role %s", name)


def seed_users(identity, users):
    for seed_user in users:
        if identity.user_exists_by_email(seed_user.email):
            continue

        user = identity.create_user(
            seed_user.username, seed_user.email, seed_user.password
        )
        if user is None:
            logger.warning("skipped seed user %s", seed_user.username)
            continue

        if identity.add_user_to_role(user, seed_user.role):
            logger.info(
                "seeded user %s as %s", seed_user.username, seed_user.role
            )
        else:
            logger.warning(
                "seeded user %s without role %s",
                seed_user.username,
                seed_user.role,
            )
