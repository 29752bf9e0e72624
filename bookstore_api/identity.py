import logging

from sqlalchemy.exc import IntegrityError
from werkzeug.security import check_password_hash, generate_password_hash

from .models import Role, User

# -----------------------------------------------------------------------------

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6

# -----------------------------------------------------------------------------


def validate_password(password):
    """Check a password against the account password policy.

    The policy requires at least six characters including an uppercase
    letter, a lowercase letter, a digit, and a non-alphanumeric character.

    :param str password: The candidate password.
    :return: Messages describing each unmet requirement.
    :rtype: list
    """
    errors = []
    if len(password) < MIN_PASSWORD_LENGTH:
        errors.append(
            f"Passwords must be at least {MIN_PASSWORD_LENGTH} characters."
        )
    if not any(char.isdigit() for char in password):
        errors.append("Passwords must have at least one digit.")
    if not any(char.isupper() for char in password):
        errors.append("Passwords must have at least one uppercase letter.")
    if not any(char.islower() for char in password):
        errors.append("Passwords must have at least one lowercase letter.")
    if all(char.isalnum() for char in password):
        errors.append(
            "Passwords must have at least one non-alphanumeric character."
        )

    return errors


# -----------------------------------------------------------------------------


class IdentityStore:
    """User and role storage used for seeding and login.

    :param session: The SQLAlchemy session to use.
    """

    def __init__(self, session):
        self.session = session

    def find_user_by_email(self, email):
        return (
            self.session.query(User)
            .filter(User.email == email.lower())
            .one_or_none()
        )

    def user_exists_by_email(self, email):
        return self.find_user_by_email(email) is not None

    def create_user(self, username, email, password):
        """Create a user with a hashed password.

        :return: The new user, or ``None`` if the password fails the policy
            or the username or email is taken.
        """
        password_errors = validate_password(password)
        if password_errors:
            logger.debug(
                "user %s not created: %s", username, " ".join(password_errors)
            )
            return None

        user = User(
            username=username,
            email=email.lower(),
            password_hash=generate_password_hash(password),
        )
        self.session.add(user)

        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            logger.debug("user %s not created: already taken", username)
            return None

        logger.debug("created user %s", username)
        return user

    def check_password(self, user, password):
        return check_password_hash(user.password_hash, password)

    def find_role(self, name):
        return self.session.query(Role).filter(Role.name == name).one_or_none()

    def role_exists(self, name):
        return self.find_role(name) is not None

    def create_role(self, name):
        role = Role(name=name)
        self.session.add(role)
        self.session.commit()

        logger.debug("created role %s", name)
        return role

    def add_user_to_role(self, user, role_name):
        role = self.find_role(role_name)
        if role is None:
            logger.debug(
                "user %s not added to missing role %s",
                user.username,
                role_name,
            )
            return False

        if role not in user.roles:
            user.roles.append(role)
            self.session.commit()

        logger.debug("added user %s to role %s", user.username, role_name)
        return True

    def get_user_roles(self, user):
        return [role.name for role in user.roles]
