import os

from .utils import env_flag

# -----------------------------------------------------------------------------

SQLALCHEMY_DATABASE_URI = os.environ.get(
    "DATABASE_URL", "sqlite:///bookstore.db"
)
SQLALCHEMY_TRACK_MODIFICATIONS = False

# Override in any deployment; tokens signed with this key are forgeable.
SECRET_KEY = os.environ.get("SECRET_KEY", "bookstore-development-key")

BOOKSTORE_JWT_ALGORITHM = os.environ.get("JWT_ALGORITHM", "HS256")
BOOKSTORE_JWT_EXPIRES_MINUTES = int(os.environ.get("JWT_EXPIRES_MINUTES", 60))
BOOKSTORE_JWT_ISSUER = os.environ.get("JWT_ISSUER")
BOOKSTORE_JWT_AUDIENCE = os.environ.get("JWT_AUDIENCE")

BOOKSTORE_REQUIRE_AUTHORIZATION = env_flag(
    os.environ.get("REQUIRE_AUTHORIZATION")
)

BOOKSTORE_LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
BOOKSTORE_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

BOOKSTORE_TRAP_API_ERRORS = False

BOOKSTORE_SEED_ON_STARTUP = env_flag(
    os.environ.get("SEED_ON_STARTUP"), default=True
)

BOOKSTORE_HOST = os.environ.get("HOST", "127.0.0.1")
BOOKSTORE_PORT = int(os.environ.get("PORT", 5000))

# Extra names for ``flask shell``; the other values fall back to konch's.
BOOKSTORE_SHELL_CONTEXT = {}
BOOKSTORE_SHELL_LOGO = None
BOOKSTORE_SHELL_PROMPT = None
BOOKSTORE_SHELL_OUTPUT = None
BOOKSTORE_SHELL_CONTEXT_FORMAT = None
