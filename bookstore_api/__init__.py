# flake8: noqa

from .api import Api
from .app import create_app
from .authentication import BearerAuthentication, NoOpAuthentication
from .authorization import (
    ADMINISTRATOR,
    CUSTOMER,
    NoOpAuthorization,
    RoleAuthorization,
)
from .decorators import fault_boundary
from .exceptions import ApiError, InternalFault, InvalidInput, NotFound
from .identity import IdentityStore
from .jwt import JwtAuthentication
from .mapper import Mapper
from .models import Author, Book, Role, User, db
from .repository import ModelRepository, RepositoryBase
from .seed import seed
from .view import ApiView, ResourceView
