from . import schemas
from .authorization import ADMINISTRATOR, CUSTOMER, RoleAuthorization
from .decorators import fault_boundary
from .exceptions import ApiError, InvalidInput
from .identity import IdentityStore, validate_password
from .jwt import JwtAuthentication, encode_token
from .mapper import Mapper
from .models import Author, Book, db
from .repository import ModelRepository
from .view import ApiView, ResourceView

# -----------------------------------------------------------------------------

author_repository = ModelRepository(Author)
book_repository = ModelRepository(Book)

author_mapper = Mapper(
    Author,
    schemas.AuthorSchema(),
    schemas.AuthorCreateSchema(),
    schemas.AuthorUpdateSchema(),
)
book_mapper = Mapper(
    Book,
    schemas.BookSchema(),
    schemas.BookCreateSchema(),
    schemas.BookUpdateSchema(),
)

# -----------------------------------------------------------------------------


class BookstoreViewBase(ResourceView):
    authentication = JwtAuthentication()
    authorization = RoleAuthorization(write_roles=(ADMINISTRATOR,))


# -----------------------------------------------------------------------------


class AuthorViewBase(BookstoreViewBase):
    resource_name = "Author"
    repository = author_repository
    mapper = author_mapper

    def validate_delete(self, item):
        if item.books:
            yield {
                "code": "invalid_delete.has_books",
                "detail": "Delete the author's books first.",
            }


class AuthorListView(AuthorViewBase):
    def get(self):
        return self.list()

    def post(self):
        return self.create()


class AuthorView(AuthorViewBase):
    def get(self, id):
        return self.retrieve(id)

    def put(self, id):
        return self.update(id)

    def delete(self, id):
        return self.destroy(id)


# -----------------------------------------------------------------------------


class BookViewBase(BookstoreViewBase):
    resource_name = "Book"
    repository = book_repository
    mapper = book_mapper

    author_repository = author_repository

    def validate_references(self, data):
        if not self.author_repository.exists(data["author_id"]):
            yield {
                "code": "invalid_related.not_found",
                "detail": "No author exists with this ID.",
                "source": {"pointer": "/authorId"},
            }


class BookListView(BookViewBase):
    def get(self):
        return self.list()

    def post(self):
        return self.create()


class BookView(BookViewBase):
    def get(self, id):
        return self.retrieve(id)

    def put(self, id):
        return self.update(id)

    def delete(self, id):
        return self.destroy(id)


# -----------------------------------------------------------------------------


class UserViewBase(ApiView):
    credentials_schema = schemas.UserCredentialsSchema()

    @property
    def identity(self):
        return IdentityStore(db.session)

    def load_credentials(self, action):
        data_raw = self.get_request_data()
        if data_raw is None:
            raise self.reject(
                action, InvalidInput({"code": "invalid_body"}), "empty body"
            )

        return self.load(action, self.credentials_schema.load, data_raw)


class UserRegisterView(UserViewBase):
    @fault_boundary
    def post(self):
        credentials = self.load_credentials("post")
        email = credentials["email"]
        password = credentials["password"]

        if self.identity.user_exists_by_email(email):
            raise self.reject(
                "post",
                InvalidInput(
                    {
                        "code": "invalid_email.taken",
                        "source": {"pointer": "/email"},
                    }
                ),
                "email %s already registered",
                email,
            )

        password_errors = validate_password(password)
        if password_errors:
            raise self.reject(
                "post",
                InvalidInput(
                    *(
                        {
                            "code": "invalid_password",
                            "detail": message,
                            "source": {"pointer": "/password"},
                        }
                        for message in password_errors
                    )
                ),
                "rejected password for %s",
                email,
            )

        # Nothing is written unless the Customer role exists.
        if not self.identity.role_exists(CUSTOMER):
            raise self.fail("post", "role %s is not seeded", CUSTOMER)

        user = self.identity.create_user(email, email, password)
        if user is None:
            raise self.fail("post", "failed registering %s", email)

        if not self.identity.add_user_to_role(user, CUSTOMER):
            raise self.fail("post", "failed adding %s to %s", email, CUSTOMER)

        self.log_success("post", "registered user %s", user.id)
        return self.make_response({"id": user.id, "email": user.email}, 201)


class UserLoginView(UserViewBase):
    @fault_boundary
    def post(self):
        credentials = self.load_credentials("post")
        email = credentials["email"]

        user = self.identity.find_user_by_email(email)
        if user is None or not self.identity.check_password(
            user, credentials["password"]
        ):
            raise self.reject(
                "post",
                ApiError(401, {"code": "invalid_credentials"}),
                "rejected login for %s",
                email,
            )

        token = encode_token(user, self.identity.get_user_roles(user))

        self.log_success("post", "issued token for user %s", user.id)
        return self.make_response({"token": token})
