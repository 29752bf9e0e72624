from marshmallow import EXCLUDE, Schema, fields, validate

# -----------------------------------------------------------------------------


class DtoSchema(Schema):
    class Meta:
        # Unknown keys, including a client-supplied id on create, are dropped.
        unknown = EXCLUDE


# -----------------------------------------------------------------------------


class AuthorCreateSchema(DtoSchema):
    first_name = fields.String(
        required=True,
        data_key="firstName",
        validate=validate.Length(min=1, max=100),
    )
    last_name = fields.String(
        required=True,
        data_key="lastName",
        validate=validate.Length(min=1, max=100),
    )
    bio = fields.String(
        allow_none=True, load_default=None, validate=validate.Length(max=250)
    )


class AuthorUpdateSchema(AuthorCreateSchema):
    id = fields.Integer(required=True, strict=True)


class AuthorSchema(Schema):
    id = fields.Integer()
    first_name = fields.String(data_key="firstName")
    last_name = fields.String(data_key="lastName")
    bio = fields.String(allow_none=True)
    books = fields.List(fields.Nested(lambda: BookSchema(exclude=("author",))))


# -----------------------------------------------------------------------------


class BookCreateSchema(DtoSchema):
    title = fields.String(
        required=True, validate=validate.Length(min=1, max=200)
    )
    year = fields.Integer(allow_none=True, load_default=None, strict=True)
    isbn = fields.String(
        required=True, validate=validate.Length(min=1, max=32)
    )
    summary = fields.String(
        allow_none=True, load_default=None, validate=validate.Length(max=500)
    )
    image = fields.String(
        allow_none=True, load_default=None, validate=validate.Length(max=500)
    )
    price = fields.Float(
        allow_none=True, load_default=None, validate=validate.Range(min=0)
    )
    author_id = fields.Integer(required=True, strict=True, data_key="authorId")


class BookUpdateSchema(BookCreateSchema):
    id = fields.Integer(required=True, strict=True)


class BookSchema(Schema):
    id = fields.Integer()
    title = fields.String()
    year = fields.Integer(allow_none=True)
    isbn = fields.String()
    summary = fields.String(allow_none=True)
    image = fields.String(allow_none=True)
    price = fields.Float(allow_none=True)
    author_id = fields.Integer(data_key="authorId")
    author = fields.Nested(lambda: AuthorSchema(exclude=("books",)))


# -----------------------------------------------------------------------------


class UserCredentialsSchema(DtoSchema):
    email = fields.Email(required=True)
    password = fields.String(required=True, validate=validate.Length(min=1))
