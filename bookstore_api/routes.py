from . import views

# -----------------------------------------------------------------------------


def register_routes(api, app=None):
    api.add_resource(
        "authors", views.AuthorListView, views.AuthorView, app=app
    )
    api.add_resource("books", views.BookListView, views.BookView, app=app)

    api.add_view("/users/register", views.UserRegisterView, app=app)
    api.add_view("/users/login", views.UserLoginView, app=app)

    api.add_ping("/ping", app=app)
