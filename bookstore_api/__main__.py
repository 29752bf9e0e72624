from .app import create_app
from .identity import IdentityStore
from .models import db
from .seed import seed

# -----------------------------------------------------------------------------


def main():
    app = create_app()

    with app.app_context():
        db.create_all()

        if app.config["BOOKSTORE_SEED_ON_STARTUP"]:
            seed(IdentityStore(db.session))

    app.run(
        host=app.config["BOOKSTORE_HOST"], port=app.config["BOOKSTORE_PORT"]
    )


if __name__ == "__main__":
    main()
