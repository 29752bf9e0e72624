import click
from flask.cli import with_appcontext

from .identity import IdentityStore
from .models import db
from .seed import seed

# -----------------------------------------------------------------------------


@click.command("init-db", help="Create the database tables.")
@click.option("--drop", is_flag=True, help="Drop existing tables first.")
@with_appcontext
def init_db_command(drop):
    if drop:
        db.drop_all()
        click.echo("Dropped the database tables.")

    db.create_all()
    click.echo("Created the database tables.")


@click.command("seed", help="Create the default roles and user accounts.")
@with_appcontext
def seed_command():
    seed(IdentityStore(db.session))
    click.echo("Seeded roles and users.")


# -----------------------------------------------------------------------------


def init_app(app):
    app.cli.add_command(init_db_command)
    app.cli.add_command(seed_command)
