"""The ``flask shell`` replacement: a konch shell preloaded with the store."""

import click
import flask
import konch
from flask.cli import with_appcontext
from marshmallow import Schema

from . import schemas, views
from .identity import IdentityStore
from .models import db
from .repository import RepositoryBase

# -----------------------------------------------------------------------------

LOGO = r"""
  ____              _        _                        _    ____ ___
 | __ )  ___   ___ | | _____| |_ ___  _ __ ___       / \  |  _ \_ _|
 |  _ \ / _ \ / _ \| |/ / __| __/ _ \| '__/ _ \     / _ \ | |_) | |
 | |_) | (_) | (_) |   <\__ \ || (_) | | |  __/    / ___ \|  __/| |
 |____/ \___/ \___/|_|\_\___/\__\___/|_|  \___|   /_/   \_\_|  |___|
""".strip(
    "\n"
)

# -----------------------------------------------------------------------------


def get_schemas():
    return {
        name: value
        for name, value in vars(schemas).items()
        if isinstance(value, type)
        and issubclass(value, Schema)
        and value.__module__ == schemas.__name__
    }


def get_models():
    models = {
        mapper.class_.__name__: mapper.class_
        for mapper in db.Model.registry.mappers
    }
    return {
        "db": db,
        "session": db.session,
        "commit": db.session.commit,
        "rollback": db.session.rollback,
        "flush": db.session.flush,
        **models,
    }


def get_repositories():
    repositories = {
        name: value
        for name, value in vars(views).items()
        if isinstance(value, RepositoryBase)
    }
    repositories["identity"] = IdentityStore(db.session)
    return repositories


def get_banner(app, logo):
    database_uri = app.config["SQLALCHEMY_DATABASE_URI"]
    return (
        f"{logo}\n"
        f"Flask app: {click.style(app.name, fg='green')}, "
        f"Database: {click.style(database_uri, fg='green')}"
    )


def format_sections(sections):
    """Render each ``(title, names)`` pair as a bold title over its names."""
    lines = []
    for title, names in sections:
        if not names:
            continue

        lines.append(click.style(f"{title}:", bold=True))
        lines.append(", ".join(sorted(names, key=str.lower)))

    return "\n" + "\n".join(lines)


# -----------------------------------------------------------------------------


@click.command(
    help="Run a shell with the models, schemas and repositories loaded."
)
@click.option(
    "--shell", "-s", type=click.Choice(konch.SHELL_MAP.keys()), default="auto"
)
@click.option("--sqlalchemy-echo", is_flag=True)
@with_appcontext
def cli(shell, sqlalchemy_echo):
    app = flask.current_app._get_current_object()
    config = app.config

    if sqlalchemy_echo:
        db.engine.echo = True

    sections = [
        ("Flask", app.make_shell_context()),
        ("Schemas", get_schemas()),
        ("Models", get_models()),
        ("Repositories", get_repositories()),
    ]
    context = {}
    for _, section in sections:
        context.update(section)
    context.update(config["BOOKSTORE_SHELL_CONTEXT"])

    def format_context(full_context):
        known = set().union(*(section.keys() for _, section in sections))
        additional = full_context.keys() - known
        return format_sections(
            [(title, section.keys()) for title, section in sections]
            + [("Additional", additional)]
        )

    konch.start(
        context=context,
        context_format=(
            config["BOOKSTORE_SHELL_CONTEXT_FORMAT"] or format_context
        ),
        banner=get_banner(app, config["BOOKSTORE_SHELL_LOGO"] or LOGO),
        shell=shell,
        prompt=config["BOOKSTORE_SHELL_PROMPT"],
        output=config["BOOKSTORE_SHELL_OUTPUT"],
    )
