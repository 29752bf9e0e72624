import pytest
from click.testing import CliRunner
from flask.cli import ScriptInfo

from bookstore_api.models import Author
from bookstore_api.shell import LOGO, cli

# -----------------------------------------------------------------------------


@pytest.fixture
def shell_app(app, db):
    @app.shell_context_processor
    def bookstore_shell_context():
        return {"greeting": "hello", "store": "from-processor"}

    return app


@pytest.fixture
def run_shell(shell_app):
    runner = CliRunner()
    script_info = ScriptInfo(create_app=lambda: shell_app)

    def run(input=None, **config):
        shell_app.config.update(config)
        return runner.invoke(
            cli, ("--shell", "py"), obj=script_info, input=input
        )

    return run


# -----------------------------------------------------------------------------


def test_sections(run_shell):
    result = run_shell()
    assert result.exit_code == 0

    assert "Flask:" in result.output
    assert "app, g, greeting, store\n" in result.output
    assert "Schemas:" in result.output
    assert "AuthorCreateSchema, AuthorSchema" in result.output
    assert "Models:" in result.output
    assert "Author, Book, commit, db" in result.output
    assert "Repositories:" in result.output
    assert "author_repository, book_repository, identity" in result.output
    assert "Additional:" not in result.output


def test_banner(app, run_shell):
    result = run_shell()
    assert LOGO.splitlines()[0] in result.output
    assert app.config["SQLALCHEMY_DATABASE_URI"] in result.output


def test_custom_logo(run_shell):
    result = run_shell(BOOKSTORE_SHELL_LOGO="Bookstore staging")
    assert "Bookstore staging" in result.output


def test_models_usable(db, run_shell):
    db.session.add(Author(first_name="Fred", last_name="Brooks"))
    db.session.commit()

    result = run_shell(input="author_repository.find_by_id(1).last_name")
    assert ">>> 'Brooks'" in result.output


def test_configured_context(run_shell):
    result = run_shell(
        input="isbn\nstore",
        BOOKSTORE_SHELL_CONTEXT={"isbn": "0201835959", "store": "configured"},
    )
    assert "Additional:" in result.output
    assert "\nisbn\n" in result.output
    assert ">>> '0201835959'" in result.output
    assert ">>> 'configured'" in result.output


def test_prompt(run_shell):
    result = run_shell(BOOKSTORE_SHELL_PROMPT="books> ")
    assert "books> " in result.output


def test_context_format(run_shell):
    result = run_shell(
        BOOKSTORE_SHELL_CONTEXT_FORMAT=lambda context: "no listing"
    )
    assert "no listing" in result.output
    assert "Models:" not in result.output
