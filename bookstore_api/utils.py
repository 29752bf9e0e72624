"""Small helpers shared by the settings and the views."""

TRUTHY_VALUES = frozenset(("1", "true", "yes", "on"))


def env_flag(value, default=False):
    """Read an on/off environment variable; unset means `default`."""
    if value is None:
        return default

    return value.strip().lower() in TRUTHY_VALUES


def iter_validation_errors(messages, path=()):
    """Flatten marshmallow's nested error messages.

    Yields ``(message, path)`` pairs, where `path` is the tuple of keys from
    the top of the payload down to the offending field, e.g.
    ``("Shorter than minimum length 1.", ("firstName",))``.
    """
    if not isinstance(messages, dict):
        for message in messages:
            yield message, path
        return

    for key, nested in messages.items():
        yield from iter_validation_errors(nested, (*path, key))
