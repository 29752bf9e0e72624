import logging

# -----------------------------------------------------------------------------

PACKAGE_LOGGER_NAME = "bookstore_api"

# -----------------------------------------------------------------------------


def configure_logging(app):
    """Send the package's log records to stderr.

    The level and format come from the ``BOOKSTORE_LOG_LEVEL`` and
    ``BOOKSTORE_LOG_FORMAT`` config values. Records still propagate to the
    root logger, so test log capture sees them. Calling this again replaces
    the handler instead of adding another.

    :param app: The Flask application object.
    :type app: :py:class:`flask.Flask`
    :return: The package logger.
    :rtype: :py:class:`logging.Logger`
    """
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    logger.setLevel(app.config["BOOKSTORE_LOG_LEVEL"])

    for handler in list(logger.handlers):
        if getattr(handler, "is_bookstore_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(app.config["BOOKSTORE_LOG_FORMAT"]))
    handler.is_bookstore_handler = True
    logger.addHandler(handler)

    return logger
