import functools

from .exceptions import ApiError

# -----------------------------------------------------------------------------


def fault_boundary(func):
    """Convert unexpected failures in a view method into an internal fault.

    :py:class:`ApiError` instances pass through untouched, as the view has
    already logged them. Anything else is handed to the view's `handle_fault`
    method along with the name of the decorated method, and the resulting
    error is raised in its place::

        class AuthorView(ApiView):
            @fault_boundary
            def get(self, id):
                ...

    :param func: The view method to decorate.
    :return: The decorated method.
    :rtype: function
    """

    @functools.wraps(func)
    def wrapped(self, *args, **kwargs):
        try:
            return func(self, *args, **kwargs)
        except ApiError:
            raise
        except Exception as e:
            raise self.handle_fault(func.__name__, e) from e

    return wrapped
