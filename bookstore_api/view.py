import flask
import logging
from flask.views import MethodView
from marshmallow import ValidationError

from .api import get_item_endpoint
from .authentication import NoOpAuthentication
from .authorization import NoOpAuthorization
from .decorators import fault_boundary
from .exceptions import InternalFault, InvalidInput, NotFound

# -----------------------------------------------------------------------------

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------


class ApiView(MethodView):
    """Base class for the bookstore's JSON views.

    Every request is authenticated and then authorized before the HTTP
    method handler runs. The helpers here read JSON objects from the request,
    write JSON responses, and log each outcome prefixed with where it
    happened, e.g. ``"AuthorView - update: updated Author 5"``.
    """

    #: Sets the request credentials; see :py:class:`BearerAuthentication`.
    authentication = NoOpAuthentication()
    #: Decides whether the credentials allow the request.
    authorization = NoOpAuthorization()

    def dispatch_request(self, **kwargs):
        self.authentication.authenticate_request()
        self.authorization.authorize_request()

        return super().dispatch_request(**kwargs)

    def get_location_name(self, action):
        return f"{type(self).__name__} - {action}"

    def log_success(self, action, message, *args):
        logger.info("%s: " + message, self.get_location_name(action), *args)

    def reject(self, action, error, message, *args):
        """Log a refused request at WARNING and hand back `error` to raise.

        Use as ``raise self.reject("update", InvalidInput(...), "...")``.
        """
        logger.warning(
            "%s: " + message, self.get_location_name(action), *args
        )
        return error

    def fail(self, action, message, *args):
        """Log a write the store refused; return the fault to raise."""
        logger.error("%s: " + message, self.get_location_name(action), *args)
        return InternalFault()

    def handle_fault(self, action, error):
        """Log an unexpected exception with its traceback.

        :py:func:`fault_boundary` raises the returned
        :py:class:`InternalFault` in place of `error`.
        """
        logger.error(
            "%s: unexpected %s: %s",
            self.get_location_name(action),
            type(error).__name__,
            error,
            exc_info=error,
        )
        return InternalFault()

    def make_response(self, data, status=200):
        return flask.make_response(flask.jsonify(data), status)

    def make_empty_response(self):
        return flask.make_response("", 204)

    def get_request_data(self):
        """Return the request body if it is a JSON object, else ``None``.

        A missing body, a body that is not JSON, and JSON arrays, strings or
        ``null`` all count as no data.
        """
        data_raw = flask.request.get_json(silent=True)
        return data_raw if isinstance(data_raw, dict) else None

    def load(self, action, load_func, data_raw):
        """Run `load_func` over the body, turning failures into a 400.

        :raises InvalidInput: One entry per failed field.
        """
        try:
            return load_func(data_raw)
        except ValidationError as e:
            raise self.reject(
                action,
                InvalidInput.from_validation_error(
                    e, self.format_validation_error
                ),
                "rejected invalid data: %s",
                e.messages,
            ) from e

    def format_validation_error(self, message, path):
        # e.g. {"code": "invalid_data", "detail": "...",
        #       "source": {"pointer": "/firstName"}}
        return {
            "code": "invalid_data",
            "detail": message,
            "source": {"pointer": "/" + "/".join(str(key) for key in path)},
        }


class ResourceView(ApiView):
    """The CRUD protocol shared by every bookstore resource.

    Subclasses set a :py:attr:`repository`, a :py:attr:`mapper` and a
    :py:attr:`resource_name`, then map HTTP methods straight onto
    :py:meth:`list`, :py:meth:`retrieve`, :py:meth:`create`,
    :py:meth:`update` and :py:meth:`destroy`; see ``AuthorListView`` and
    ``AuthorView``. Resource rules live in
    :py:meth:`validate_references` and :py:meth:`validate_delete`.

    Each handler runs inside :py:func:`fault_boundary` and writes one log
    record per request: INFO on success, WARNING when the client is at
    fault, ERROR when the server is.
    """

    #: The :py:class:`RepositoryBase` for the resource.
    repository = None
    #: The :py:class:`Mapper` for the resource.
    mapper = None
    #: The resource name used in log messages.
    resource_name = None

    def make_created_response(self, data, item):
        response = self.make_response(data, 201)
        response.headers["Location"] = flask.url_for(
            get_item_endpoint(flask.request.endpoint), id=item.id
        )
        return response

    @fault_boundary
    def list(self):
        """Return every item.

        This is the standard ``GET`` handler on a list view.

        :return: An HTTP 200 response.
        :rtype: :py:class:`flask.Response`
        """
        items = self.repository.find_all()
        data_out = self.mapper.to_read_dtos(items)

        self.log_success(
            "list",
            "responded with %d %s items",
            len(items),
            self.resource_name,
        )
        return self.make_response(data_out)

    @fault_boundary
    def retrieve(self, id):
        """Retrieve an item by ID.

        This is the standard ``GET`` handler on a detail view.

        :param int id: The item ID.
        :return: An HTTP 200 response.
        :rtype: :py:class:`flask.Response`
        """
        item = self.repository.find_by_id(id)
        if item is None:
            raise self.reject(
                "retrieve",
                NotFound(),
                "%s %s not found",
                self.resource_name,
                id,
            )

        data_out = self.mapper.to_read_dto(item)

        self.log_success(
            "retrieve", "responded with %s %s", self.resource_name, id
        )
        return self.make_response(data_out)

    @fault_boundary
    def create(self):
        """Create a new item using the request data.

        This is the standard ``POST`` handler on a list view. Any ID in the
        request data is ignored.

        :return: An HTTP 201 response.
        :rtype: :py:class:`flask.Response`
        """
        data_raw = self.get_request_data()
        if data_raw is None:
            raise self.reject(
                "create",
                InvalidInput({"code": "invalid_body"}),
                "rejected empty %s",
                self.resource_name,
            )

        data_in = self.load("create", self.mapper.load_create_dto, data_raw)
        self.check_references("create", data_in)

        item = self.mapper.to_entity(data_in)
        if not self.repository.create(item):
            raise self.fail("create", "failed creating %s", self.resource_name)

        data_out = self.mapper.to_read_dto(item)

        self.log_success(
            "create", "created %s %s", self.resource_name, item.id
        )
        return self.make_created_response(data_out, item)

    @fault_boundary
    def update(self, id):
        """Replace the item for the specified ID with the request data.

        This is the standard ``PUT`` handler on a detail view. The request
        data must carry the same ID as the URL.

        :param int id: The item ID.
        :return: An HTTP 204 response.
        :rtype: :py:class:`flask.Response`
        """
        if id < 1:
            raise self.reject(
                "update",
                InvalidInput({"code": "invalid_id"}),
                "rejected %s ID %s",
                self.resource_name,
                id,
            )

        data_raw = self.get_request_data()
        if data_raw is None:
            raise self.reject(
                "update",
                InvalidInput({"code": "invalid_body"}),
                "rejected empty %s %s",
                self.resource_name,
                id,
            )

        if data_raw.get("id") != id:
            raise self.reject(
                "update",
                InvalidInput({"code": "invalid_id.mismatch"}),
                "rejected %s %s with body ID %r",
                self.resource_name,
                id,
                data_raw.get("id"),
            )

        data_in = self.load("update", self.mapper.load_update_dto, data_raw)
        self.check_references("update", data_in)

        item = self.mapper.to_entity(data_in)
        if not self.repository.update(item):
            raise self.fail(
                "update", "failed updating %s %s", self.resource_name, id
            )

        self.log_success("update", "updated %s %s", self.resource_name, id)
        return self.make_empty_response()

    @fault_boundary
    def destroy(self, id):
        """Delete the item for the specified ID.

        :param int id: The item ID.
        :return: An HTTP 204 response.
        :rtype: :py:class:`flask.Response`
        """
        if id < 1:
            raise self.reject(
                "destroy",
                InvalidInput({"code": "invalid_id"}),
                "rejected %s ID %s",
                self.resource_name,
                id,
            )

        if not self.repository.exists(id):
            raise self.reject(
                "destroy",
                NotFound(),
                "%s %s not found",
                self.resource_name,
                id,
            )

        item = self.repository.find_by_id(id)

        errors = tuple(self.validate_delete(item))
        if errors:
            raise self.reject(
                "destroy",
                InvalidInput(*errors),
                "refused deleting %s %s",
                self.resource_name,
                id,
            )

        if not self.repository.delete(item):
            raise self.fail(
                "destroy", "failed deleting %s %s", self.resource_name, id
            )

        self.log_success("destroy", "deleted %s %s", self.resource_name, id)
        return self.make_empty_response()

    def check_references(self, action, data):
        errors = tuple(self.validate_references(data))
        if errors:
            raise self.reject(
                action,
                InvalidInput(*errors),
                "rejected %s with unknown references",
                self.resource_name,
            )

    def validate_references(self, data):
        """Check that loaded data refers to existing entities.

        Override this for resources with foreign keys.

        :param dict data: The loaded create or update data.
        :return: Formatted errors for each unresolved reference.
        :rtype: iterable
        """
        return ()

    def validate_delete(self, item):
        """Check that an item may be deleted.

        Override this to block deletes that would break other entities.

        :param object item: The item about to be deleted.
        :return: Formatted errors explaining why the item must stay.
        :rtype: iterable
        """
        return ()
