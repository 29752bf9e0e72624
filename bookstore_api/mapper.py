class Mapper:
    """Project entities to and from their wire shapes.

    Each resource has three wire shapes: a read shape returned to clients, a
    create shape without an ID, and an update shape that requires one. The
    mapper holds a :py:class:`marshmallow.Schema` for each and performs no
    I/O of its own.

    :param model: The entity class built by :py:meth:`to_entity`.
    :param read_schema: The schema for the read shape.
    :param create_schema: The schema for the create shape.
    :param update_schema: The schema for the update shape.
    """

    def __init__(self, model, read_schema, create_schema, update_schema):
        self.model = model
        self.read_schema = read_schema
        self.create_schema = create_schema
        self.update_schema = update_schema

    def to_read_dto(self, item):
        return self.read_schema.dump(item)

    def to_read_dtos(self, items):
        return self.read_schema.dump(items, many=True)

    def load_create_dto(self, data_raw):
        """Validate a create payload.

        :raises marshmallow.ValidationError: If the payload is invalid.
        :return: The loaded data, keyed by entity attribute name.
        :rtype: dict
        """
        return self.create_schema.load(data_raw)

    def load_update_dto(self, data_raw):
        """Validate an update payload.

        :raises marshmallow.ValidationError: If the payload is invalid.
        :return: The loaded data, keyed by entity attribute name.
        :rtype: dict
        """
        return self.update_schema.load(data_raw)

    def to_entity(self, data):
        """Build a transient entity from loaded create or update data."""
        return self.model(**data)
