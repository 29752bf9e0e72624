from .models import db

# -----------------------------------------------------------------------------


class RepositoryBase:
    """Base class for resource repositories.

    A repository is the only way a resource view reaches the entity store.
    Reads return entities or ``None``; writes return a boolean success flag.
    Unrecoverable store errors are not handled here; they propagate to the
    view's fault boundary.
    """

    def find_all(self):
        """Retrieve every entity.

        :return: The entities, possibly empty.
        :rtype: list
        """
        raise NotImplementedError()

    def find_by_id(self, id):
        """Retrieve an entity by ID.

        :param int id: The entity ID.
        :return: The entity, or ``None`` if there is none with that ID.
        """
        raise NotImplementedError()

    def exists(self, id):
        """Check whether an entity with the given ID exists.

        :param int id: The entity ID.
        :rtype: bool
        """
        raise NotImplementedError()

    def create(self, item):
        """Persist a new entity, assigning its ID.

        :param object item: The transient entity.
        :return: Whether the entity was stored.
        :rtype: bool
        """
        raise NotImplementedError()

    def update(self, item):
        """Replace the stored entity with the same ID as `item`.

        :param object item: The entity carrying the new state and its ID.
        :return: Whether a stored entity was replaced.
        :rtype: bool
        """
        raise NotImplementedError()

    def delete(self, item):
        """Remove a stored entity.

        :param object item: The persistent entity.
        :return: Whether the entity was removed.
        :rtype: bool
        """
        raise NotImplementedError()


# -----------------------------------------------------------------------------


class ModelRepository(RepositoryBase):
    """Repository for a declarative SQLAlchemy model.

    Instances hold no per-request state, so a single instance can be shared
    by view classes. The session is resolved on each access.

    :param model: The declarative SQLAlchemy model.
    """

    def __init__(self, model):
        self.model = model

    @property
    def session(self):
        """Convenience property for the current SQLAlchemy session."""
        return db.session

    @property
    def query(self):
        return self.session.query(self.model)

    def find_all(self):
        return self.query.order_by(self.model.id).all()

    def find_by_id(self, id):
        return self.query.filter(self.model.id == id).one_or_none()

    def exists(self, id):
        exists_query = self.query.filter(self.model.id == id).exists()
        return self.session.query(exists_query).scalar()

    def create(self, item):
        self.session.add(item)
        self.save()
        return item.id is not None

    def update(self, item):
        if item.id is None or not self.exists(item.id):
            return False

        self.session.merge(item)
        self.save()
        return True

    def delete(self, item):
        id = item.id

        self.session.delete(item)
        self.save()
        return not self.exists(id)

    def save(self):
        """Commit pending changes, rolling the session back on failure."""
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
