"""
Domain exceptions shared by services and mapped to HTTP responses in app.main.
"""


class TripValidationError(ValueError):
    """Input rejected before any store is touched."""

    pass


class RemoteStoreError(Exception):
    """The remote entity store could not complete a call."""

    pass


class EntityNotFoundError(Exception):
    """Entity does not exist in either store."""

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.entity_id = entity_id


class LocalOnlyOperationError(Exception):
    """Operation needs a remote trip but the id routes to the local store."""

    pass


class TripAccessError(Exception):
    """Identity may not read or change this trip."""

    pass
