"""Domain errors raised by the subscription core."""


class SubTrackError(Exception):
    """Base class for all domain errors."""


class ValidationError(SubTrackError, ValueError):
    """Malformed input to a create or price-change operation."""


class NotFoundError(SubTrackError, LookupError):
    """The operation targets a subscription id that does not exist."""

    def __init__(self, resource: str, resource_id: object):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} {resource_id} not found")
