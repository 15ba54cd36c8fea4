"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class PublishError(AdapterError):
    """Vote event could not be delivered."""

    pass
