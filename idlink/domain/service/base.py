"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold logic that spans several entities or sources,
    such as merging profiles from every linked identity.
    """

    pass
