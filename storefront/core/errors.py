# storefront/core/errors.py
from typing import Optional


class StorefrontError(Exception):
    """Base class for errors raised by the storefront core."""


class FetchFailure(StorefrontError):
    """A data store call failed or timed out.

    Raised to the immediate caller; callers keep whatever they already
    fetched and decide whether to retry.
    """

    def __init__(self, relation: str, message: str, cause: Optional[BaseException] = None):
        self.relation = relation
        self.message = message
        self.cause = cause
        super().__init__(f"Failed to fetch {relation}: {message}")


class UnknownSectionType(StorefrontError):
    def __init__(self, section_type: str):
        self.section_type = section_type
        super().__init__(f"Unknown section type: {section_type!r}")


class NotFoundError(StorefrontError):
    def __init__(self, entity: str, key: str):
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} not found: {key}")
