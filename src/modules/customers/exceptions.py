"""Customer domain exceptions.

Raised by the aggregate, its value objects and the repositories when a
business rule is violated.  The API layer (Views) catches these and
translates them into appropriate HTTP responses.

All of them are deterministic: retrying the same call fails the same way.
"""

from __future__ import annotations


class CustomerDomainError(Exception):
    """Base class for every customer rule violation."""


class InvalidCustomerData(CustomerDomainError):
    """A name or value object failed its format/length rule."""


class DuplicateCustomerData(CustomerDomainError):
    """The value being added is already present on the same customer."""


class CustomerDataNotFound(CustomerDomainError):
    """A remove/set-primary call targets a value the customer does not have."""


class CustomerNotFound(CustomerDataNotFound):
    """No customer is stored under the requested ID."""


class CustomerInvariantViolation(CustomerDomainError):
    """The operation would break a structural rule of the aggregate.

    Removing the last contact channel, activating an active customer and
    failing the pre-persistence completeness check all land here.
    """


class DocumentAlreadyInUse(CustomerDomainError):
    """A document number is already registered to another customer."""
