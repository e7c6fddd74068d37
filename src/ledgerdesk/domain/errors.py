"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


RECONCILIATION_FIELDS_REQUIRED = "customerName and monthKey are required"


def customer_not_found(customer_name: str) -> str:
    """Return message for a customer missing from the ledger."""
    return f"Customer '{customer_name}' not found"


def discount_customer_not_found(customer_name: str) -> str:
    """Return message for a customer missing from the discount tracker."""
    return f"Customer '{customer_name}' not found in discount tracker"


def person_not_found(name: str) -> str:
    """Return message for a person without any stock movements."""
    return f"No stock movements found for '{name}'"


def invalid_month_key(month_key: str) -> str:
    """Return message for an unrecognized month key."""
    return (
        f"Invalid month '{month_key}'. "
        "Use YYYY-MM or a month token like JAN25, JAN2025 or JAN"
    )


def duplicate_closed_customer(customer_name: str) -> str:
    """Return message when a customer is already marked closed."""
    return f"Customer '{customer_name}' is already closed"


def missing_columns(kind: str, columns: set[str]) -> str:
    """Return message for a CSV file lacking required columns."""
    return f"{kind} CSV file missing required columns: {', '.join(sorted(columns))}"
