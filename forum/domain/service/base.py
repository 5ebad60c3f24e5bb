"""Base service class for domain services."""


class Service:
    """Base class for the forum's domain services.

    Services hold the rules that span aggregates: the vote toggle against
    the ledger, acceptance across a question and its answers, tag upkeep.
    They are request-scoped and talk to repositories only.
    """
