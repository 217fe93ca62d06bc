"""Domain layer for boojet application.

Services are imported from their own modules (``boojet.domain.account`` and
so on) so the store contract can depend on the entities without a cycle.
"""
