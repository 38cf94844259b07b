"""Destination choices offered when a resident leaves."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DestinationCatalog:
    """Fixed list of destinations used to shape exit input."""

    destinations: tuple[str, ...]

    def search(self, term: str | None = None) -> list[str]:
        """Return destinations containing ``term``, ignoring case."""
        needle = (term or "").strip().lower()
        return [d for d in self.destinations if needle in d.lower()]
