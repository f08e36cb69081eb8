"""
Abstract base class for feed server clients.

New clients should inherit from FeedClient and implement the entry
operations plus entity_from_xml.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..core.types import Entity


class FeedClient(ABC):
    """Abstract base class for feed server clients.

    Concrete implementations (e.g., HttpFeedClient) map each operation onto
    the server's transport.
    """

    @abstractmethod
    def get_feed(self, url: str) -> list[Entity]:
        """Fetch every entity of the feed at url, in server order."""
        raise NotImplementedError

    @abstractmethod
    def get_entry(self, url: str) -> Entity:
        raise NotImplementedError

    @abstractmethod
    def insert_entry(self, url: str, entity: Entity) -> Entity:
        """Add an entity to the feed at url.

        Returns:
            The entity as stored by the server
        """
        raise NotImplementedError

    @abstractmethod
    def update_entry(self, url: str, entity: Entity) -> Entity:
        """Replace the entry at url with entity.

        Returns:
            The entity as stored by the server
        """
        raise NotImplementedError

    @abstractmethod
    def delete_entry(self, url: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def entity_from_xml(self, text: str) -> Entity:
        """Parse an entry document into an Entity."""
        raise NotImplementedError

    def close(self) -> None:
        """Release any held connections."""
