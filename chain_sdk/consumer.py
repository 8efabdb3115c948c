"""
Transaction consumers - named cursors over the transaction feed.

A consumer remembers how far a client has read through the transactions
matching its filter, so that a notification loop can resume where it left
off. Chain Core stores the cursor and only lets it move forward.
"""
import logging
from typing import Optional

from pydantic import ConfigDict

from .context import Context
from .models import ChainModel
from .utils import new_client_token

logger = logging.getLogger(__name__)

CREATE_ENDPOINT = "create-transaction-consumer"
GET_ENDPOINT = "get-consumer"
UPDATE_ENDPOINT = "update-consumer"


class Consumer(ChainModel):
    """
    A server-side cursor over transactions matching ``filter``.

    Attributes:
        id: Unique consumer ID
        alias: User supplied unique name
        filter: Transaction filter expression
        order: Iteration order, currently always "asc"
        after: Position of the last processed transaction
    """
    model_config = ConfigDict(frozen=True)

    id: str
    alias: Optional[str] = None
    filter: Optional[str] = None
    order: Optional[str] = None
    after: Optional[str] = None

    @classmethod
    def create(cls, context: Context, alias: str, filter: str) -> "Consumer":
        """
        Register a new consumer.

        Args:
            context: Context to send the request with
            alias: Unique name for the consumer
            filter: Transaction filter expression

        Returns:
            The created consumer
        """
        body = {
            "alias": alias,
            "filter": filter,
            "client_token": new_client_token(),
        }
        consumer = context.request(CREATE_ENDPOINT, body, cls)
        logger.info(f"Created transaction consumer {consumer.id} ({alias})")
        return consumer

    @classmethod
    def get_by_id(cls, context: Context, id: str) -> "Consumer":
        """Fetch a consumer by ID."""
        return context.request(GET_ENDPOINT, {"id": id}, cls)

    @classmethod
    def get_by_alias(cls, context: Context, alias: str) -> "Consumer":
        """Fetch a consumer by alias."""
        return context.request(GET_ENDPOINT, {"alias": alias}, cls)

    def update(self, context: Context, after: str) -> "Consumer":
        """
        Move the consumer's cursor to ``after``.

        The current position is sent as ``previous_after`` so the server can
        reject an update made from a stale copy. This object is left as is;
        use the returned consumer for the next update.

        Args:
            context: Context to send the request with
            after: New cursor position

        Returns:
            The consumer with its new position
        """
        body = {
            "id": self.id,
            "previous_after": self.after,
            "after": after,
        }
        updated = context.request(UPDATE_ENDPOINT, body, type(self))
        logger.debug(f"Consumer {self.id} moved from {self.after} to {updated.after}")
        return updated
