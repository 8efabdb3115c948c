"""
Transactions - building, submitting and querying.

Typical flow:

    >>> template = Builder().add_action(Issue(asset_alias="gold", amount=100)).build(ctx)
    >>> # ... sign the template with an external signer ...
    >>> response = submit(ctx, template)
"""
import logging
from typing import Any, ClassVar, Dict, List, Optional

from pydantic import Field

from .actions import Action
from .context import Context, batch_payloads
from .exceptions import JSONError
from .models import (
    Input, KeyID, Output, SigningInstruction, SubmitResponse,
    Template, Transaction, WitnessComponent
)
from .query import BaseQueryBuilder, PagedItems

logger = logging.getLogger(__name__)

BUILD_ENDPOINT = "build-transaction"
SUBMIT_ENDPOINT = "submit-transaction"
LIST_ENDPOINT = "list-transactions"

# Time-to-live the server applies when a builder's ttl is 0
DEFAULT_TTL_MS = 300000

__all__ = [
    "Builder", "Items", "QueryBuilder", "build_batch", "submit_batch", "submit",
    "Transaction", "Input", "Output", "Template", "SigningInstruction",
    "WitnessComponent", "KeyID", "SubmitResponse", "DEFAULT_TTL_MS",
]


class Items(PagedItems):
    """A page of transactions from list-transactions."""
    endpoint: ClassVar[str] = LIST_ENDPOINT

    items: List[Transaction] = Field(default_factory=list)


class QueryBuilder(BaseQueryBuilder):
    """
    Builds a list-transactions query.

    Example:
        >>> items = QueryBuilder().set_ascending().set_start_time(t1).execute(ctx)
        >>> for tx in items.iter_items():
        ...     print(tx.id)
    """

    def set_start_time(self, time: int) -> "QueryBuilder":
        """Only return transactions at or after ``time`` (ms since epoch)."""
        self.next.start_time = time
        return self

    def set_end_time(self, time: int) -> "QueryBuilder":
        """Only return transactions before ``time`` (ms since epoch)."""
        self.next.end_time = time
        return self

    def set_ascending(self) -> "QueryBuilder":
        """Return transactions oldest first."""
        self.next.order = "asc"
        return self

    def set_timeout(self, timeout_ms: int) -> "QueryBuilder":
        """Server side timeout for long-polling ascending queries."""
        self.next.timeout = timeout_ms
        return self

    def execute(self, context: Context) -> Items:
        """
        Run the query and return the first page.

        Args:
            context: Context to send the request with

        Returns:
            First page of transactions
        """
        items = Items(next=self.next)
        items.set_context(context)
        return items.get_page()


class Builder:
    """
    Draft of a transaction to be built by Chain Core.

    A builder is a caller-owned accumulator; it is not safe to mutate the
    same builder from several threads.
    """

    def __init__(self, base_transaction: Optional[str] = None):
        """
        Args:
            base_transaction: Raw transaction hex to extend with more actions
        """
        self.base_transaction = base_transaction
        self.actions: List[Action] = []
        self.reference_data: Optional[Dict[str, Any]] = None
        self.ttl = 0

    def set_base_transaction(self, raw_transaction: str) -> "Builder":
        self.base_transaction = raw_transaction
        return self

    def add_action(self, action: Action) -> "Builder":
        self.actions.append(action)
        return self

    def add_reference_data_field(self, key: str, value: Any) -> "Builder":
        """Add a key/value pair to the transaction's reference data."""
        if self.reference_data is None:
            self.reference_data = {}
        self.reference_data[key] = value
        return self

    def set_reference_data(self, reference_data: Dict[str, Any]) -> "Builder":
        self.reference_data = reference_data
        return self

    def set_ttl(self, ms: int) -> "Builder":
        """
        Set how long the built transaction's reserved outputs stay reserved.

        0 leaves the choice to the server (DEFAULT_TTL_MS).
        """
        self.ttl = ms
        return self

    def to_payload(self) -> Dict[str, Any]:
        """Serialize the builder as one build-transaction request item."""
        payload: Dict[str, Any] = {
            "actions": batch_payloads(self.actions),
            "ttl": self.ttl,
        }
        if self.base_transaction is not None:
            payload["base_transaction"] = self.base_transaction
        if self.reference_data is not None:
            payload["reference_data"] = self.reference_data
        return payload

    def build(self, context: Context) -> Template:
        """
        Build this transaction.

        Args:
            context: Context to send the request with

        Returns:
            Template ready for signing

        Raises:
            APIError: If the server could not build the transaction
        """
        return context.singleton_batch_request(BUILD_ENDPOINT, self.to_payload(), Template)


def build_batch(context: Context, builders: List[Builder]) -> List[Template]:
    """
    Build several transactions with one request.

    A failed item does not fail the batch: it comes back as a Template whose
    ``code`` is set. Results are in the same order as ``builders``.

    Args:
        context: Context to send the request with
        builders: Transaction drafts

    Returns:
        One Template per builder
    """
    templates = context.request(BUILD_ENDPOINT, batch_payloads(builders), List[Template])
    _check_batch_length(BUILD_ENDPOINT, builders, templates)
    failed = sum(1 for template in templates if template.code is not None)
    if failed:
        logger.warning(f"{failed} of {len(templates)} transactions failed to build")
    return templates


def submit_batch(context: Context, templates: List[Template]) -> List[SubmitResponse]:
    """
    Submit several signed templates with one request.

    Responses are matched to templates by index only; response ``i`` belongs
    to ``templates[i]``. Each response has either ``id`` or ``code`` set.

    Args:
        context: Context to send the request with
        templates: Signed templates

    Returns:
        One SubmitResponse per template, in order

    Raises:
        JSONError: If the server returned a different number of responses
    """
    body = {"transactions": batch_payloads(templates)}
    responses = context.request(SUBMIT_ENDPOINT, body, List[SubmitResponse])
    _check_batch_length(SUBMIT_ENDPOINT, templates, responses)
    return responses


def submit(context: Context, template: Template) -> SubmitResponse:
    """
    Submit one signed template.

    Args:
        context: Context to send the request with
        template: Signed template

    Returns:
        The successful SubmitResponse

    Raises:
        APIError: If the response carries an error code
    """
    response = submit_batch(context, [template])[0]
    if response.code is not None:
        logger.error(f"Transaction submission failed: {response.code} {response.message}")
        raise response.error
    logger.info(f"Transaction submitted: {response.id}")
    return response


def _check_batch_length(endpoint: str, sent: List[Any], received: List[Any]) -> None:
    if len(received) != len(sent):
        raise JSONError(f"{endpoint} returned {len(received)} results for {len(sent)} items")
