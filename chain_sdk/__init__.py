"""
Chain SDK - Python client for the Chain Core API.
"""
from .version import __version__
from .config import ClientConfig
from .context import Context
from .exceptions import (
    ChainError, APIError, BadURLError, ConnectivityError, HTTPError, JSONError
)
from .actions import (
    Action, Issue, SpendFromAccount, SpendAccountUnspentOutput,
    ControlWithAccount, ControlWithProgram, Retire
)
from .models import (
    Transaction, Input, Output, Template, SigningInstruction,
    WitnessComponent, KeyID, SubmitResponse, UnspentOutput
)
from .query import Query
from .transaction import Builder, Items, QueryBuilder, build_batch, submit_batch, submit
from .consumer import Consumer

__all__ = [
    "__version__",
    "ClientConfig",
    "Context",
    "ChainError",
    "APIError",
    "BadURLError",
    "ConnectivityError",
    "HTTPError",
    "JSONError",
    "Action",
    "Issue",
    "SpendFromAccount",
    "SpendAccountUnspentOutput",
    "ControlWithAccount",
    "ControlWithProgram",
    "Retire",
    "Transaction",
    "Input",
    "Output",
    "Template",
    "SigningInstruction",
    "WitnessComponent",
    "KeyID",
    "SubmitResponse",
    "UnspentOutput",
    "Query",
    "Builder",
    "Items",
    "QueryBuilder",
    "build_batch",
    "submit_batch",
    "submit",
    "Consumer",
]
