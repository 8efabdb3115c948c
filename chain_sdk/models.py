"""
Data models for the Chain SDK.

Field names match the snake_case names used on the wire. Fields the server
leaves out stay None and are omitted again by ``to_payload``.
"""
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from .exceptions import APIError
from .utils import is_yes


class ChainModel(BaseModel):
    """Common base for objects returned by Chain Core."""
    model_config = ConfigDict(extra="ignore")

    def to_payload(self) -> Dict[str, Any]:
        """Serialize to a JSON-ready dictionary, omitting unset fields."""
        return self.model_dump(mode="json", exclude_none=True)


class _ErrorFields(ChainModel):
    code: Optional[str] = None
    message: Optional[str] = None
    detail: Optional[str] = None

    @property
    def error(self) -> Optional[APIError]:
        """The per-item error, or None when the item succeeded."""
        if self.code is None:
            return None
        return APIError(self.code, self.message, self.detail)


class Input(ChainModel):
    """
    A transaction input.

    ``account_id`` and ``account_tags`` are only present for inputs spent
    from an account; ``issuance_program`` only for issuances.
    """
    model_config = ConfigDict(frozen=True)

    action: str
    amount: int
    asset_id: str
    asset_tags: Optional[Dict[str, Any]] = None
    asset_is_local: Optional[str] = None
    account_id: Optional[str] = None
    account_tags: Optional[Dict[str, Any]] = None
    issuance_program: Optional[str] = None
    input_witness: Optional[List[str]] = None
    reference_data: Optional[Dict[str, Any]] = None
    is_local: Optional[str] = None

    @property
    def local(self) -> bool:
        return is_yes(self.is_local)


class Output(ChainModel):
    """
    A transaction output.

    Outputs controlled by an account carry ``account_id`` (and ``purpose``);
    outputs paid to a bare control program carry only ``control_program``.
    """
    model_config = ConfigDict(frozen=True)

    action: str
    purpose: Optional[str] = None
    amount: int
    asset_id: str
    asset_tags: Optional[Dict[str, Any]] = None
    asset_is_local: Optional[str] = None
    control_program: Optional[str] = None
    position: int
    account_id: Optional[str] = None
    account_tags: Optional[Dict[str, Any]] = None
    reference_data: Optional[Dict[str, Any]] = None
    is_local: Optional[str] = None

    @property
    def local(self) -> bool:
        return is_yes(self.is_local)


class Transaction(ChainModel):
    """A transaction committed to the blockchain"""
    model_config = ConfigDict(frozen=True)

    id: str
    block_id: Optional[str] = None
    block_height: Optional[int] = None
    position: Optional[int] = None
    timestamp: Optional[datetime] = None
    inputs: List[Input] = Field(default_factory=list)
    outputs: List[Output] = Field(default_factory=list)
    reference_data: Optional[Dict[str, Any]] = None
    is_local: Optional[str] = None

    @property
    def local(self) -> bool:
        """True if one or more inputs or outputs belong to this Chain Core."""
        return is_yes(self.is_local)

    @field_serializer("timestamp")
    def serialize_timestamp(self, value: Optional[datetime]) -> Optional[str]:
        # RFC 3339 as Chain Core writes it: trailing zeros of the fraction trimmed, UTC as "Z"
        if value is None:
            return None
        text = value.strftime("%Y-%m-%dT%H:%M:%S")
        if value.microsecond:
            text += "." + f"{value.microsecond:06d}".rstrip("0")
        offset = value.utcoffset()
        if offset is None or offset == timedelta(0):
            return text + "Z"
        return text + value.isoformat()[-6:]


class KeyID(ChainModel):
    """An extended public key and derivation path that can sign an input"""
    xpub: str
    derivation_path: List[str] = Field(default_factory=list)


class WitnessComponent(ChainModel):
    """
    One piece of data needed to unlock an input.

    ``data`` is set for type "data"; ``quorum``, ``keys``, ``program`` and
    ``signatures`` are set for type "signature". Signers fill in
    ``signatures`` in place.
    """
    type: str
    data: Optional[str] = None
    quorum: Optional[int] = None
    keys: Optional[List[KeyID]] = None
    program: Optional[str] = None
    signatures: Optional[List[Optional[str]]] = None


class SigningInstruction(ChainModel):
    """Signing instructions for the input at ``position``"""
    asset_id: str
    amount: int
    position: int
    witness_components: List[WitnessComponent] = Field(default_factory=list)


class Template(_ErrorFields):
    """
    A partially built transaction returned by build-transaction.

    In a batch response a failed item comes back with ``code``, ``message``
    and ``detail`` set and no transaction data.
    """
    raw_transaction: Optional[str] = None
    signing_instructions: List[SigningInstruction] = Field(default_factory=list)
    local: Optional[bool] = None
    allow_additional_actions: Optional[bool] = None


class SubmitResponse(_ErrorFields):
    """Result of submitting one transaction: ``id`` on success, error fields otherwise"""
    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None


class UnspentOutput(ChainModel):
    """Reference to an unspent output, as used by spend_account_unspent_output"""
    transaction_id: str
    position: int
    id: Optional[str] = None
    amount: Optional[int] = None
    asset_id: Optional[str] = None
    account_id: Optional[str] = None
    control_program: Optional[str] = None
