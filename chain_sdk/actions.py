"""
Actions accepted by the build-transaction endpoint.

Each action kind is its own model carrying only the fields that kind
accepts. Field names are the wire names, so ``to_payload`` is a plain dump
of the fields that were set, plus any raw parameters.
"""
from typing import Any, Dict, Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from .models import UnspentOutput
from .utils import new_client_token

# Control program that makes an output permanently unspendable
RETIRE_PROGRAM = "6a"

A = TypeVar("A", bound="Action")


class Action(BaseModel):
    """
    Base class for transaction builder actions.

    Every action gets a fresh ``client_token`` so that a retried build
    request cannot be applied twice.
    """
    model_config = ConfigDict(extra="forbid")

    type: str
    client_token: str = Field(default_factory=new_client_token)
    reference_data: Optional[Dict[str, Any]] = None

    _parameters: Dict[str, Any] = PrivateAttr(default_factory=dict)

    def add_reference_data_field(self: A, key: str, value: Any) -> A:
        """Add a single key/value pair to the action's reference data."""
        if self.reference_data is None:
            self.reference_data = {}
        self.reference_data[key] = value
        return self

    def set_reference_data(self: A, reference_data: Dict[str, Any]) -> A:
        """Replace the action's reference data."""
        self.reference_data = reference_data
        return self

    def set_parameter(self: A, key: str, value: Any) -> A:
        """
        Set a raw request parameter.

        Raw parameters are copied into the payload as-is and take precedence
        over typed fields with the same name.
        """
        self._parameters[key] = value
        return self

    def to_payload(self) -> Dict[str, Any]:
        """
        Serialize the action for the wire.

        Returns:
            Dictionary with ``type``, ``client_token``, every field that was
            set and the raw parameters
        """
        payload = self.model_dump(exclude_none=True)
        payload.update(self._parameters)
        return payload


class _AssetAmountAction(Action):
    asset_alias: Optional[str] = None
    asset_id: Optional[str] = None
    amount: Optional[int] = None

    def set_asset_alias(self: A, alias: str) -> A:
        self.asset_alias = alias
        return self

    def set_asset_id(self: A, asset_id: str) -> A:
        self.asset_id = asset_id
        return self

    def set_amount(self: A, amount: int) -> A:
        self.amount = amount
        return self


class _AccountAction(_AssetAmountAction):
    account_alias: Optional[str] = None
    account_id: Optional[str] = None

    def set_account_alias(self: A, alias: str) -> A:
        self.account_alias = alias
        return self

    def set_account_id(self: A, account_id: str) -> A:
        self.account_id = account_id
        return self


class Issue(_AssetAmountAction):
    """Issue new units of an asset."""
    type: Literal["issue"] = "issue"


class SpendFromAccount(_AccountAction):
    """Spend an amount of an asset held by an account."""
    type: Literal["spend_account"] = "spend_account"


class SpendAccountUnspentOutput(Action):
    """Spend one specific unspent output controlled by an account."""
    type: Literal["spend_account_unspent_output"] = "spend_account_unspent_output"
    transaction_id: Optional[str] = None
    position: Optional[int] = None

    def set_unspent_output(self, unspent_output: UnspentOutput) -> "SpendAccountUnspentOutput":
        """Point the action at an unspent output, copying its transaction id and position."""
        self.transaction_id = unspent_output.transaction_id
        self.position = unspent_output.position
        return self

    def set_transaction_id(self, transaction_id: str) -> "SpendAccountUnspentOutput":
        self.transaction_id = transaction_id
        return self

    def set_position(self, position: int) -> "SpendAccountUnspentOutput":
        self.position = position
        return self


class ControlWithAccount(_AccountAction):
    """Pay an amount of an asset to an account."""
    type: Literal["control_account"] = "control_account"


class ControlWithProgram(_AssetAmountAction):
    """Pay an amount of an asset to a control program."""
    type: Literal["control_program"] = "control_program"
    control_program: Optional[str] = None

    def set_control_program(self, control_program: str) -> "ControlWithProgram":
        self.control_program = control_program
        return self


class Retire(_AssetAmountAction):
    """
    Remove an amount of an asset from circulation.

    On the wire this is a control_program action paying to the retirement
    program, which no one can ever satisfy.
    """
    type: Literal["control_program"] = "control_program"
    control_program: Literal["6a"] = RETIRE_PROGRAM
