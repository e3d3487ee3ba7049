"""
Wire shapes exchanged with the rollup host and the JSON actions carried in
advance payloads.
"""

from __future__ import annotations
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


Status = Literal["accept", "reject"]

ADVANCE_STATE = "advance_state"
INSPECT_STATE = "inspect_state"


# ---------------------------
# Host -> application
# ---------------------------
class RequestMetadata(BaseModel):
    model_config = ConfigDict(extra="allow")

    msg_sender: Optional[str] = None
    epoch_index: Optional[int] = None
    input_index: Optional[int] = None
    block_number: Optional[int] = None
    timestamp: Optional[int] = None


class RequestData(BaseModel):
    model_config = ConfigDict(extra="allow")

    payload: str = "0x"
    metadata: Optional[RequestMetadata] = None


class RollupRequest(BaseModel):
    request_type: str
    data: RequestData = Field(default_factory=RequestData)


# ---------------------------
# Application -> host
# ---------------------------
class FinishBody(BaseModel):
    status: Status = "accept"


class OutputBody(BaseModel):
    payload: str


class VoucherBody(BaseModel):
    destination: str
    payload: str


# ---------------------------
# JSON actions
# ---------------------------
class AmountAction(BaseModel):
    amount: int

    @field_validator("amount", mode="before")
    @classmethod
    def _no_bool_amount(cls, v):
        # JSON true/false would otherwise pass as 1/0
        if isinstance(v, bool):
            raise ValueError("amount must be an integer, not a boolean")
        return v


class DepositAction(AmountAction):
    model_config = ConfigDict(extra="allow")

    action: Literal["deposit"]
    sender: str


class TransferAction(AmountAction):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    action: Literal["transfer"]
    sender: str = Field(alias="from")
    recipient: str = Field(alias="to")


class SettleAction(BaseModel):
    model_config = ConfigDict(extra="allow")

    win: str
    loss: str
