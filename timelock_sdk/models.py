"""
Data models for the Timelock SDK.
"""
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class _Model(BaseModel):
    class Config:
        populate_by_name = True
        frozen = True


class EncodedCall(_Model):
    """Calldata for a timelock call and the identifier of its operation"""
    calldata: str
    operation_id: str = Field(..., alias="operationId")


class BatchEntry(_Model):
    """One sub-operation of a batch"""
    target: str
    value: int
    data: str


class DecodedSchedule(_Model):
    function_name: Literal["schedule"] = Field("schedule", alias="functionName")
    target: str
    value: int
    data: str
    predecessor: str
    salt: str
    delay: int
    operation_id: str = Field(..., alias="operationId")


class DecodedScheduleBatch(_Model):
    function_name: Literal["scheduleBatch"] = Field("scheduleBatch", alias="functionName")
    operations: List[BatchEntry]
    predecessor: str
    salt: str
    delay: int
    operation_id: str = Field(..., alias="operationId")


class DecodedExecute(_Model):
    function_name: Literal["execute"] = Field("execute", alias="functionName")
    target: str
    value: int
    data: str
    predecessor: str
    salt: str
    operation_id: str = Field(..., alias="operationId")


class DecodedExecuteBatch(_Model):
    function_name: Literal["executeBatch"] = Field("executeBatch", alias="functionName")
    operations: List[BatchEntry]
    predecessor: str
    salt: str
    operation_id: str = Field(..., alias="operationId")


class DecodedCancel(_Model):
    function_name: Literal["cancel"] = Field("cancel", alias="functionName")
    operation_id: str = Field(..., alias="operationId")


DecodedCall = Annotated[
    Union[DecodedSchedule, DecodedScheduleBatch, DecodedExecute, DecodedExecuteBatch, DecodedCancel],
    Field(discriminator="function_name"),
]


class MultiSendEntry(_Model):
    """
    One packed MultiSend sub-transaction

    operation is 0 for CALL and 1 for DELEGATECALL.
    """
    operation: int
    to: str
    value: int
    data: str


class MultiSendParseResult(_Model):
    entries: List[MultiSendEntry]
    truncated: bool = False


class OperationStatus(_Model):
    """On-chain state of a timelock operation"""
    is_operation: bool = Field(..., alias="isOperation")
    is_pending: bool = Field(..., alias="isPending")
    is_ready: bool = Field(..., alias="isReady")
    is_done: bool = Field(..., alias="isDone")
    timestamp: int


class DecodedParam(_Model):
    name: str
    type: str
    value: Any
    display: str


class DecodedInnerCalldata(_Model):
    """Best-effort description of an arbitrary call payload"""
    status: Literal["decoded", "signature-only", "unknown"]
    source: Optional[Literal["local", "4byte"]] = None
    selector: Optional[str] = None
    function_name: Optional[str] = Field(None, alias="functionName")
    signature: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    risk_level: Optional[str] = Field(None, alias="riskLevel")
    params: Optional[List[DecodedParam]] = None
    summary: Optional[str] = None


class SafeConfirmation(BaseModel):
    owner: str
    submission_date: str = Field(..., alias="submissionDate")
    signature: Optional[str] = None

    class Config:
        populate_by_name = True


class SafeTransaction(BaseModel):
    """Multisig transaction as returned by the Safe Transaction Service"""
    safe_tx_hash: str = Field(..., alias="safeTxHash")
    to: str
    data: Optional[str] = None
    value: int = 0
    nonce: int
    confirmations: List[SafeConfirmation] = []
    confirmations_required: Optional[int] = Field(None, alias="confirmationsRequired")
    submission_date: str = Field(..., alias="submissionDate")
    is_executed: bool = Field(False, alias="isExecuted")

    class Config:
        populate_by_name = True


class SafeInfo(BaseModel):
    nonce: int
    threshold: int
    owners: List[str]

    class Config:
        populate_by_name = True


class TimelockSafeTransaction(BaseModel):
    """Safe transaction paired with the timelock calldata it carries"""
    transaction: SafeTransaction
    timelock_calldata: str = Field(..., alias="timelockCalldata")

    class Config:
        populate_by_name = True


class ScheduledOperation(BaseModel):
    """
    A schedule or scheduleBatch call found in a Safe's history

    safe_status is "pending" while the Safe transaction still collects
    signatures and "executed" once the operation has reached the timelock,
    in which case timelock_status holds its on-chain state (None if the
    read failed).
    """
    safe_tx_hash: str = Field(..., alias="safeTxHash")
    nonce: int
    timelock_calldata: str = Field(..., alias="timelockCalldata")
    decoded: Annotated[Union[DecodedSchedule, DecodedScheduleBatch], Field(discriminator="function_name")]
    operation_id: str = Field(..., alias="operationId")
    submission_date: str = Field(..., alias="submissionDate")
    safe_status: Literal["pending", "executed"] = Field(..., alias="safeStatus")
    confirmations: int = 0
    confirmations_required: Optional[int] = Field(None, alias="confirmationsRequired")
    timelock_status: Optional[OperationStatus] = Field(None, alias="timelockStatus")

    class Config:
        populate_by_name = True


class TxReceipt(BaseModel):
    """Transaction receipt from the blockchain"""
    tx_hash: str = Field(..., alias="transactionHash")
    block_number: int = Field(..., alias="blockNumber")
    block_hash: str = Field(..., alias="blockHash")
    status: int
    gas_used: int = Field(..., alias="gasUsed")
    from_address: Optional[str] = Field(None, alias="from")
    to_address: Optional[str] = Field(None, alias="to")
    logs: List[Dict[str, Any]] = []

    class Config:
        populate_by_name = True
