"""Instruction dispatch for the token program."""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from . import handlers, token_ops
from .errors import ErrorKind, ProgramError
from .instruction import InstructionKind
from .runtime import AccountInfo, Runtime

_log = logging.getLogger(__name__)

_Processor = Callable[[Sequence[AccountInfo], bytes, Runtime], None]

_PROCESSORS: dict[InstructionKind, _Processor] = {
    InstructionKind.INITIALIZE_MINT: lambda a, d, r: handlers.process_initialize_mint(a, d, True, r),
    InstructionKind.INITIALIZE_ACCOUNT: lambda a, d, r: token_ops.process_initialize_account(a, r),
    InstructionKind.INITIALIZE_MULTISIG: token_ops.process_initialize_multisig,
    InstructionKind.TRANSFER: lambda a, d, r: token_ops.process_transfer(a, d),
    InstructionKind.APPROVE: lambda a, d, r: token_ops.process_approve(a, d),
    InstructionKind.REVOKE: lambda a, d, r: handlers.process_revoke(a, d),
    InstructionKind.SET_AUTHORITY: lambda a, d, r: handlers.process_set_authority(a, d),
    InstructionKind.MINT_TO: lambda a, d, r: token_ops.process_mint_to(a, d),
    InstructionKind.BURN: lambda a, d, r: token_ops.process_burn(a, d),
    InstructionKind.CLOSE_ACCOUNT: lambda a, d, r: handlers.process_close_account(a),
    InstructionKind.FREEZE_ACCOUNT: lambda a, d, r: token_ops.process_freeze_account(a),
    InstructionKind.THAW_ACCOUNT: lambda a, d, r: token_ops.process_thaw_account(a),
    InstructionKind.TRANSFER_CHECKED: lambda a, d, r: token_ops.process_transfer_checked(a, d),
    InstructionKind.APPROVE_CHECKED: lambda a, d, r: token_ops.process_approve_checked(a, d),
    InstructionKind.MINT_TO_CHECKED: lambda a, d, r: token_ops.process_mint_to_checked(a, d),
    InstructionKind.BURN_CHECKED: lambda a, d, r: token_ops.process_burn_checked(a, d),
    InstructionKind.INITIALIZE_ACCOUNT2: token_ops.process_initialize_account2,
    InstructionKind.SYNC_NATIVE: lambda a, d, r: handlers.process_sync_native(a),
    InstructionKind.INITIALIZE_ACCOUNT3: token_ops.process_initialize_account3,
    InstructionKind.INITIALIZE_MULTISIG2: token_ops.process_initialize_multisig2,
    InstructionKind.INITIALIZE_MINT2: handlers.process_initialize_mint2,
    InstructionKind.GET_ACCOUNT_DATA_SIZE: lambda a, d, r: handlers.process_get_account_data_size(a, r),
    InstructionKind.INITIALIZE_IMMUTABLE_OWNER: lambda a, d, r: handlers.process_initialize_immutable_owner(a),
    InstructionKind.AMOUNT_TO_UI_AMOUNT: handlers.process_amount_to_ui_amount,
    InstructionKind.UI_AMOUNT_TO_AMOUNT: handlers.process_ui_amount_to_amount,
}


def process_instruction(
    program_id: bytes,
    accounts: Sequence[AccountInfo],
    instruction_data: bytes,
    runtime: Runtime | None = None,
) -> None:
    """Run one instruction: the first data byte selects it, the rest is its data.

    Raises ProgramError on failure; ``program_id`` is not consulted.
    """
    data = bytes(instruction_data)
    if not data:
        raise ProgramError(ErrorKind.INVALID_INSTRUCTION_DATA)
    discriminator, payload = data[0], data[1:]
    try:
        kind = InstructionKind(discriminator)
    except ValueError:
        raise ProgramError(ErrorKind.INVALID_INSTRUCTION_DATA) from None

    _log.debug("Instruction: %s", kind.name)
    _PROCESSORS[kind](accounts, payload, runtime if runtime is not None else Runtime())