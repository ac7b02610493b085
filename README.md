# tokenprog

`tokenprog` runs a fungible-token program in memory. Mints, token accounts and
multisignature owners are held as fixed-layout byte buffers: 82 bytes for a
mint, 165 bytes for a token account and 355 bytes for a multisig. The
program's instructions act on those buffers. An instruction that fails raises
`ProgramError`, and the processors check everything before they write
anything.

The package uses only the Python standard library. It needs Python 3.10 or
later.

## Modules

- `tokenprog.errors` has `TokenError`, the custom error codes 0 to 19, each
  with a `description`. It also has `ErrorKind`, the general failure
  categories, and `ProgramError`, the exception every failing instruction
  raises. `ProgramError(TokenError.X)` is shorthand for a custom error. Its
  `kind`, `token_error` and `custom_code` tell you what went wrong.
- `tokenprog.pubkey` has the base58 helpers `b58encode`, `b58decode` and
  `pubkey`. It also has `is_native_mint` and the constants `TOKEN_PROGRAM_ID`,
  `NATIVE_MINT`, `NATIVE_DECIMALS` and `PUBKEY_BYTES`.
- `tokenprog.instruction` has `InstructionKind`, the discriminator bytes 0 to
  24, and `AuthorityType`, whose `from_index` raises `INVALID_INSTRUCTION` for
  an unknown byte.
- `tokenprog.state` has the views `Account`, `Mint` and `Multisig`, which read
  and write their fields straight in a `bytearray`. It also has the
  `AccountState` enum, `is_valid_signer_index`, and `load` / `load_unchecked`.
  `load` checks both the length and that the account is initialized.
- `tokenprog.runtime` has three classes. `AccountInfo` holds an account's key,
  owner, lamports, data and signer flag. `Rent` gives `minimum_balance` and
  `is_exempt`, and `from_account` reads rent from a rent sysvar account.
  `Runtime` carries the rent sysvar and the `return_data` an instruction sets.
- `tokenprog.validation` has `check_account_owner`, `validate_owner` (single
  signer or M-of-N multisig) and `try_ui_amount_into_amount`.
- `tokenprog.shared`, `tokenprog.handlers` and `tokenprog.token_ops` hold the
  processors, one `process_*` function per instruction. `tokenprog.handlers`
  also has `format_ui_amount`.
- `tokenprog.entrypoint` has `process_instruction`. It reads the first data
  byte as the discriminator and passes the rest to the matching processor. If
  the data is empty or the byte is unknown, it raises
  `ProgramError(ErrorKind.INVALID_INSTRUCTION_DATA)`.

## Example

```python
from tokenprog.entrypoint import process_instruction
from tokenprog.pubkey import TOKEN_PROGRAM_ID
from tokenprog.runtime import AccountInfo, Runtime
from tokenprog.state import Account, Mint

runtime = Runtime()
rent = runtime.rent
owner_key = bytes([2]) * 32

mint = AccountInfo(key=bytes([1]) * 32, owner=TOKEN_PROGRAM_ID,
                   lamports=rent.minimum_balance(Mint.LEN), data=bytearray(Mint.LEN))
alice = AccountInfo(key=bytes([3]) * 32, owner=TOKEN_PROGRAM_ID,
                    lamports=rent.minimum_balance(Account.LEN), data=bytearray(Account.LEN))
bob = AccountInfo(key=bytes([4]) * 32, owner=TOKEN_PROGRAM_ID,
                  lamports=rent.minimum_balance(Account.LEN), data=bytearray(Account.LEN))
owner = AccountInfo(key=owner_key, is_signer=True)

# InitializeMint2: 2 decimals, mint authority, no freeze authority.
process_instruction(TOKEN_PROGRAM_ID, [mint], bytes([20, 2]) + owner_key + b"\x00", runtime)
# InitializeAccount3 for both token accounts.
for info in (alice, bob):
    process_instruction(TOKEN_PROGRAM_ID, [info, mint], bytes([18]) + owner_key, runtime)
# MintTo 1000, then Transfer 250.
process_instruction(TOKEN_PROGRAM_ID, [mint, alice, owner],
                    bytes([7]) + (1000).to_bytes(8, "little"), runtime)
process_instruction(TOKEN_PROGRAM_ID, [alice, bob, owner],
                    bytes([3]) + (250).to_bytes(8, "little"), runtime)

Account(alice.data).amount   # 750
Mint(mint.data).supply       # 1000

# AmountToUiAmount writes its answer to the runtime's return data.
process_instruction(TOKEN_PROGRAM_ID, [mint], bytes([23]) + (750).to_bytes(8, "little"), runtime)
runtime.return_data          # b"7.5"
```

You can also call the UI-amount conversions directly:

```python
from tokenprog.handlers import format_ui_amount
from tokenprog.validation import try_ui_amount_into_amount

format_ui_amount(1_500_000_000, 9)        # "1.5"
try_ui_amount_into_amount("1.5", 9)       # 1500000000
```

## What it does not do

`tokenprog` applies instructions to accounts that you hold in memory, and
nothing more:

- It has no ledger and no storage. Nothing is written to disk.
- It has no network client and no command-line tool.
- It does not sign or verify transactions. A signature is simply the
  `is_signer` flag on an `AccountInfo`.
- `process_instruction` does not check the `program_id` it is given.

## Running the tests

```
pip install -e .[test]
pytest
```