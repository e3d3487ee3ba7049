"""
Balance Ledger

In-memory map of address -> balance (wei) for the rollup application:
- credit / debit with a never-negative invariant
- transfer (all-or-nothing debit + credit)
- settle (pay a loser's whole balance to a winner)

Keys are checksummed (EIP-55) when the address is well-formed hex, so
"0xabc..." and "0xABC..." land on the same balance. Anything else is kept
verbatim.
"""

from __future__ import annotations
from typing import Dict, Iterator, Tuple

from eth_utils import is_hex_address, to_checksum_address

from ledger.errors import InsufficientBalance


def normalize_address(address: str) -> str:
    if is_hex_address(address):
        return to_checksum_address(address)
    return address


class Ledger:
    def __init__(self) -> None:
        self._balances: Dict[str, int] = {}

    def query(self, address: str) -> int:
        return self._balances.get(normalize_address(address), 0)

    def credit(self, address: str, amount: int) -> int:
        if amount < 0:
            raise ValueError(f"credit amount must be non-negative, got {amount}")
        key = normalize_address(address)
        self._balances[key] = self._balances.get(key, 0) + amount
        return self._balances[key]

    def debit(self, address: str, amount: int) -> int:
        if amount < 0:
            raise ValueError(f"debit amount must be non-negative, got {amount}")
        key = normalize_address(address)
        balance = self._balances.get(key, 0)
        if balance < amount:
            raise InsufficientBalance(address, balance, amount)
        self._balances[key] = balance - amount
        return self._balances[key]

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        # debit raises before anything is touched, so credit never runs on failure
        self.debit(sender, amount)
        self.credit(recipient, amount)

    def settle(self, loser: str, winner: str) -> int:
        """
        Move the loser's entire balance to the winner.

        Returns the amount moved. Zero means there was nothing to transfer
        and the ledger is unchanged.
        """
        amount = self.query(loser)
        if amount == 0:
            return 0
        # zero first so a self-settle (winner == loser) keeps its balance
        self._balances[normalize_address(loser)] = 0
        self.credit(winner, amount)
        return amount

    # ------------------------------------------------------------------ #
    # Snapshots
    # ------------------------------------------------------------------ #
    def snapshot(self) -> Dict[str, int]:
        return dict(self._balances)

    def restore(self, snapshot: Dict[str, int]) -> None:
        self._balances = dict(snapshot)

    # ------------------------------------------------------------------ #
    # Convenience
    # ------------------------------------------------------------------ #
    def items(self) -> Iterator[Tuple[str, int]]:
        return iter(sorted(self._balances.items()))

    def __contains__(self, address: object) -> bool:
        return isinstance(address, str) and normalize_address(address) in self._balances

    def __len__(self) -> int:
        return len(self._balances)
