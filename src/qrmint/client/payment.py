"""On-chain fee payment in USDC on Base.

The fee step is kept apart from record creation: :class:`FeePayment` pays
once, caches the confirmed receipt, and hands the same receipt back on every
later call until :meth:`FeePayment.reset`. Retrying the gateway call after a
confirmed payment therefore never sends a second transfer.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Protocol

from web3 import Web3

from qrmint.client.errors import PaymentError

if TYPE_CHECKING:
    from web3.contract import Contract

logger = logging.getLogger(__name__)

BASE_CHAIN_ID = 8453
BASE_RPC_URL = "https://mainnet.base.org"
USDC_BASE_ADDRESS = "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"
USDC_DECIMALS = 6
DEFAULT_FEE = Decimal("1.0")

ERC20_TRANSFER_ABI: list[dict[str, Any]] = [
    {
        "name": "transfer",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "to", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "outputs": [{"name": "", "type": "bool"}],
    },
    {
        "name": "balanceOf",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "account", "type": "address"}],
        "outputs": [{"name": "", "type": "uint256"}],
    },
]


def to_base_units(amount: Decimal, decimals: int = USDC_DECIMALS) -> int:
    """``Decimal("1.5")`` -> ``1500000`` for a 6-decimal token."""
    scaled = amount.scaleb(decimals)
    if scaled != scaled.to_integral_value():
        msg = f"{amount} has more than {decimals} decimal places"
        raise ValueError(msg)
    return int(scaled)


class TokenTransfer(Protocol):
    """Submits a token transfer and waits until it is confirmed."""

    async def transfer(self, to: str, amount: int) -> str:
        """Send *amount* base units to *to* and return the transaction hash."""
        ...


@dataclass(frozen=True)
class PaymentReceipt:
    tx_hash: str
    recipient: str
    amount: int


class FeePayment:
    """A fixed fee to a fixed recipient, paid at most once per flow."""

    def __init__(
        self,
        transfer: TokenTransfer,
        recipient: str,
        *,
        amount: Decimal = DEFAULT_FEE,
        decimals: int = USDC_DECIMALS,
    ) -> None:
        if not recipient:
            raise PaymentError("Fee recipient wallet not configured")
        self._transfer = transfer
        self._recipient = recipient
        self._amount = to_base_units(amount, decimals)
        self._receipt: PaymentReceipt | None = None

    @property
    def receipt(self) -> PaymentReceipt | None:
        return self._receipt

    @property
    def amount(self) -> int:
        return self._amount

    async def ensure_paid(self) -> PaymentReceipt:
        """Pay the fee unless this flow already has a confirmed receipt.

        Raises:
            PaymentError: The transfer failed or was not confirmed.
        """
        if self._receipt is not None:
            return self._receipt
        logger.info("Sending fee of %d base units to %s", self._amount, self._recipient)
        try:
            tx_hash = await self._transfer.transfer(self._recipient, self._amount)
        except PaymentError:
            raise
        except Exception as exc:
            logger.warning("Fee transfer failed: %s", exc)
            raise PaymentError(f"Payment failed: {exc}") from exc
        self._receipt = PaymentReceipt(tx_hash=tx_hash, recipient=self._recipient, amount=self._amount)
        logger.info("Fee transfer confirmed in %s", tx_hash)
        return self._receipt

    def reset(self) -> None:
        """Forget the receipt so the next flow pays again."""
        self._receipt = None


class Web3TokenTransfer:
    """ERC-20 ``transfer`` through a web3 provider that manages the sender key.

    The sender account must be unlocked on the provider (a browser-style
    wallet or a node account), as ``transact`` signs there.
    """

    def __init__(
        self,
        w3: Web3,
        sender: str,
        *,
        token_address: str = USDC_BASE_ADDRESS,
        chain_id: int = BASE_CHAIN_ID,
        receipt_timeout: float = 120.0,
    ) -> None:
        self._w3 = w3
        self._sender = Web3.to_checksum_address(sender)
        self._chain_id = chain_id
        self._receipt_timeout = receipt_timeout
        self._contract: Contract = w3.eth.contract(
            address=Web3.to_checksum_address(token_address),
            abi=ERC20_TRANSFER_ABI,
        )

    @classmethod
    def from_rpc_url(cls, sender: str, rpc_url: str = BASE_RPC_URL, **kwargs: Any) -> Web3TokenTransfer:
        return cls(Web3(Web3.HTTPProvider(rpc_url)), sender, **kwargs)

    async def transfer(self, to: str, amount: int) -> str:
        return await asyncio.to_thread(self._transfer_sync, to, amount)

    def _transfer_sync(self, to: str, amount: int) -> str:
        if self._w3.eth.chain_id != self._chain_id:
            raise PaymentError("Please switch your wallet to the Base network")
        tx_hash = self._contract.functions.transfer(
            Web3.to_checksum_address(to), amount
        ).transact({"from": self._sender})
        receipt = self._w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self._receipt_timeout)
        if receipt["status"] != 1:
            raise PaymentError("Fee transfer was reverted")
        return Web3.to_hex(tx_hash)
