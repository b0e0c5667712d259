"""Wallet bridge: thin Ethereum JSON-RPC calls over httpx.

Only address lookups and balance/chain queries; no signing, no retry, no
chain-id validation.
"""

from __future__ import annotations

import logging
import re
from decimal import Decimal
from typing import Any

import httpx

from gigmarket.core.config import settings
from gigmarket.core.constants import WEI_PER_ETH
from gigmarket.core.exceptions import InvalidInputError
from gigmarket.models.profile import Profile
from gigmarket.models.wallet import WalletBalance
from gigmarket.services.profiles import (
    default_username,
    ensure_profile,
    update_profile_fields,
)

logger = logging.getLogger(__name__)

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


class WalletRPCError(RuntimeError):
    """The JSON-RPC endpoint answered with an error object."""


def is_valid_address(address: str) -> bool:
    return bool(_ADDRESS_RE.match(address or ""))


def wei_to_eth(wei: int) -> str:
    """Format a wei amount as ETH with 4 decimals."""
    eth = Decimal(wei) / Decimal(WEI_PER_ETH)
    return f"{eth:.4f}"


async def _rpc_call(method: str, params: list[Any]) -> Any:
    payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}
    async with httpx.AsyncClient(timeout=settings.WALLET_RPC_TIMEOUT_SECONDS) as client:
        response = await client.post(settings.ETH_RPC_URL, json=payload)
        response.raise_for_status()
        data = response.json()

    if "error" in data:
        error = data["error"] or {}
        logger.error(
            "wallet_rpc_error",
            extra={"method": method, "error_message": error.get("message")},
        )
        raise WalletRPCError(f"{method} failed: {error.get('message', 'unknown error')}")
    return data.get("result")


async def get_balance(address: str) -> WalletBalance:
    """Return the latest balance of *address*."""
    if not is_valid_address(address):
        raise InvalidInputError(f"Invalid wallet address: {address}")
    raw = await _rpc_call("eth_getBalance", [address, "latest"])
    wei = int(raw, 16)
    return WalletBalance(address=address, balance_wei=wei, balance_eth=wei_to_eth(wei))


async def get_network_id() -> str:
    """Return the chain id reported by the RPC endpoint (hex string)."""
    return str(await _rpc_call("eth_chainId", []))


def connect_wallet(user_id: str, address: str) -> Profile:
    """Attach *address* to the caller's profile.

    A profile without a username gets the address-derived default.
    """
    if not is_valid_address(address):
        raise InvalidInputError(f"Invalid wallet address: {address}")

    profile = ensure_profile(user_id, address=address)
    fields: dict[str, Any] = {"address": address}
    if not profile.username:
        fields["username"] = default_username(address)

    updated = update_profile_fields(user_id, fields)
    logger.info("wallet_connected", extra={"user_id": user_id})
    return updated
