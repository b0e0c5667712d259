"""Wallet endpoints: link an address, query balance and network."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Query

from gigmarket.models.profile import Profile
from gigmarket.models.wallet import WalletBalance, WalletConnect, WalletNetwork
from gigmarket.routers.deps import CurrentSession
from gigmarket.services.wallet import connect_wallet, get_balance, get_network_id

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/connect", response_model=Profile)
async def connect(payload: WalletConnect, session: CurrentSession) -> Profile:
    """Attach a wallet address to the caller's profile."""
    return connect_wallet(session.user_id, payload.address)


@router.get("/balance", response_model=WalletBalance)
async def balance(
    address: str = Query(..., description="0x-prefixed wallet address"),
) -> WalletBalance:
    return await get_balance(address)


@router.get("/network", response_model=WalletNetwork)
async def network() -> WalletNetwork:
    return WalletNetwork(chain_id=await get_network_id())
