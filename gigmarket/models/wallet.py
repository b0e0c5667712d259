"""Pydantic models for the wallet bridge endpoints."""

from pydantic import BaseModel


class WalletConnect(BaseModel):
    address: str


class WalletBalance(BaseModel):
    address: str
    balance_wei: int
    balance_eth: str


class WalletNetwork(BaseModel):
    chain_id: str
