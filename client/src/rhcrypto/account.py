"""Account endpoint: account number, status and buying power."""

from __future__ import annotations

from .clients.http_exchange import HttpExchangeClient
from .models import AccountInfo

ACCOUNTS_PATH = "/api/v1/crypto/trading/accounts/"


async def get_account_info(client: HttpExchangeClient) -> AccountInfo:
    return await client.execute("GET", ACCOUNTS_PATH, response_model=AccountInfo)
