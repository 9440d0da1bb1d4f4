import pytest
from unittest.mock import AsyncMock, MagicMock
from typing import Any

from crypto_mcp_client import CryptoMcpClient, load_dashboard
from crypto_mcp_client.dashboard import parse_top_coins, parse_trending_coins

from conftest import PRICE_PAYLOAD

MARKET_ROWS = [
    {
        "id": "bitcoin",
        "symbol": "btc",
        "name": "Bitcoin",
        "image": "https://assets.example/btc.png",
        "current_price": 65432.1,
        "market_cap": 1288000000000,
        "market_cap_rank": 1,
        "price_change_percentage_24h": -1.25,
    },
    {
        "id": "ethereum",
        "symbol": "eth",
        "name": "Ethereum",
        "image": "https://assets.example/eth.png",
        "current_price": 3120.5,
        "price_change_percentage_24h": 2.5,
    },
]

TRENDING = {
    "coins": [
        {
            "item": {
                "id": "pepe",
                "coin_id": 29850,
                "name": "Pepe",
                "symbol": "PEPE",
                "market_cap_rank": 24,
                "thumb": "https://assets.example/pepe-thumb.png",
                "price_btc": 1.6e-10,
                "score": 0,
                "data": {"price": 0.0000105, "price_change_percentage_24h": {"usd": 7.1}},
            }
        }
    ]
}


@pytest.fixture
def mock_client() -> Any:
    client = MagicMock(spec=CryptoMcpClient)
    client.get_price = AsyncMock(return_value=PRICE_PAYLOAD)
    client.get_market_data = AsyncMock(return_value=MARKET_ROWS)
    client.get_trending = AsyncMock(return_value=TRENDING)
    return client


@pytest.mark.asyncio
async def test_load_dashboard_collects_all_sections(mock_client: Any) -> None:
    data = await load_dashboard(mock_client)

    mock_client.get_price.assert_called_once_with(ids="bitcoin", vs_currencies="usd,eur")
    mock_client.get_market_data.assert_called_once_with(per_page=10, page=1, sparkline=False)

    assert data.errors == {}
    assert data.btc_price is not None
    assert data.btc_price.usd == 65432.1
    assert data.btc_price.eur == 60321.5
    assert [coin.symbol for coin in data.top_coins] == ["btc", "eth"]
    assert data.top_coins[0].price_change_percentage_24h == -1.25

    trending = data.trending_coins[0]
    assert trending.image == "https://assets.example/pepe-thumb.png"
    assert trending.current_price == 0.0000105
    assert trending.price_change_percentage_24h == 7.1


@pytest.mark.asyncio
async def test_failed_sections_do_not_block_others(mock_client: Any) -> None:
    mock_client.get_price.return_value = {"error": "Failed to fetch price data: boom"}
    mock_client.get_trending.return_value = {"coins": "not a list"}

    data = await load_dashboard(mock_client, top=2)

    assert data.btc_price is None
    assert data.errors["btc_price"] == "Failed to fetch price data: boom"
    assert data.errors["trending_coins"].startswith("Unexpected trending payload")
    assert len(data.top_coins) == 2


@pytest.mark.asyncio
async def test_price_without_bitcoin_entry(mock_client: Any) -> None:
    mock_client.get_price.return_value = {"ethereum": {"usd": 3000.0, "eur": 2800.0}}

    data = await load_dashboard(mock_client)

    assert data.btc_price is None
    assert "bitcoin" in data.errors["btc_price"]


def test_single_market_row_is_accepted() -> None:
    coins = parse_top_coins(MARKET_ROWS[1])

    assert len(coins) == 1
    assert coins[0].id == "ethereum"


def test_trending_without_market_data() -> None:
    coins = parse_trending_coins({"coins": [{"item": {"id": "kas", "name": "Kaspa", "symbol": "KAS"}}]})

    assert coins[0].current_price is None
    assert coins[0].image is None


def test_non_numeric_trending_price_only_blanks_that_row() -> None:
    payload = {
        "coins": [
            {"item": {"id": "kaspa", "name": "Kaspa", "symbol": "KAS", "data": {"price": "$0.01"}}},
            TRENDING["coins"][0],
        ]
    }

    coins = parse_trending_coins(payload)

    assert [coin.id for coin in coins] == ["kaspa", "pepe"]
    assert coins[0].current_price is None
    assert coins[1].current_price == 0.0000105
