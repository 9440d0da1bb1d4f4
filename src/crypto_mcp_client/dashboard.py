"""Collect the data shown on the crypto dashboard: bitcoin price, top coins and trending coins."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError

from .client import CryptoMcpClient
from .core import get_logger
from .models import MarketData, TrendingResponse, is_error

logger = get_logger(__name__)


class BitcoinPrice(BaseModel):
    usd: float
    eur: float


class CoinItem(BaseModel):
    """One display row of the top-coins or trending-coins list."""

    id: str
    name: str
    symbol: str
    image: Optional[str] = None
    current_price: Optional[float] = None
    price_change_percentage_24h: Optional[float] = None


class DashboardData(BaseModel):
    """
    Everything the dashboard renders.

    Attributes:
        btc_price: Bitcoin price in USD and EUR, if it could be loaded.
        top_coins: Coins ordered by market cap.
        trending_coins: Coins currently trending in searches.
        errors: Section name -> error message for every section that failed to load.
    """

    btc_price: Optional[BitcoinPrice] = None
    top_coins: List[CoinItem] = Field(default_factory=list)
    trending_coins: List[CoinItem] = Field(default_factory=list)
    errors: Dict[str, str] = Field(default_factory=dict)


def parse_btc_price(payload: Any) -> BitcoinPrice:
    """Pick the bitcoin entry out of a ``get_price`` payload."""
    if not isinstance(payload, dict) or "bitcoin" not in payload:
        raise ValueError("Price payload has no 'bitcoin' entry.")
    return BitcoinPrice.model_validate(payload["bitcoin"])


def parse_top_coins(payload: Any) -> List[CoinItem]:
    """Turn ``get_market_data`` rows into display rows."""
    rows = payload if isinstance(payload, list) else [payload]
    coins = []
    for row in rows:
        market = MarketData.model_validate(row)
        coins.append(
            CoinItem(
                id=market.id,
                name=market.name,
                symbol=market.symbol,
                image=market.image,
                current_price=market.current_price,
                price_change_percentage_24h=market.price_change_percentage_24h,
            )
        )
    return coins


def _number_or_none(value: Any) -> Optional[float]:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if value is not None:
        logger.debug("Ignoring non-numeric trending value: %r", value)
    return None


def parse_trending_coins(payload: Any) -> List[CoinItem]:
    """Turn a ``get_trending`` payload into display rows, using the thumbnail as image.

    A price or change that is not a number leaves that value empty for its row only.
    """
    trending = TrendingResponse.model_validate(payload)
    coins = []
    for entry in trending.coins:
        item = entry.item
        change = item.data.get("price_change_percentage_24h")
        if isinstance(change, dict):
            change = change.get("usd")
        coins.append(
            CoinItem(
                id=item.id,
                name=item.name,
                symbol=item.symbol,
                image=item.thumb,
                current_price=_number_or_none(item.data.get("price")),
                price_change_percentage_24h=_number_or_none(change),
            )
        )
    return coins


async def load_dashboard(client: CryptoMcpClient, top: int = 10) -> DashboardData:
    """
    Fetches all dashboard sections through an already connected client.

    Each section is loaded independently. A failing section leaves its field
    empty and records the reason in ``errors``.

    Args:
        client: A connected CryptoMcpClient.
        top: Number of coins in the market-cap list.

    Returns:
        The collected dashboard data.
    """
    data = DashboardData()

    price = await client.get_price(ids="bitcoin", vs_currencies="usd,eur")
    if is_error(price):
        data.errors["btc_price"] = price["error"]
    else:
        try:
            data.btc_price = parse_btc_price(price)
        except (ValidationError, ValueError) as e:
            data.errors["btc_price"] = f"Unexpected price payload: {e}"

    market = await client.get_market_data(per_page=top, page=1, sparkline=False)
    if is_error(market):
        data.errors["top_coins"] = market["error"]
    else:
        try:
            data.top_coins = parse_top_coins(market)
        except ValidationError as e:
            data.errors["top_coins"] = f"Unexpected market data payload: {e}"

    trending = await client.get_trending()
    if is_error(trending):
        data.errors["trending_coins"] = trending["error"]
    else:
        try:
            data.trending_coins = parse_trending_coins(trending)
        except ValidationError as e:
            data.errors["trending_coins"] = f"Unexpected trending payload: {e}"

    for section, message in data.errors.items():
        logger.warning("Dashboard section '%s' failed: %s", section, message)
    return data
