"""Payload models for the crypto tools served by the MCP server (CoinGecko-shaped data)."""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# coin id -> currency -> price, e.g. {"bitcoin": {"usd": 65000.0, "eur": 60000.0}}
CryptoPrice = Dict[str, Dict[str, float]]

# {"error": "Failed to fetch price data: ..."}
ErrorResponse = Dict[str, str]

ToolPayload = Union[Dict[str, Any], List[Any], ErrorResponse]


def is_error(payload: Any) -> bool:
    """True if a helper returned an error-shaped value instead of data."""
    return isinstance(payload, dict) and set(payload) == {"error"}


class CoinInfo(BaseModel):
    """One entry of the coin list."""

    model_config = ConfigDict(extra="allow")

    id: str
    symbol: str
    name: str


class MarketData(BaseModel):
    """
    One row of market data for a coin.

    Only the identity fields are guaranteed. Everything else depends on how
    much the upstream market data source knows about the coin.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    symbol: str
    name: str
    image: Optional[str] = None
    current_price: Optional[float] = None
    market_cap: Optional[float] = None
    market_cap_rank: Optional[int] = None
    fully_diluted_valuation: Optional[float] = None
    total_volume: Optional[float] = None
    high_24h: Optional[float] = None
    low_24h: Optional[float] = None
    price_change_24h: Optional[float] = None
    price_change_percentage_24h: Optional[float] = None
    market_cap_change_24h: Optional[float] = None
    market_cap_change_percentage_24h: Optional[float] = None
    circulating_supply: Optional[float] = None
    total_supply: Optional[float] = None
    max_supply: Optional[float] = None
    ath: Optional[float] = None
    ath_change_percentage: Optional[float] = None
    ath_date: Optional[str] = None
    atl: Optional[float] = None
    atl_change_percentage: Optional[float] = None
    atl_date: Optional[str] = None
    last_updated: Optional[str] = None


class TrendingCoin(BaseModel):
    """A trending coin as reported by the search-trending endpoint."""

    model_config = ConfigDict(extra="allow")

    id: str
    coin_id: Optional[int] = None
    name: str
    symbol: str
    market_cap_rank: Optional[int] = None
    thumb: Optional[str] = None
    small: Optional[str] = None
    large: Optional[str] = None
    slug: Optional[str] = None
    price_btc: Optional[float] = None
    score: Optional[int] = None
    data: Dict[str, Any] = Field(default_factory=dict)


class TrendingItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    item: TrendingCoin


class TrendingResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    coins: List[TrendingItem] = Field(default_factory=list)
