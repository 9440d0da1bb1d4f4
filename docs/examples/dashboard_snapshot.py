import asyncio

from crypto_mcp_client import ChatSession, ClientSettings, CryptoMcpClient, load_dashboard, setup_logging


async def main() -> None:
    """
    Loads the dashboard data once and asks one question through the chat session.
    """
    settings = ClientSettings.from_env()
    setup_logging(settings.log_level)

    client = CryptoMcpClient.from_settings(settings)
    chat = ChatSession(client)

    answer = await chat.send("Get the current price of Bitcoin in USD and EUR, and list the top 10 coins by market cap.")
    print(f"Assistant: {answer}")

    if client.connected:
        dashboard = await load_dashboard(client)
        if dashboard.btc_price:
            print(f"Bitcoin: ${dashboard.btc_price.usd} / EUR {dashboard.btc_price.eur}")
        for coin in dashboard.top_coins:
            print(f"{coin.name} ({coin.symbol.upper()}): {coin.current_price}")
        for coin in dashboard.trending_coins:
            print(f"Trending: {coin.name} ({coin.symbol.upper()})")
        for section, error in dashboard.errors.items():
            print(f"{section} unavailable: {error}")

    await chat.close()


if __name__ == "__main__":
    asyncio.run(main())
