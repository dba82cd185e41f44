"""Supported instruments and their simulation start prices."""

DEFAULT_SYMBOL = "EURUSD"

# Start prices so the simulation looks plausible when switching pairs
PAIR_PRICES: dict[str, float] = {
    "EURUSD": 1.0850,
    "GBPUSD": 1.2650,
    "USDJPY": 150.20,
    "XAUUSD": 2350.50,  # Gold
    "BTCUSD": 64000.00,  # Bitcoin
    "ETHUSD": 3400.00,  # Ethereum
    "AUDUSD": 0.6550,
    "USDCAD": 1.3550,
}

SUPPORTED_PAIRS: list[str] = list(PAIR_PRICES)

FALLBACK_PRICE = 1.0


def get_start_price(symbol: str) -> float:
    """Get the simulation start price for a symbol (1.0 if unknown)."""
    return PAIR_PRICES.get(symbol.upper(), FALLBACK_PRICE)
