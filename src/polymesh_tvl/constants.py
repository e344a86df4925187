"""Polymesh network and adapter constants."""

CHAIN_NAME = "polymesh"

DEFAULT_RPC_ENDPOINT = "wss://mainnet-rpc.polymesh.network/"

# Polymesh uses 6 decimals (micro-POLYX)
POLYX_DECIMALS = 6
POLYX_FALLBACK_PRICE = 0.3

# December 16, 2021
MAINNET_LAUNCH_TIMESTAMP = 1639612800

COINGECKO_SIMPLE_PRICE_URL = "https://api.coingecko.com/api/v3/simple/price"
COINGECKO_POLYX_ID = "polymesh"
PRICE_VS_CURRENCY = "usd"
PRICE_TIMEOUT_SECONDS = 5.0

# Mock breakdown served in demo mode, in whole POLYX
DEMO_TOTAL_ISSUANCE = 1000
DEMO_TOTAL_STAKED = 300
DEMO_TREASURY_BALANCE = 50

METHODOLOGY = (
    "Polymesh TVL includes staked POLYX tokens and treasury holdings. "
    "Staked tokens are locked in the consensus mechanism (Proof of Stake). "
    "Treasury holdings represent governance-locked funds. "
    "Data is fetched directly from the Polymesh blockchain over its Substrate RPC. "
    "Prices are sourced from CoinGecko with fallback to cached values."
)
