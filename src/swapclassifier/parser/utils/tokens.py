"""Static token and account data shared read-only by every classification."""

import re

# Wrapped SOL mint. Providers that report native SOL as a token row use it too.
WSOL_MINT = "So11111111111111111111111111111111111111112"
# Pseudo-mint adapters use for native lamport balance rows
NATIVE_SOL_MINT = "So11111111111111111111111111111111111111111"
SOL_DECIMALS = 9
SOL_SYMBOL = "SOL"

USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
USDT_MINT = "Es9vMFrzaCERmJfrF4H2FYD4KCoNkY11McCe8BenwNYB"

SOL_EQUIVALENTS: frozenset[str] = frozenset({WSOL_MINT, NATIVE_SOL_MINT})

STABLECOIN_MINTS: frozenset[str] = frozenset({
    USDC_MINT,
    USDT_MINT,
    "2b1kV6DkPAnxd5ixfnxCpjxmKwqjjaYmCZfHsFu24GXo",  # PYUSD
    "USDSwr9ApdHk5bvJKMjzff41FfuX8bSxdKcR81vTwcA",  # USDS
    "2u1tszSeqZ3qBWF3uNGPFc8TzMk2tdiwknnRMWGWjGWH",  # USDG
    "JuprjznTrTSp2UFa3ZBUFgwdAmtZCq4MQCwysN55USD",  # JupUSD
    "7kbnvuGBxxj8AG9qp8Scn56muWGaRaFqxg1FsRp3PaFT",  # UXD
    "USD1ttGY1N17NEEHLmELoaybftRBUSErhqYiQzvEmuB",  # USD1
    "star9agSpjiFe3M49B3RniVU4CMBBEK3Qnaqn3RGiFM",  # USD*
    "CASHx9KJUStyftLFWGvEVf59SGeG9sh5FfcnZMVPCASH",  # CASH
})

# Quote-eligible ("priority") assets: SOL, its wrapped form, liquid staking
# tokens, stablecoins and the majors commonly used as a pricing leg.
CORE_TOKENS: frozenset[str] = SOL_EQUIVALENTS | STABLECOIN_MINTS | frozenset({
    "jupSoLaHXQiZZTSfEWMTRRgpnyFm8f6sZdosWBjx93v",  # jupSOL
    "bSo13r4TkiE4KumL71LsHTPpL2euBYLFx6h9HP3piy1",  # bSOL
    "mSoLzYCxHdYgdzU16g5QSh3i5K3z3KZK7ytfqcJm7So",  # mSOL
    "7dHbWXmci3dT8UFYWYZweBLXgycu7Y3iL6trKn1Y7ARj",  # stSOL
    "J1toso1uCk3RLmjorhTtrVwY9HJ7X8V9yYac6Y7kGCPn",  # jitoSOL
    "EjmyN6qEC1Tf1JxiG1ae7UTJhUxSwk1TCWNWqxWV4J6o",  # DAI
    "HzwqbKZw8HxMN6bF2yFZNrht3c2iXXzpKcFu7uBEDKtr",  # EURC
    "Sj14XLJZSVMcUYpAfajdZRpnfHUpJieZHS4aPektLWvh",  # SjlUSD
    "9BEcn9aPEmhSPbPQeFGjidRiEKki46fVQDyPpSQXPA2D",  # jlUSDC
    "27G8MtK7VtTcCHkpASjSDdkWWYfoqT6ggEuKidVJidD4",  # JLP
    "zBTCug3er3tLyffELcvDNrKkCymbPWysGcWihESYfLg",  # zBTC
    "cbbtcf3aa214zXHbiAZQwf4122FBYbraNdFqgw4iMij",  # cbBTC
    "9n4nbM75f5Ui33ZbPYXn59EwSgE8CGsHtAeTH5YFeJ9E",  # wBTC
    "7vfCXTUXx5WJV5JADk17DUJ4ksgau7utNKj4b963voxs",  # wETH
})

KNOWN_SYMBOLS: dict[str, str] = {
    WSOL_MINT: SOL_SYMBOL,
    NATIVE_SOL_MINT: SOL_SYMBOL,
    USDC_MINT: "USDC",
    USDT_MINT: "USDT",
}

# AMM pools and DEX program ids
KNOWN_AMM_POOLS: frozenset[str] = frozenset({
    # Raydium
    "675kPX9MHTjS2zt1qfr1NYHuzeLXfQM9H24wFSUt1Mp8",
    "5Q544fKrFoe6tsEbD7S8EmxGTJYAKtTVhAW5Q5pge4j1",
    "CPMMoo8L3F4NbTegBCKVNunggL7H1ZpdTHKxQB5qKP1C",
    "CAMMCzo5YL8w4VFF8KVHrK22GGUsp5VTaW7grrKgrWqK",
    # Orca
    "9W959DqEETiGZocYWCQPaJ6sBmUzgfxXfqGeTEdp3aQP",
    "whirLbMiicVdio4qvUfM5KAg6Ct8VwpYzGff3uctyCc",
    # Jupiter
    "JUP6LkbZbjS1jKKwapdHNy74zcZ3tLUZoi5QNyVTaV4",
    "JUP4Fb2cqiRUcaTHdrPC8h2gNsA2ETXiPDD33WcGuJB",
    # Pump.fun bonding curve + AMM
    "6EF8rrecthR5Dkzon8Nwu78hRvfCKubJ14M5uBEwF6P",
    "pAMMBay6oceH9fJKBRHGP5D4bD4sWpmSwMn52FMfXEA",
    # Meteora DLMM
    "LBUZKhRxPF3XUpBCjp4YzTKgLccjZhTSDM9YuVaPwxo",
})

SYSTEM_ACCOUNTS: frozenset[str] = frozenset({
    "11111111111111111111111111111111",  # System program
    "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA",  # SPL Token
    "TokenzQdBNbLqP5VEhdkAS6EPFLC1PHnBqCXEpPxuEb",  # Token-2022
    "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL",  # Associated Token Account
    "ComputeBudget111111111111111111111111111111",
})

EXCLUDED_OWNERS: frozenset[str] = KNOWN_AMM_POOLS | SYSTEM_ACCOUNTS

_BASE58_RE = re.compile(r"^[1-9A-HJ-NP-Za-km-z]+$")
MIN_ADDRESS_LENGTH = 32
MAX_ADDRESS_LENGTH = 44


def is_sol(mint: str) -> bool:
    return mint in SOL_EQUIVALENTS


def is_core_token(mint: str) -> bool:
    return mint in CORE_TOKENS


def is_stablecoin(mint: str) -> bool:
    return mint in STABLECOIN_MINTS


def is_excluded_owner(address: str) -> bool:
    """Pools, vaults and program accounts never count as the trading wallet."""
    return address in EXCLUDED_OWNERS


def mint_format_error(mint: object) -> str | None:
    """Return a description of what is wrong with a mint address, or None if it looks valid."""
    if not isinstance(mint, str) or not mint:
        return "Invalid token address: mint must be a non-empty string"
    if len(mint) < MIN_ADDRESS_LENGTH or len(mint) > MAX_ADDRESS_LENGTH:
        return f"Invalid token address length: {mint}"
    if not _BASE58_RE.match(mint):
        return f"Invalid token address format: {mint}"
    return None


def symbol_for_mint(mint: str, fallback: str | None = None) -> str:
    """Known symbol, else the provider-supplied one, else a shortened mint."""
    if mint in KNOWN_SYMBOLS:
        return KNOWN_SYMBOLS[mint]
    if fallback:
        return fallback
    return f"{mint[:4]}...{mint[-4:]}"
