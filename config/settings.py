from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Solana RPC (account data source)
    solana_rpc_url: str = "https://api.mainnet-beta.solana.com"
    rpc_timeout_sec: float = 10.0
    rpc_max_rps: float = 10.0
    rpc_max_retries: int = 2
    rpc_commitment: str = "confirmed"

    # Account cache
    account_cache_ttl_ms: int = 10_000
    redis_url: str = ""  # empty = in-process cache

    # Pump.fun bonding curve economics
    pumpfun_graduation_target_lamports: int = 85_000_000_000  # 85 SOL
    pumpfun_token_decimals: int = 6
    sol_decimals: int = 9

    # Quoting
    default_slippage: Decimal = Decimal("0.01")  # 1%

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False
    log_file: str = ""  # empty = console only


settings = Settings()
