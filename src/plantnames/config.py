"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from plantnames.core.types import Network


class PlantNamesSettings(BaseSettings):
    """Application configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="PLANTNAMES_",
    )

    # Node access
    rpc_urls: list[str] = Field(
        default_factory=list,
        description="JSON-RPC endpoints, tried in order on failure",
    )
    chain_id: int = Field(
        default=Network.BASE,
        description="Chain id the indexer runs against",
    )
    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Per-request HTTP timeout in seconds",
    )

    # Contracts
    plant_contract_address: str = Field(
        default="0xeb4e16c804AE9275a655AbBc20cD0658A91F9235",
        description="Pixotchi NFT contract exposing getPlantName(uint256)",
    )
    multicall_address: str = Field(
        default="0xcA11bde05977b3631167028862bE2a173976CA11",
        description="Multicall3 deployment used for batched reads",
    )

    # Name cache
    cache_ttl: float = Field(
        default=300.0,
        gt=0,
        description="Name cache TTL in seconds (also the sweep period)",
    )

    # Retry policy
    max_retries: int = Field(
        default=3,
        ge=0,
        description="Retries after the first attempt of a remote call",
    )
    retry_base_delay: float = Field(
        default=1.0,
        ge=0,
        description="Base backoff delay in seconds, doubled per attempt",
    )
    retry_jitter: float = Field(
        default=1.0,
        ge=0,
        description="Upper bound of the uniform jitter added to each delay",
    )

    # Historical validity
    cutover_blocks: dict[int, int] = Field(
        default_factory=dict,
        description="Per-chain cutover overrides merged over the built-in table",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )


@lru_cache
def get_settings() -> PlantNamesSettings:
    """Get cached settings instance."""
    return PlantNamesSettings()
