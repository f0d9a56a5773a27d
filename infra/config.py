"""
Infrastructure configuration system.

Environment-based backend selection with sensible defaults.
Values are read once at construction and never mutated afterwards.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Literal

from dotenv import load_dotenv

from prover import ProvingService, StubProvingService
from snarkify import SnarkifyProver

# Load environment variables from .env at the project root
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path)


ProverBackendType = Literal["snarkify", "stub"]

DEFAULT_BASE_URL = "https://api.snarkify.io"


@dataclass(frozen=True)
class ProverConfig:
    """Connection parameters for the proving backend."""

    backend: ProverBackendType
    base_url: str
    api_key: str
    service_id: str
    connection_timeout_sec: float
    retry_wait_time_sec: float
    retry_count: int
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ProverConfig":
        """
        Load configuration from environment variables.

        Defaults target the hosted Snarkify platform with a 30 s timeout
        and three retries spaced 5-10 s apart.
        """
        return cls(
            backend=os.getenv("PROVER_BACKEND", "snarkify"),  # type: ignore
            base_url=os.getenv("SNARKIFY_BASE_URL", DEFAULT_BASE_URL),
            api_key=os.getenv("SNARKIFY_API_KEY", ""),
            service_id=os.getenv("SNARKIFY_SERVICE_ID", ""),
            connection_timeout_sec=float(os.getenv("SNARKIFY_CONNECTION_TIMEOUT_SEC", "30")),
            retry_wait_time_sec=float(os.getenv("SNARKIFY_RETRY_WAIT_TIME_SEC", "10")),
            retry_count=int(os.getenv("SNARKIFY_RETRY_COUNT", "3")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> List[str]:
        """Return the names of required settings that are missing."""
        if self.backend == "stub":
            return []

        required = {
            "SNARKIFY_API_KEY": self.api_key,
            "SNARKIFY_SERVICE_ID": self.service_id,
        }
        return [name for name, value in required.items() if not value]

    def create_proving_service(self) -> ProvingService:
        """Create proving backend instance based on configuration."""
        if self.backend == "stub":
            return StubProvingService()

        return SnarkifyProver(
            base_url=self.base_url,
            api_key=self.api_key,
            service_id=self.service_id,
            connection_timeout_sec=self.connection_timeout_sec,
            retry_wait_time_sec=self.retry_wait_time_sec,
            retry_count=self.retry_count,
        )

    def __repr__(self) -> str:
        # api_key is never printed
        return (
            f"ProverConfig(backend={self.backend}, base_url={self.base_url}, "
            f"service_id={self.service_id}, timeout={self.connection_timeout_sec}s, "
            f"retry_wait={self.retry_wait_time_sec}s, retries={self.retry_count})"
        )


def get_config() -> ProverConfig:
    """Get proving backend configuration from the environment."""
    return ProverConfig.from_env()
