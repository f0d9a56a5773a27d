"""
Test suite for infrastructure configuration.

Verifies:
- Defaults target the hosted Snarkify platform
- Environment overrides are typed correctly
- Validation reports missing credentials
- Factory builds the configured backend
- Config is immutable and never prints the API key
"""

import dataclasses

import pytest

from infra import ProverConfig, get_config
from prover import ProvingService, StubProvingService
from snarkify import SnarkifyProver


ENV_VARS = [
    "PROVER_BACKEND",
    "SNARKIFY_BASE_URL",
    "SNARKIFY_API_KEY",
    "SNARKIFY_SERVICE_ID",
    "SNARKIFY_CONNECTION_TIMEOUT_SEC",
    "SNARKIFY_RETRY_WAIT_TIME_SEC",
    "SNARKIFY_RETRY_COUNT",
    "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestProverConfig:
    """Test proving backend configuration."""

    def test_config_from_env_defaults(self, clean_env):
        config = ProverConfig.from_env()

        assert config.backend == "snarkify"
        assert config.base_url == "https://api.snarkify.io"
        assert config.api_key == ""
        assert config.connection_timeout_sec == 30.0
        assert config.retry_wait_time_sec == 10.0
        assert config.retry_count == 3
        assert config.log_level == "INFO"

    def test_config_from_env_overrides(self, clean_env):
        clean_env.setenv("SNARKIFY_BASE_URL", "http://localhost:9000")
        clean_env.setenv("SNARKIFY_API_KEY", "secret")
        clean_env.setenv("SNARKIFY_SERVICE_ID", "svc-1")
        clean_env.setenv("SNARKIFY_CONNECTION_TIMEOUT_SEC", "2.5")
        clean_env.setenv("SNARKIFY_RETRY_WAIT_TIME_SEC", "4")
        clean_env.setenv("SNARKIFY_RETRY_COUNT", "7")
        clean_env.setenv("LOG_LEVEL", "debug")

        config = get_config()

        assert config.base_url == "http://localhost:9000"
        assert config.service_id == "svc-1"
        assert config.connection_timeout_sec == 2.5
        assert config.retry_wait_time_sec == 4.0
        assert config.retry_count == 7
        assert config.log_level == "DEBUG"

    def test_validate_reports_missing_credentials(self, clean_env):
        config = ProverConfig.from_env()
        assert config.validate() == ["SNARKIFY_API_KEY", "SNARKIFY_SERVICE_ID"]

    def test_validate_passes_with_credentials(self, clean_env):
        clean_env.setenv("SNARKIFY_API_KEY", "secret")
        clean_env.setenv("SNARKIFY_SERVICE_ID", "svc-1")
        assert ProverConfig.from_env().validate() == []

    def test_stub_needs_no_credentials(self, clean_env):
        clean_env.setenv("PROVER_BACKEND", "stub")
        assert ProverConfig.from_env().validate() == []

    def test_config_is_frozen(self, clean_env):
        config = ProverConfig.from_env()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.api_key = "changed"  # type: ignore[misc]

    def test_repr_hides_api_key(self, clean_env):
        clean_env.setenv("SNARKIFY_API_KEY", "super-secret")
        assert "super-secret" not in repr(ProverConfig.from_env())


class TestProvingServiceFactory:
    @pytest.mark.asyncio
    async def test_creates_snarkify_backend(self, clean_env):
        clean_env.setenv("SNARKIFY_SERVICE_ID", "svc-1")
        clean_env.setenv("SNARKIFY_RETRY_WAIT_TIME_SEC", "8")
        clean_env.setenv("SNARKIFY_RETRY_COUNT", "2")

        service = ProverConfig.from_env().create_proving_service()

        assert isinstance(service, SnarkifyProver)
        assert service.service_id == "svc-1"
        assert service.client.retry_policy.min_delay == 4.0
        assert service.client.retry_policy.max_delay == 8.0
        assert service.client.retry_policy.max_retries == 2
        await service.aclose()

    def test_creates_stub_backend(self, clean_env):
        config = dataclasses.replace(ProverConfig.from_env(), backend="stub")
        service = config.create_proving_service()

        assert isinstance(service, StubProvingService)
        assert isinstance(service, ProvingService)
