"""
Configuration Unit Tests
Tests for distributor/config/runtime.py and distributor_cli/config.py
"""
import json

import pytest

from distributor.config.runtime import (
    ZERO_ADDRESS,
    DistributorConfig,
    DomainConfig,
    get_default_config,
    set_default_config,
)
from distributor_cli.config import (
    CLIConfig,
    config_to_dict,
    get_default_config_template,
    load_config,
    load_config_from_file,
)


class TestDistributorConfig:
    """Tests for the runtime configuration."""

    def test_defaults(self, clean_env):
        config = DistributorConfig.from_env()

        assert config.root is None
        assert config.distribution_path is None
        assert config.domain.name == "MerkleDistributor"
        assert config.domain.version == "1"
        assert config.domain.chain_id == 1
        assert config.domain.verifying_contract == ZERO_ADDRESS
        assert config.service.token_supply is None

    def test_from_env(self, clean_env):
        clean_env.setenv("DISTRIBUTOR_CHAIN_ID", "5")
        clean_env.setenv("DISTRIBUTOR_DOMAIN_NAME", "Airdrop")
        clean_env.setenv("DISTRIBUTOR_DISTRIBUTION_PATH", "/tmp/dist.json")
        clean_env.setenv("DISTRIBUTOR_TOKEN_SUPPLY", "1000")

        config = DistributorConfig.from_env()
        assert config.domain.chain_id == 5
        assert config.domain.name == "Airdrop"
        assert config.distribution_path == "/tmp/dist.json"
        assert config.service.token_supply == 1000

    def test_from_dict_partial(self):
        config = DistributorConfig.from_dict({"domain": {"chain_id": 10}})
        assert config.domain.chain_id == 10
        assert config.domain.name == "MerkleDistributor"

    def test_env_overrides_file_values(self, clean_env):
        base = DistributorConfig.from_dict({"domain": {"chain_id": 10, "name": "FromFile"}})
        clean_env.setenv("DISTRIBUTOR_CHAIN_ID", "42")

        merged = base.with_env_overrides()
        assert merged.domain.chain_id == 42
        assert merged.domain.name == "FromFile"
        # Original untouched
        assert base.domain.chain_id == 10

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "distributor.yaml"
        path.write_text(
            "root: '0x" + "ab" * 32 + "'\n"
            "distribution_path: dist.json\n"
            "domain:\n"
            "  name: YamlDrop\n"
            "  chain_id: 137\n"
        )
        config = DistributorConfig.from_yaml(path)
        assert config.root == "0x" + "ab" * 32
        assert config.distribution_path == "dist.json"
        assert config.domain.name == "YamlDrop"
        assert config.domain.chain_id == 137

    def test_from_yaml_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            DistributorConfig.from_yaml(tmp_path / "missing.yaml")

    def test_to_dict_reloads(self):
        config = DistributorConfig.from_dict({"root": "0x" + "00" * 32, "service": {"port": 9000}})
        again = DistributorConfig.from_dict(config.to_dict())
        assert again.to_dict() == config.to_dict()

    def test_to_claim_domain(self):
        domain = DomainConfig(name="X", version="2", chain_id=3).to_claim_domain()
        assert (domain.name, domain.version, domain.chain_id) == ("X", "2", 3)
        assert domain.verifying_contract == ZERO_ADDRESS

    def test_default_config_can_be_replaced(self):
        custom = DistributorConfig.from_dict({"root": "0x" + "11" * 32})
        set_default_config(custom)
        try:
            assert get_default_config() is custom
        finally:
            set_default_config(None)


class TestCLIConfig:
    """Tests for the CLI configuration file."""

    def test_template_loads(self, tmp_path, clean_env):
        path = tmp_path / "distributor.json"
        path.write_text(get_default_config_template())

        config = load_config(path)
        assert config_to_dict(config) == config_to_dict(CLIConfig())

    def test_file_values(self, tmp_path):
        path = tmp_path / "distributor.json"
        path.write_text(json.dumps({
            "domain": {"chain_id": 8453},
            "distribution_path": "out/dist.json",
        }))
        config = load_config_from_file(path)
        assert config.domain.chain_id == 8453
        assert config.domain.name == "MerkleDistributor"
        assert config.distribution_path == "out/dist.json"

    def test_env_overrides_file(self, tmp_path, clean_env):
        path = tmp_path / "distributor.json"
        path.write_text(json.dumps({"log_level": "WARNING"}))
        clean_env.setenv("DISTRIBUTOR_LOG_LEVEL", "DEBUG")

        assert load_config(path).log_level == "DEBUG"

    def test_discovers_file_in_cwd(self, tmp_path, clean_env):
        (tmp_path / "distributor.json").write_text(json.dumps({"distribution_path": "found.json"}))
        clean_env.chdir(tmp_path)

        assert load_config().distribution_path == "found.json"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config_from_file(tmp_path / "nope.json")
