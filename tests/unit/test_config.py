"""
Unit tests for Financial API settings.
"""

from financial_api.config import Settings


class TestSettings:
    """Tests for Settings."""

    def test_defaults_match_test_network(self):
        settings = Settings()

        assert settings.msp_id == "Org1MSP"
        assert settings.peer_endpoint == "172.25.1.38:7051"
        assert settings.gateway_peer == "peer0.org1.example.com"
        assert settings.channel_name == "mychannel"
        assert settings.chaincode_name == "basic"
        assert settings.port == 8080
        assert settings.cert_path.endswith("/msp/signcerts/cert.pem")
        assert settings.key_path.endswith("/msp/keystore/")
        assert settings.tls_cert_path.endswith("/tls/ca.crt")

    def test_default_timeouts(self):
        settings = Settings()

        assert settings.evaluate_timeout == 5.0
        assert settings.endorse_timeout == 15.0
        assert settings.submit_timeout == 5.0
        assert settings.commit_status_timeout == 60.0

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("FINANCIAL_API_PEER_ENDPOINT", "localhost:7051")
        monkeypatch.setenv("FINANCIAL_API_CHANNEL_NAME", "bankchannel")
        monkeypatch.setenv("FINANCIAL_API_ENDORSE_TIMEOUT", "30")

        settings = Settings()

        assert settings.peer_endpoint == "localhost:7051"
        assert settings.channel_name == "bankchannel"
        assert settings.endorse_timeout == 30.0
