"""Tests for erst.core.config: settings loading."""

from __future__ import annotations

import os
from unittest.mock import patch

from erst.core.config import Settings, get_settings


class TestSettings:
    """Verify settings defaults and environment overrides."""

    def test_defaults(self):
        s = Settings()
        assert s.app_env == "development"
        assert s.log_level == "WARNING"
        assert s.network == "testnet"
        assert s.rpc_url == ""
        assert s.request_timeout_seconds == 30.0
        assert s.max_retries == 3
        assert s.default_format == "table"
        assert s.default_top == 0

    @patch.dict(
        os.environ,
        {
            "ERST_NETWORK": "mainnet",
            "ERST_RPC_URL": "http://localhost:8000/rpc",
            "ERST_MAX_RETRIES": "5",
            "ERST_DEFAULT_FORMAT": "json",
        },
    )
    def test_env_override(self):
        s = Settings()
        assert s.network == "mainnet"
        assert s.rpc_url == "http://localhost:8000/rpc"
        assert s.max_retries == 5
        assert s.default_format == "json"

    @patch.dict(os.environ, {"erst_app_env": "production"})
    def test_env_case_insensitive(self):
        assert Settings().app_env == "production"

    def test_get_settings_returns_same_instance(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()
