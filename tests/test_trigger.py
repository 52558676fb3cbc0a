"""Tests for trigger signal helpers."""

import re

from promptbridge.config_loader import ProxyConfig
from promptbridge.messages.trigger import generate_trigger_signal, resolve_trigger_signal


class TestGenerateTriggerSignal:
    """Tests for generating fresh trigger signals."""

    def test_generated_signal_format(self):
        """Test the signal is CALL_ plus eight hex characters in angle brackets."""
        signal = generate_trigger_signal()
        assert re.fullmatch(r"<<CALL_[0-9a-f]{8}>>", signal)

    def test_generated_signals_differ(self):
        """Test each call produces a new signal."""
        assert generate_trigger_signal() != generate_trigger_signal()


class TestResolveTriggerSignal:
    """Tests for choosing between a configured and a generated signal."""

    def test_configured_signal_used(self):
        """Test a fixed signal from the config is returned as-is."""
        config = ProxyConfig(trigger_signal="<<FIXED>>")
        assert resolve_trigger_signal(config) == "<<FIXED>>"

    def test_generated_when_not_configured(self):
        """Test a signal is generated when none is configured."""
        assert resolve_trigger_signal(ProxyConfig()).startswith("<<CALL_")
        assert resolve_trigger_signal(None).startswith("<<CALL_")
