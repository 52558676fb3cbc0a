"""Trigger signal helpers.

The trigger signal is written on the line before every ``<invoke>`` block
rendered from a genuine tool_use block, which lets the upstream response
parser tell real invocations from text that merely looks like one.
"""

import uuid
from typing import Any


def generate_trigger_signal() -> str:
    """Return a fresh marker such as ``<<CALL_1a2b3c4d>>``."""
    return f"<<CALL_{uuid.uuid4().hex[:8]}>>"


def resolve_trigger_signal(config: Any = None) -> str:
    """Use the configured signal when set, else generate one."""
    configured = getattr(config, "trigger_signal", None)
    if configured:
        return configured
    return generate_trigger_signal()
