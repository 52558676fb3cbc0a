"""Config registry for breaking circular imports.

This module holds the active ProxyConfig so that routes can import it
without causing circular imports with the main module.
"""

# Global config instance - set by main.create_app during initialization
config = None


def set_config(config_instance):
    """Set the global config instance."""
    global config
    config = config_instance


def get_config():
    """Get the global config instance."""
    if config is None:
        raise RuntimeError("Config not initialized. Did you call set_config?")
    return config
