"""Version information for the Wallet Python SDK"""

__version__ = "0.0.1"
