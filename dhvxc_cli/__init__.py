"""
dhvxc-cli: download your recorded flights from the DHV-XC flight database.
"""

__version__ = "0.2.0"
