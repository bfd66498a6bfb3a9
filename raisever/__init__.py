"""raise-version: bump package.json, changelog and git in one transaction."""

__version__ = "0.1.0"
