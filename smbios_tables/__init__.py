"""Decode the SMBIOS structure table into fingerprinted entries."""

__version__ = "0.1.0"
