"""Block TLS connections by SNI host name using injected TCP resets."""

__version__ = "0.1.0"
__all__ = ["blocker", "checksum", "headers", "ip", "mac", "rst", "sni"]