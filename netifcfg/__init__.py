"""Configure and inspect IPv4 addresses of Linux network interfaces over a small TCP protocol."""

__version__ = "0.1.0"
__all__ = ["protocol", "interfaces", "applier", "interactive"]