"""Mocked peripheral devices for host-side testing of hardware drivers."""

__version__ = "0.11.1"
__all__ = ["common", "eh0", "eh1"]