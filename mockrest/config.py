import ipaddress
import os
from typing import Tuple

from dotenv import load_dotenv

load_dotenv()

DEFAULT_SOCKET_ADDRESS = "0.0.0.0:3030"


def parse_socket_address(value: str) -> Tuple[str, int]:
    """Split ``host:port`` (or ``[v6-host]:port``) into a bindable pair.

    Raises ValueError with a readable message for anything that cannot be bound.
    """
    text = (value or "").strip()
    if text.startswith("["):
        host, sep, port = text[1:].partition("]:")
        if not sep:
            raise ValueError(f"invalid socket address {value!r}: expected [host]:port")
        try:
            ipaddress.IPv6Address(host)
        except ValueError:
            raise ValueError(f"invalid socket address {value!r}: {host!r} is not an IPv6 address") from None
    else:
        host, sep, port = text.rpartition(":")
        if not sep:
            raise ValueError(f"invalid socket address {value!r}: expected host:port")
        if not host or ":" in host:
            raise ValueError(f"invalid socket address {value!r}: bad host {host!r}")

    if not port.isdigit():
        raise ValueError(f"invalid socket address {value!r}: port must be a number")
    port_num = int(port)
    if not 0 < port_num < 65536:
        raise ValueError(f"invalid socket address {value!r}: port {port_num} out of range")
    return host, port_num


def parse_lock_timeout(value: str | None):
    """Seconds to wait for the store lock; ``none`` (or empty) waits forever."""
    text = (value or "").strip().lower()
    if text in {"", "none"}:
        return None
    try:
        return float(text)
    except ValueError:
        raise ValueError(
            f"invalid STORE_LOCK_TIMEOUT {value!r}: expected a number of seconds or 'none'"
        ) from None


class Config:
    SOCKET_ADDRESS = os.getenv("SOCKET_ADDRESS", DEFAULT_SOCKET_ADDRESS)
    # seconds to wait for the store lock; None waits forever
    STORE_LOCK_TIMEOUT = parse_lock_timeout(os.getenv("STORE_LOCK_TIMEOUT", "5.0"))
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")


class DevConfig(Config):
    DEBUG = True


class ProdConfig(Config):
    DEBUG = False


class TestConfig(Config):
    TESTING = True
    STORE_LOCK_TIMEOUT = 1.0
