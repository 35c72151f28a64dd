"""Helpers for advertising the server on the local network."""

import logging
import socket

logger = logging.getLogger(__name__)


def get_local_ip() -> str:
    """Best guess at the LAN address other devices can reach us on."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        # no packet is sent; connect only selects the outbound interface
        sock.connect(("10.255.255.255", 1))
        return sock.getsockname()[0]
    except OSError as exc:
        logger.debug("Could not determine LAN address: %s", exc)
        return "localhost"
    finally:
        sock.close()
