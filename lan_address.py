# lan_address.py
import ipaddress
import logging
import socket

import psutil

import config

logger = logging.getLogger(__name__)


class NoPrivateAddressError(LookupError):
    """Raised when no up, non-loopback interface has a private IPv4 address."""


def is_private_ip(ip):
    """Checks if an IPv4 address is in one of the RFC-1918 blocks."""
    try:
        address = ipaddress.IPv4Address(ip)
    except ValueError:
        return False
    return any(address in network for network in config.PRIVATE_NETWORKS)


def _is_loopback(stats, addrs):
    flags = getattr(stats, "flags", "")
    if flags:
        return "loopback" in flags.split(",")
    # No flags reported (Windows): fall back to the interface's addresses.
    for addr in addrs:
        try:
            if ipaddress.ip_address(addr.address.split("%")[0]).is_loopback:
                return True
        except ValueError:
            continue
    return False


def resolve_local_private_ipv4():
    """
    Returns the first private IPv4 address found on the host.

    Interfaces are walked in the order the OS reports them, then each
    interface's addresses in order. Interfaces that are down or loopback are
    skipped. Raises NoPrivateAddressError if nothing matches; psutil errors
    propagate unchanged.
    """
    all_stats = psutil.net_if_stats()

    for name, addrs in psutil.net_if_addrs().items():
        stats = all_stats.get(name)
        if stats is None or not stats.isup:
            logger.debug(f"Skipping interface {name}: down")
            continue
        if _is_loopback(stats, addrs):
            logger.debug(f"Skipping interface {name}: loopback")
            continue

        for addr in addrs:
            if addr.family != socket.AF_INET:
                continue
            if is_private_ip(addr.address):
                logger.info(f"Using {addr.address} on interface {name}")
                return addr.address

    raise NoPrivateAddressError("no private IP address found")
