"""Multiaddr to dial address conversion"""
from multiaddr import Multiaddr

from .exception import InvalidAddressError

_HOST_PROTOCOLS = ("ip4", "ip6", "dns", "dns4", "dns6")


def dial_address(text: str) -> str:
    """Convert a listen multiaddr into a ``host:port`` dial address

    Examples:
        /ip4/127.0.0.1/tcp/5001 -> 127.0.0.1:5001
        /ip6/::1/tcp/5001       -> [::1]:5001

    Raises:
        InvalidAddressError: Address is unparsable or not host + tcp
    """
    try:
        maddr = Multiaddr(text.strip())
        names = [proto.name for proto in maddr.protocols()]
    except (ValueError, LookupError) as e:
        raise InvalidAddressError(f"error parsing multiaddr {text!r}: {e}")

    if len(names) != 2 or names[0] not in _HOST_PROTOCOLS or names[1] != "tcp":
        raise InvalidAddressError(
            f"unsupported multiaddr {text!r}, expected /<ip|dns>/<host>/tcp/<port>"
        )

    host = maddr.value_for_protocol(names[0])
    port = maddr.value_for_protocol("tcp")
    if names[0] == "ip6":
        host = f"[{host}]"
    return f"{host}:{port}"
