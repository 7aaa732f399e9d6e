"""Network interface elements of a domain document.

Sample:
    <interface type="bridge">
      <mac address="00:18:51:5b:ea:bf"/>
      <source bridge="vzbr0"/>
      <target dev="veth101.0"/>
    </interface>
"""

import re
import xml.etree.ElementTree as ET

from .domain.definition import NetInterface
from .errors import ParseError, ParseErrorCode

MAC_SIZE = 6

INTERFACE_TYPES = ("bridge", "network", "ethernet")

_MAC_RE = re.compile(r"^([0-9a-fA-F]{1,2}:){5}[0-9a-fA-F]{1,2}$")


def parse_mac(text: str) -> bytes:
    """Parse colon separated MAC text into six bytes. Raises ValueError."""
    text = text.strip()
    if not _MAC_RE.match(text):
        raise ValueError(f"malformed MAC address {text!r}")
    return bytes(int(octet, 16) for octet in text.split(":"))


def mac_is_empty(mac: bytes) -> bool:
    """True if every octet is zero (address not set)."""
    return not any(mac[:MAC_SIZE])


def mac_to_string(mac: bytes) -> str:
    return ":".join(f"{b:02X}" for b in mac[:MAC_SIZE])


def _bad_interface(message: str) -> ParseError:
    return ParseError(ParseErrorCode.BAD_INTERFACE, message)


def parse_interface(element: ET.Element) -> NetInterface:
    """Parse one <interface> element.

    Raises:
        ParseError: BAD_INTERFACE for an unknown type, a malformed MAC or a
            missing source for bridge/network interfaces
    """
    if_type = element.get("type")
    if if_type is None:
        raise _bad_interface("missing interface type attribute")
    if if_type not in INTERFACE_TYPES:
        raise _bad_interface(f"unknown interface type '{if_type}'")

    mac = None
    mac_elem = element.find("mac")
    if mac_elem is not None and mac_elem.get("address") is not None:
        try:
            raw = parse_mac(mac_elem.get("address"))
        except ValueError as e:
            raise _bad_interface(str(e)) from e
        if not mac_is_empty(raw):
            mac = mac_to_string(raw)

    bridge = network = None
    source = element.find("source")
    if source is not None:
        bridge = source.get("bridge")
        network = source.get("network")

    if if_type == "bridge" and not bridge:
        raise _bad_interface("bridge interface without source bridge")
    if if_type == "network" and not network:
        raise _bad_interface("network interface without source network")

    target = None
    target_elem = element.find("target")
    if target_elem is not None:
        target = target_elem.get("dev")

    return NetInterface(
        type=if_type,
        mac=mac,
        bridge=bridge if if_type == "bridge" else None,
        network=network if if_type == "network" else None,
        target=target,
    )
