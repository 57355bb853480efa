"""Token classification for AOS R8 configuration snippets.

Used for colouring only; nothing here touches the command tree. Literal
patterns are checked before the keyword sets so "10.1.1.1" is an address
and never a keyword lookup.
"""

from __future__ import annotations

import enum
import re


class Category(str, enum.Enum):
    NONE = "none"
    COMMENT = "comment"
    IP_ADDRESS = "ip-address"
    MAC_ADDRESS = "mac-address"
    NUMBER = "number"
    STRING = "string"
    COMMAND = "command"
    PARAMETER = "parameter"
    CRITICAL = "critical"
    PROTOCOL = "protocol"
    ACTION = "action"


_WHITESPACE_RE = re.compile(r"\s+")
_IPV4_RE = re.compile(r"\d{1,3}(?:\.\d{1,3}){3}(?:/\d{1,2})?")
_MAC_RE = re.compile(r"[0-9a-f]{2}(?::[0-9a-f]{2}){5}", re.IGNORECASE)
_MAC_DOT_RE = re.compile(r"[0-9a-f]{4}\.[0-9a-f]{4}\.[0-9a-f]{4}", re.IGNORECASE)
_NUMBER_RE = re.compile(r"\d+")
_STRING_RE = re.compile(r'".*"', re.DOTALL)
_COMMENT_CHARS = ("!", "#")

# Segments: whitespace, quoted strings, punctuation, then plain words
_SEGMENT_RE = re.compile(r'\s+|"[^"]*"?|[()\[\]{},]|[^\s()\[\]{},"]+')

# Major command words
COMMAND_KEYWORDS = frozenset({
    "show", "vlan", "interfaces", "ip", "ipv6", "spantree", "linkagg", "qos",
    "aaa", "user", "system", "write", "copy", "reload", "ntp", "snmp", "lldp",
    "mac-learning", "policy", "unp", "mvrp", "swlog", "session", "command-log",
    "debug", "configuration", "modify", "cli", "router", "vrf", "loopback0",
})

# Parameters and qualifiers
PARAMETER_KEYWORDS = frozenset({
    "port", "slot", "chassis", "members", "tagged", "untagged", "admin-state",
    "name", "priority", "mode", "address", "mask", "gateway", "interface",
    "level", "timeout", "speed", "duplex", "alias", "agg", "static", "dynamic",
    "status", "statistics", "detail", "community", "host", "server", "area",
    "neighbor", "route", "prefer", "metric", "type", "all",
})

# Negation and destructive operations
CRITICAL_KEYWORDS = frozenset({
    "no", "disable", "shutdown", "deny", "drop", "delete", "clear", "reset",
    "remove", "takeover", "erase", "default",
})

# Protocol names
PROTOCOL_KEYWORDS = frozenset({
    "ospf", "ospf3", "bgp", "isis", "rip", "vrrp", "lacp", "stp", "rstp",
    "mstp", "pim", "igmp", "mld", "dhcp", "arp", "tcp", "udp", "icmp", "radius",
    "tacacs+", "ldap", "ssh", "telnet", "http", "https", "ftp", "tftp", "sftp",
    "802.1x", "erp", "mpls", "ntp-server", "sflow", "ptp",
})

# Operational verbs
ACTION_KEYWORDS = frozenset({
    "enable", "apply", "save", "flash-synchro", "running-directory", "certify",
    "restore", "add", "create", "set", "assign", "ping", "traceroute", "exit",
    "install", "activate", "learn", "reboot", "commit", "backup",
})

_KEYWORD_ORDER: tuple[tuple[frozenset[str], Category], ...] = (
    (COMMAND_KEYWORDS, Category.COMMAND),
    (PARAMETER_KEYWORDS, Category.PARAMETER),
    (CRITICAL_KEYWORDS, Category.CRITICAL),
    (PROTOCOL_KEYWORDS, Category.PROTOCOL),
    (ACTION_KEYWORDS, Category.ACTION),
)

_LITERAL_ORDER: tuple[tuple[tuple[re.Pattern[str], ...], Category], ...] = (
    ((_IPV4_RE,), Category.IP_ADDRESS),
    ((_MAC_RE, _MAC_DOT_RE), Category.MAC_ADDRESS),
    ((_NUMBER_RE,), Category.NUMBER),
    ((_STRING_RE,), Category.STRING),
)


def classify(token: str) -> Category:
    """Return the display category of one already-segmented token."""
    if not token or _WHITESPACE_RE.fullmatch(token):
        return Category.NONE
    if token.startswith(_COMMENT_CHARS):
        return Category.COMMENT

    for patterns, category in _LITERAL_ORDER:
        if any(p.fullmatch(token) for p in patterns):
            return category

    word = token.lower()
    for keywords, category in _KEYWORD_ORDER:
        if word in keywords:
            return category
    return Category.NONE


def is_comment_line(line: str) -> bool:
    return line.lstrip().startswith(_COMMENT_CHARS)


def segment_line(line: str) -> list[str]:
    """Split a display line into whitespace, punctuation, strings and words.

    Joining the segments gives back the original line. A comment line is a
    single segment.
    """
    if is_comment_line(line):
        return [line] if line else []
    return _SEGMENT_RE.findall(line)


def classify_line(line: str) -> list[tuple[str, Category]]:
    """Segment ``line`` and classify every segment."""
    if is_comment_line(line):
        return [(line, Category.COMMENT)]
    return [(segment, classify(segment)) for segment in segment_line(line)]
