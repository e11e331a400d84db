"""
Column name normalization.

Database columns are snake_case (``user_id``) while record fields are
camel-cased, sometimes with initialisms kept upper-case (``UserId`` or
``UserID``). ``camel_names`` renders both candidates and ``resolve_field``
picks whichever one a record actually declares.
"""
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, TypeVar

T = TypeVar("T")

# ---------- INITIALISMS ----------
INITIALISMS: Mapping[str, str] = MappingProxyType(dict(sorted({
    "Acl": "ACL",
    "Api": "API",
    "Ascii": "ASCII",
    "Cpu": "CPU",
    "Css": "CSS",
    "Dns": "DNS",
    "Eof": "EOF",
    "Guid": "GUID",
    "Html": "HTML",
    "Http": "HTTP",
    "Https": "HTTPS",
    "Id": "ID",
    "Ip": "IP",
    "Json": "JSON",
    "Lhs": "LHS",
    "Qps": "QPS",
    "Ram": "RAM",
    "Rhs": "RHS",
    "Rpc": "RPC",
    "Sla": "SLA",
    "Smtp": "SMTP",
    "Sql": "SQL",
    "Ssh": "SSH",
    "Tcp": "TCP",
    "Tls": "TLS",
    "Ttl": "TTL",
    "Udp": "UDP",
    "Ui": "UI",
    "Uid": "UID",
    "Uuid": "UUID",
    "Uri": "URI",
    "Url": "URL",
    "Utf8": "UTF8",
    "Vm": "VM",
    "Xml": "XML",
    "Xmpp": "XMPP",
    "Xsrf": "XSRF",
    "Xss": "XSS",
}.items())))


def _upper(c: str) -> str:
    return chr(ord(c) - 32) if "a" <= c <= "z" else c


def _lower(c: str) -> str:
    return chr(ord(c) + 32) if "A" <= c <= "Z" else c


def _apply_initialism(plain: list, special: list, start: int, end: int) -> None:
    word = INITIALISMS.get("".join(plain[start:end]))
    if word:
        special[start:start + len(word)] = word


# ---------- NORMALIZER ----------
def camel_names(identifier: str) -> Tuple[str, str]:
    """Convert a snake_case identifier into its two camel-case candidates.

    Returns ``(plain, initialism)``. The plain form title-cases every
    underscore-separated segment, e.g. ``user_id`` -> ``UserId``. The
    initialism form additionally replaces whole segments found in
    ``INITIALISMS``, e.g. ``user_id`` -> ``UserID``.

    Input case is ignored: the first letter of a segment is upper-cased and
    the rest lower-cased. Empty segments (``user__id``, ``_user``) contribute
    nothing.
    """
    plain = []
    special = []
    segment_start = 0
    at_start = True

    for c in identifier:
        if c == "_":
            _apply_initialism(plain, special, segment_start, len(plain))
            at_start = True
            segment_start = len(plain)
            continue
        c = _upper(c) if at_start else _lower(c)
        plain.append(c)
        special.append(c)
        at_start = False

    _apply_initialism(plain, special, segment_start, len(plain))
    return "".join(plain), "".join(special)


def to_camel_name(identifier: str) -> str:
    """``user_id`` -> ``UserId``"""
    return camel_names(identifier)[0]


def to_initialism_name(identifier: str) -> str:
    """``user_id`` -> ``UserID``"""
    return camel_names(identifier)[1]


# ---------- RESOLVER ----------
def resolve_field(fields: Mapping[str, T], identifier: str) -> Tuple[str, Optional[T]]:
    """Find the field a column maps to.

    The plain candidate is tried first, then the initialism candidate.
    Lookups are exact and case-sensitive. Returns ``("", None)`` when
    neither candidate is a key of ``fields``.
    """
    plain, special = camel_names(identifier)
    if plain in fields:
        return plain, fields[plain]
    if special in fields:
        return special, fields[special]
    return "", None
