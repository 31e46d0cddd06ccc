import logging
from datetime import datetime, timezone
from typing import Union

from asn1crypto.core import UTF8String
from cryptography import x509
from cryptography.x509 import (
    Certificate,
    DNSName,
    Name,
    ObjectIdentifier,
    OtherName,
    SubjectAlternativeName,
    extensions,
)
from OpenSSL.crypto import X509

__module__ = "servertrust.util"

logger = logging.getLogger(__name__)

ID_ON_XMPP_ADDR = ObjectIdentifier("1.3.6.1.5.5.7.8.5")
PEM_HEADER = b"-----BEGIN CERTIFICATE-----"


def force_str(s, encoding="utf-8", errors="strict"):
    if issubclass(type(s), str):
        return s
    if isinstance(s, bytes):
        s = str(s, encoding, errors)
    else:
        s = str(s)
    return s


def to_cryptography(cert: Union[Certificate, X509, bytes, str]) -> Certificate:
    if isinstance(cert, Certificate):
        return cert
    if isinstance(cert, X509):
        return cert.to_cryptography()
    if isinstance(cert, str):
        cert = cert.encode("ascii")
    if isinstance(cert, bytes):
        if PEM_HEADER in cert:
            return x509.load_pem_x509_certificate(cert)
        return x509.load_der_x509_certificate(cert)
    raise TypeError(
        f"provided an invalid type {type(cert)} for certificate, expected cryptography Certificate, OpenSSL X509, PEM or DER"
    )


def from_subject(subject: Name, field: str = "commonName") -> Union[str, None]:
    for fields in subject:
        current = str(fields.oid)
        if field in current:
            return fields.value
    return None


def get_san(cert: Certificate) -> list:
    san = []
    try:
        san = cert.extensions.get_extension_for_class(
            SubjectAlternativeName
        ).value.get_values_for_type(DNSName)
    except extensions.ExtensionNotFound as ex:
        logger.debug(ex, exc_info=True)
    except ValueError as ex:
        logger.warning(f"Malformed subjectAltName ignored: {ex}")
    return sorted(san)


def get_xmpp_addrs(cert: Certificate) -> list[str]:
    addrs = []
    try:
        other_names = cert.extensions.get_extension_for_class(
            SubjectAlternativeName
        ).value.get_values_for_type(OtherName)
    except extensions.ExtensionNotFound as ex:
        logger.debug(ex, exc_info=True)
        return addrs
    except ValueError as ex:
        # extensions are parsed lazily, peer supplied bytes may not decode
        logger.warning(f"Malformed subjectAltName ignored: {ex}")
        return addrs
    for other_name in other_names:
        if other_name.type_id != ID_ON_XMPP_ADDR:
            continue
        try:
            addrs.append(UTF8String.load(other_name.value).native)
        except ValueError as ex:
            logger.warning(f"Malformed id-on-xmppAddr value ignored: {ex}")
    return addrs


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def date_diff(comparer: datetime, reference: datetime = None) -> str:
    interval = as_utc(comparer) - as_utc(reference or utcnow())
    if interval.days < -1:
        return f"Expired {int(abs(interval.days))} days ago"
    if interval.days == -1:
        return "Expired yesterday"
    if interval.days == 0:
        return "Expires today"
    if interval.days == 1:
        return "Expires tomorrow"
    if interval.days > 365:
        return (
            f"Expires in {interval.days} days ({int(round(interval.days/365))} years)"
        )
    return f"Expires in {interval.days} days"
