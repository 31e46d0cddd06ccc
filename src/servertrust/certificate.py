import logging
from datetime import datetime
from typing import Union

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.serialization import Encoding
from cryptography.x509 import Certificate, Name
from OpenSSL.crypto import X509

from . import util

__module__ = "servertrust.certificate"

logger = logging.getLogger(__name__)


class PeerCertificate:
    """Read-only view of one certificate presented by the remote peer."""

    __slots__ = ("_certificate",)

    def __init__(self, certificate: Union[Certificate, X509, bytes, str]) -> None:
        self._certificate = util.to_cryptography(certificate)

    @classmethod
    def load(cls, certificate) -> "PeerCertificate":
        if isinstance(certificate, PeerCertificate):
            return certificate
        return cls(certificate)

    @property
    def certificate(self) -> Certificate:
        return self._certificate

    @property
    def x509(self) -> X509:
        return X509.from_cryptography(self._certificate)

    @property
    def der(self) -> bytes:
        return self._certificate.public_bytes(Encoding.DER)

    @property
    def pem(self) -> str:
        return util.force_str(self._certificate.public_bytes(Encoding.PEM))

    @property
    def subject_name(self) -> Name:
        return self._certificate.subject

    @property
    def issuer_name(self) -> Name:
        return self._certificate.issuer

    @property
    def subject(self) -> str:
        return self._certificate.subject.rfc4514_string()

    @property
    def issuer(self) -> str:
        return self._certificate.issuer.rfc4514_string()

    @property
    def subject_common_name(self) -> Union[str, None]:
        common_name = util.from_subject(self._certificate.subject)
        return None if common_name is None else util.force_str(common_name)

    @property
    def public_key(self):
        return self._certificate.public_key()

    @property
    def not_before(self) -> datetime:
        return self._certificate.not_valid_before_utc

    @property
    def not_after(self) -> datetime:
        return self._certificate.not_valid_after_utc

    @property
    def san(self) -> list[str]:
        return util.get_san(self._certificate)

    @property
    def xmpp_addrs(self) -> list[str]:
        return util.get_xmpp_addrs(self._certificate)

    @property
    def sha256_fingerprint(self) -> str:
        return self._certificate.fingerprint(hashes.SHA256()).hex()

    def issued_by(self, issuer: "PeerCertificate") -> bool:
        return self.issuer_name == issuer.subject_name

    def signed_by(self, issuer: "PeerCertificate") -> bool:
        try:
            self._certificate.verify_directly_issued_by(issuer.certificate)
        except (InvalidSignature, ValueError, TypeError, UnsupportedAlgorithm) as ex:
            logger.debug(ex, exc_info=True)
            return False
        return True

    def valid_at(self, instant: datetime) -> bool:
        instant = util.as_utc(instant)
        return self.not_before <= instant <= self.not_after

    def __eq__(self, other) -> bool:
        if not isinstance(other, PeerCertificate):
            return NotImplemented
        return self.der == other.der

    def __hash__(self) -> int:
        return hash(self.der)

    def __repr__(self) -> str:
        return f"<PeerCertificate subject={self.subject!r} sha256={self.sha256_fingerprint}>"

    def to_dict(self) -> dict:
        return {
            "subject": self.subject,
            "subject_common_name": self.subject_common_name,
            "issuer": self.issuer,
            "not_before": self.not_before.isoformat(),
            "not_after": self.not_after.isoformat(),
            "expiry_status": util.date_diff(self.not_after),
            "san": self.san,
            "xmpp_addrs": self.xmpp_addrs,
            "sha256_fingerprint": self.sha256_fingerprint,
        }


def load_chain(chain) -> list[PeerCertificate]:
    if not isinstance(chain, (list, tuple)):
        raise TypeError(
            f"provided an invalid type {type(chain)} for chain, expected list"
        )
    if not chain:
        raise ValueError("provided an empty certificate chain")
    return [PeerCertificate.load(cert) for cert in chain]
