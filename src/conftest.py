from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from asn1crypto.core import UTF8String
from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import ExtensionOID, NameOID

from servertrust.truststore import TrustedRootSet
from servertrust.util import ID_ON_XMPP_ADDR

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


def name(common_name: str, organization: str = "servertrust tests") -> x509.Name:
    return x509.Name(
        [
            x509.NameAttribute(NameOID.COMMON_NAME, common_name),
            x509.NameAttribute(NameOID.ORGANIZATION_NAME, organization),
        ]
    )


def new_key():
    return ec.generate_private_key(ec.SECP256R1())


def issue(
    subject: x509.Name,
    key=None,
    issuer: x509.Name = None,
    issuer_key=None,
    not_before: datetime = NOW - timedelta(days=30),
    not_after: datetime = NOW + timedelta(days=30),
    ca: bool = False,
    dns_names: list = None,
    xmpp_addrs: list = None,
    extensions: list = None,
):
    key = key or new_key()
    builder = (
        x509.CertificateBuilder()
        .subject_name(subject)
        .issuer_name(issuer or subject)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(not_before)
        .not_valid_after(not_after)
        .add_extension(x509.BasicConstraints(ca=ca, path_length=None), critical=True)
    )
    general_names = [x509.DNSName(dns_name) for dns_name in dns_names or []]
    general_names.extend(
        x509.OtherName(ID_ON_XMPP_ADDR, UTF8String(addr).dump())
        for addr in xmpp_addrs or []
    )
    if general_names:
        builder = builder.add_extension(
            x509.SubjectAlternativeName(general_names), critical=False
        )
    for extension in extensions or []:
        builder = builder.add_extension(extension, critical=False)
    return builder.sign(issuer_key or key, hashes.SHA256()), key


def malformed_san(subject: x509.Name):
    # otherName truncated after its tag, decodes only when extensions are read
    extension = x509.UnrecognizedExtension(
        ExtensionOID.SUBJECT_ALTERNATIVE_NAME, b"\x30\x03\xa0\x01\xff"
    )
    return issue(subject, extensions=[extension])[0]


@pytest.fixture
def pki():
    root, root_key = issue(name("servertrust Root CA"), ca=True)
    intermediate, intermediate_key = issue(
        name("servertrust Issuing CA"),
        issuer=root.subject,
        issuer_key=root_key,
        ca=True,
    )
    leaf, leaf_key = issue(
        name("*.example.com"),
        issuer=intermediate.subject,
        issuer_key=intermediate_key,
        dns_names=["*.example.com"],
    )
    self_signed, self_signed_key = issue(name("chat.example.com"))
    return SimpleNamespace(
        root=root,
        root_key=root_key,
        intermediate=intermediate,
        intermediate_key=intermediate_key,
        leaf=leaf,
        leaf_key=leaf_key,
        chain=[leaf, intermediate, root],
        self_signed=self_signed,
        self_signed_key=self_signed_key,
        roots=TrustedRootSet([root], source="pki"),
    )
