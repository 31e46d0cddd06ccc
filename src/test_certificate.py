from datetime import datetime, timedelta

import pytest
from cryptography.hazmat.primitives.serialization import Encoding
from OpenSSL.crypto import X509

from servertrust.certificate import PeerCertificate, load_chain
from conftest import NOW, issue, malformed_san, name


def test_formats(pki):
    expected = PeerCertificate(pki.leaf)
    assert PeerCertificate(pki.leaf.public_bytes(Encoding.PEM)) == expected
    assert PeerCertificate(pki.leaf.public_bytes(Encoding.PEM).decode()) == expected
    assert PeerCertificate(pki.leaf.public_bytes(Encoding.DER)) == expected
    assert PeerCertificate(X509.from_cryptography(pki.leaf)) == expected
    assert PeerCertificate.load(expected) is expected
    assert isinstance(expected.x509, X509)


def test_bad_type():
    with pytest.raises(TypeError):
        PeerCertificate(1234)


def test_names(pki):
    leaf = PeerCertificate(pki.leaf)
    assert leaf.subject_common_name == "*.example.com"
    assert leaf.subject.startswith("O=servertrust tests")
    assert "CN=servertrust Issuing CA" in leaf.issuer
    assert leaf.san == ["*.example.com"]
    assert leaf.xmpp_addrs == []
    assert len(leaf.sha256_fingerprint) == 64


def test_xmpp_addrs():
    cert, _ = issue(name("fallback.example.com"), xmpp_addrs=["xmpp.example.com"])
    assert PeerCertificate(cert).xmpp_addrs == ["xmpp.example.com"]


def test_issued_and_signed_by(pki):
    leaf = PeerCertificate(pki.leaf)
    intermediate = PeerCertificate(pki.intermediate)
    root = PeerCertificate(pki.root)
    assert leaf.issued_by(intermediate)
    assert leaf.signed_by(intermediate)
    assert intermediate.signed_by(root)
    assert not leaf.issued_by(root)
    assert not leaf.signed_by(root)


def test_valid_at_accepts_naive_datetime(pki):
    leaf = PeerCertificate(pki.leaf)
    assert leaf.valid_at(NOW)
    assert leaf.valid_at(NOW.replace(tzinfo=None))
    assert not leaf.valid_at(NOW + timedelta(days=31))
    assert not leaf.valid_at(datetime(2000, 1, 1))


def test_to_dict(pki):
    data = PeerCertificate(pki.root).to_dict()
    assert data["subject_common_name"] == "servertrust Root CA"
    assert datetime.fromisoformat(data["not_after"])
    assert isinstance(data["expiry_status"], str)


def test_load_chain(pki):
    chain = load_chain(pki.chain)
    assert [c.certificate for c in chain] == pki.chain
    with pytest.raises(ValueError):
        load_chain([])
    with pytest.raises(TypeError):
        load_chain(pki.leaf)


def test_malformed_san():
    cert = PeerCertificate(malformed_san(name("chat.example.com")))
    assert cert.san == []
    assert cert.xmpp_addrs == []
    assert cert.subject_common_name == "chat.example.com"
