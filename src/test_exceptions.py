import pytest
from servertrust import exceptions


def test_openssl_errno():
    openssl_errno = 18
    with pytest.raises(exceptions.TrustError) as err:
        raise exceptions.TrustError(openssl_errno=openssl_errno)
    assert str(err.value) == exceptions.X509_MESSAGES[openssl_errno]


def test_message_with_errno():
    err = exceptions.ChainLinkageError("chat.example.com", target="chat.example.com")
    assert isinstance(err, ValueError)
    assert str(err).startswith("subject/issuer verification failed of chat.example.com\n")
    assert err.openssl_errno == exceptions.X509_V_ERR_SUBJECT_ISSUER_MISMATCH


def test_trust_store_load_error():
    err = exceptions.TrustStoreLoadError("/etc/cacerts", "PKCS12", "bad password")
    assert isinstance(err, OSError)
    assert not isinstance(err, exceptions.TrustError)
    assert str(err) == "unable to load PKCS12 trust store from /etc/cacerts: bad password"
