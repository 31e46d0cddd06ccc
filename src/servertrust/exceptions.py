__module__ = "servertrust.exceptions"

X509_V_ERR_CERT_SIGNATURE_FAILURE = 7
X509_V_ERR_CERT_NOT_YET_VALID = 9
X509_V_ERR_CERT_HAS_EXPIRED = 10
X509_V_ERR_DEPTH_ZERO_SELF_SIGNED_CERT = 18
X509_V_ERR_UNABLE_TO_GET_ISSUER_CERT_LOCALLY = 20
X509_V_ERR_CERT_UNTRUSTED = 27
X509_V_ERR_SUBJECT_ISSUER_MISMATCH = 29
X509_V_ERR_HOSTNAME_MISMATCH = 62
X509_MESSAGES = {
    7: "certificate signature failure, the signature of the certificate is invalid.",
    9: "certificate is not yet valid, the certificate is not yet valid: the notBefore date is after the current time.",
    10: "certificate has expired, the certificate has expired: that is the notAfter date is before the current time.",
    18: "self signed certificate, the passed certificate is self signed and the same certificate cannot be found in the list of trusted certificates",
    20: "unable to get local issuer certificate, the issuer certificate could not be found: this occurs if the issuer certificate of an untrusted certificate cannot be found.",
    27: "certificate not trusted, the root CA is not marked as trusted for the specified purpose.",
    29: "subject issuer mismatch, the current candidate issuer certificate was rejected because its subject name did not match the issuer name of the current certificate.",
    62: "hostname mismatch, the certificate identity does not match the host name the client connected to.",
}

TRUST_ERROR_CHAIN_LINKAGE = "subject/issuer verification failed of {peer_identity}"
TRUST_ERROR_SIGNATURE = "signature verification failed of {peer_identity}"
TRUST_ERROR_ROOT_NOT_TRUSTED = "root certificate not trusted of {peer_identity}"
TRUST_ERROR_TARGET = "target verification failed of {peer_identity}"
TRUST_ERROR_INVALID_DATE = "invalid date of {target}"
TRUST_ERROR_NO_PEER_CERTIFICATE = "remote server presented no certificate"
TRUST_STORE_ERROR_LOAD = "unable to load {store_type} trust store from {path}"


class TrustError(ValueError):
    """Raised when a peer certificate chain must not be trusted"""

    def __init__(
        self,
        message: str = None,
        openssl_errno: int = None,
        peer_identity: str = None,
        target: str = None,
    ):
        if openssl_errno in X509_MESSAGES.keys():
            if message is None:
                message = X509_MESSAGES[openssl_errno]
            elif isinstance(message, str):
                message += "\n" + X509_MESSAGES[openssl_errno]
        super().__init__(message)
        self.openssl_errno = openssl_errno
        self.peer_identity = peer_identity
        self.target = target


class ChainLinkageError(TrustError):
    def __init__(self, peer_identity: str, target: str = None):
        super().__init__(
            TRUST_ERROR_CHAIN_LINKAGE.format(peer_identity=peer_identity),
            openssl_errno=X509_V_ERR_SUBJECT_ISSUER_MISMATCH,
            peer_identity=peer_identity,
            target=target,
        )


class SignatureVerificationError(TrustError):
    def __init__(self, peer_identity: str, target: str = None):
        super().__init__(
            TRUST_ERROR_SIGNATURE.format(peer_identity=peer_identity),
            openssl_errno=X509_V_ERR_CERT_SIGNATURE_FAILURE,
            peer_identity=peer_identity,
            target=target,
        )


class RootNotTrustedError(TrustError):
    def __init__(self, peer_identity: str, target: str = None, chain_length: int = 1):
        super().__init__(
            TRUST_ERROR_ROOT_NOT_TRUSTED.format(peer_identity=peer_identity),
            openssl_errno=X509_V_ERR_DEPTH_ZERO_SELF_SIGNED_CERT
            if chain_length == 1
            else X509_V_ERR_UNABLE_TO_GET_ISSUER_CERT_LOCALLY,
            peer_identity=peer_identity,
            target=target,
        )


class IdentityMismatchError(TrustError):
    def __init__(self, peer_identity: str, target: str = None):
        super().__init__(
            TRUST_ERROR_TARGET.format(peer_identity=peer_identity),
            openssl_errno=X509_V_ERR_HOSTNAME_MISMATCH,
            peer_identity=peer_identity,
            target=target,
        )


class ExpiredCertificateError(TrustError):
    def __init__(self, target: str, not_yet_valid: bool = False, peer_identity: str = None):
        super().__init__(
            TRUST_ERROR_INVALID_DATE.format(target=target),
            openssl_errno=X509_V_ERR_CERT_NOT_YET_VALID
            if not_yet_valid
            else X509_V_ERR_CERT_HAS_EXPIRED,
            peer_identity=peer_identity,
            target=target,
        )


class TrustStoreLoadError(OSError):
    """Used when the trusted root store can not be read or parsed at configuration time"""

    def __init__(self, path: str, store_type: str, reason: str = None):
        message = TRUST_STORE_ERROR_LOAD.format(store_type=store_type, path=path)
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.path = path
        self.store_type = store_type
