import logging
import threading
from pathlib import Path
from typing import Iterable, Union

from certifi import where
from cryptography import x509
from cryptography.hazmat.primitives.serialization import pkcs12

from .certificate import PeerCertificate
from .exceptions import TrustStoreLoadError
from .models import TruststoreType, TrustStoreConfig

__module__ = "servertrust.truststore"

logger = logging.getLogger(__name__)


class TrustedRootSet:
    """Immutable set of trust anchors, membership is by exact certificate
    (SHA-256 over the DER encoding) and never by subject name, so a forged
    certificate reusing a trusted subject with another key is not a member."""

    __slots__ = ("_roots", "source")

    def __init__(self, certificates: Iterable = (), source: str = None) -> None:
        roots = {}
        for cert in certificates:
            root = PeerCertificate.load(cert)
            roots[root.sha256_fingerprint] = root
        self._roots = roots
        self.source = source

    def __contains__(self, certificate) -> bool:
        try:
            root = PeerCertificate.load(certificate)
        except (TypeError, ValueError):
            return False
        return root.sha256_fingerprint in self._roots

    def __len__(self) -> int:
        return len(self._roots)

    def __iter__(self):
        return iter(self._roots.values())

    def __repr__(self) -> str:
        return f"<TrustedRootSet source={self.source!r} roots={len(self)}>"

    @classmethod
    def load(
        cls,
        path: Union[str, Path, None] = None,
        store_type: Union[TruststoreType, str] = TruststoreType.PEM,
        password: Union[str, None] = None,
    ) -> "TrustedRootSet":
        if path is None:
            path = where()
        if not isinstance(path, (str, Path)):
            raise TypeError(
                f"provided an invalid type {type(path)} for path, expected str"
            )
        if password is not None and not isinstance(password, str):
            raise TypeError(
                f"provided an invalid type {type(password)} for password, expected str"
            )
        if isinstance(store_type, str) and not isinstance(store_type, TruststoreType):
            store_type = store_type.upper()
        try:
            store_type = TruststoreType(store_type)
        except ValueError as err:
            raise TrustStoreLoadError(
                str(path), str(store_type), "unsupported store type"
            ) from err

        store_path = Path(path)
        try:
            data = store_path.read_bytes()
        except OSError as err:
            raise TrustStoreLoadError(
                str(path), store_type.value, err.strerror
            ) from err
        try:
            certificates = _parse(data, store_type, password)
        except (ValueError, TypeError) as err:
            raise TrustStoreLoadError(str(path), store_type.value, str(err)) from err
        if not certificates:
            raise TrustStoreLoadError(
                str(path), store_type.value, "no certificates found"
            )

        roots = cls(certificates, source=store_path.as_posix())
        logger.info(
            f"Loaded {len(roots)} trusted roots from {store_type.value} store {store_path.as_posix()}"
        )
        return roots

    @classmethod
    def from_config(cls, config: TrustStoreConfig) -> "TrustedRootSet":
        return cls.load(
            path=config.path, store_type=config.type, password=config.password
        )


def _parse(
    data: bytes, store_type: TruststoreType, password: Union[str, None]
) -> list[x509.Certificate]:
    if store_type == TruststoreType.PEM:
        return x509.load_pem_x509_certificates(data)
    if store_type == TruststoreType.DER:
        return [x509.load_der_x509_certificate(data)]
    _, cert, additional = pkcs12.load_key_and_certificates(
        data, password.encode("utf-8") if password is not None else None
    )
    certificates = [] if cert is None else [cert]
    certificates.extend(additional)
    return certificates


class TrustStoreHolder:
    """Reloadable reference to the current TrustedRootSet.

    Readers take ``snapshot`` once per evaluation; ``reload`` builds the
    replacement before swapping the reference so readers see either the old
    or the new set, never a mix.
    """

    def __init__(
        self, roots: TrustedRootSet, config: Union[TrustStoreConfig, None] = None
    ) -> None:
        if not isinstance(roots, TrustedRootSet):
            raise TypeError(
                f"provided an invalid type {type(roots)} for roots, expected TrustedRootSet"
            )
        self._roots = roots
        self._config = config
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: TrustStoreConfig) -> "TrustStoreHolder":
        return cls(TrustedRootSet.from_config(config), config=config)

    @property
    def snapshot(self) -> TrustedRootSet:
        return self._roots

    def replace(self, roots: TrustedRootSet) -> TrustedRootSet:
        if not isinstance(roots, TrustedRootSet):
            raise TypeError(
                f"provided an invalid type {type(roots)} for roots, expected TrustedRootSet"
            )
        with self._lock:
            previous = self._roots
            self._roots = roots
        logger.info(f"Trusted roots replaced {previous!r} -> {roots!r}")
        return previous

    def reload(self, config: Union[TrustStoreConfig, None] = None) -> TrustedRootSet:
        config = config or self._config
        if config is None:
            raise ValueError("no trust store configuration available to reload from")
        # a failed load leaves the current snapshot in place
        roots = TrustedRootSet.from_config(config)
        with self._lock:
            self._config = config
        self.replace(roots)
        return roots
