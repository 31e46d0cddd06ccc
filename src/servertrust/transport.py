import logging
from datetime import datetime
from typing import Union

from OpenSSL import SSL
from OpenSSL.crypto import X509

from . import exceptions
from .evaluator import EvaluationResult, TrustEvaluator

__module__ = "servertrust.transport"

logger = logging.getLogger(__name__)


class ServerTrustManager:
    """Binds a TrustEvaluator to one connection attempt against ``hostname``.

    OpenSSL's own verdict is recorded by ``verifier`` for diagnostics only,
    the trust decision is made by ``verify_connection`` once the peer chain
    is available. ``verifier`` always returns True, so the handshake
    completes for any peer: callers must call ``verify_connection`` before
    sending data and close the connection when it raises.
    """

    _default_verify_mode: str = "VERIFY_PEER"

    def __init__(self, hostname: str, evaluator: TrustEvaluator) -> None:
        if not isinstance(hostname, str) or not hostname:
            raise ValueError(f"provided an invalid hostname {hostname!r}")
        if not isinstance(evaluator, TrustEvaluator):
            raise TypeError(
                f"provided an invalid type {type(evaluator)} for evaluator, expected TrustEvaluator"
            )
        self.hostname = hostname
        self.evaluator = evaluator
        self._verifier_errors: list[tuple[X509, int, int]] = []

    @property
    def accepted_issuers(self) -> list:
        return []

    @property
    def verifier_errors(self) -> list[tuple[X509, int, int]]:
        return list(self._verifier_errors)

    def prepare_context(self, context: SSL.Context) -> SSL.Context:
        if not isinstance(context, SSL.Context):
            raise TypeError(
                f"provided an invalid type {type(context)} for context, expected OpenSSL.SSL.Context"
            )
        context.set_verify(
            getattr(SSL, ServerTrustManager._default_verify_mode), self.verifier
        )
        return context

    def verifier(
        self,
        conn: SSL.Connection,
        server_cert: X509,
        errno: int,
        depth: int,
        preverify_ok: int,
    ) -> bool:
        if errno in exceptions.X509_MESSAGES.keys():
            self._verifier_errors.append((server_cert, errno, depth))
            logger.debug(
                f"{self.hostname} OpenSSL depth {depth} errno {errno}: {exceptions.X509_MESSAGES[errno]}"
            )
        return True

    def check_server_trusted(
        self, chain: list, reference_instant: Union[datetime, None] = None
    ) -> EvaluationResult:
        return self.evaluator.check_server_trusted(
            chain, self.hostname, reference_instant=reference_instant
        )

    def verify_connection(
        self, conn: SSL.Connection, reference_instant: Union[datetime, None] = None
    ) -> EvaluationResult:
        chain = conn.get_peer_cert_chain()
        if not chain:
            leaf = conn.get_peer_certificate()
            chain = [] if leaf is None else [leaf]
        if not chain:
            raise exceptions.TrustError(
                exceptions.TRUST_ERROR_NO_PEER_CERTIFICATE, target=self.hostname
            )
        logger.debug(f"{self.hostname} Peer cert chain length: {len(chain)}")
        return self.check_server_trusted(list(chain), reference_instant)
