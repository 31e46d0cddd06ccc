import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Union

from . import util
from .certificate import PeerCertificate, load_chain
from .checks import AuditObserver, BaseCheck, CheckContext
from .checks.chain import ChainVerifier
from .checks.identity import IdentityMatcher, peer_identity
from .checks.root import RootTrustChecker
from .checks.validity import ValidityChecker
from .exceptions import TrustError
from .models import CheckName, PolicySet
from .truststore import TrustedRootSet, TrustStoreHolder

__module__ = "servertrust.evaluator"

logger = logging.getLogger(__name__)

CHECKS: list[BaseCheck] = [
    ChainVerifier(),
    RootTrustChecker(),
    IdentityMatcher(),
    ValidityChecker(),
]


@dataclass
class EvaluationResult:
    trusted: bool
    target: str
    peer_identity: str
    reference_instant: datetime
    checks: list[CheckName] = field(default_factory=list)
    error: Union[TrustError, None] = None

    @property
    def failed_check(self) -> Union[CheckName, None]:
        if self.error is None or not self.checks:
            return None
        return self.checks[-1]

    def to_dict(self) -> dict:
        return {
            "trusted": self.trusted,
            "target": self.target,
            "peer_identity": self.peer_identity,
            "reference_instant": self.reference_instant.isoformat(),
            "checks": [check.value for check in self.checks],
            "failed_check": None
            if self.failed_check is None
            else self.failed_check.value,
            "error": None if self.error is None else type(self.error).__name__,
            "reason": None if self.error is None else str(self.error),
            "openssl_errno": None
            if self.error is None
            else self.error.openssl_errno,
        }


class TrustEvaluator:
    """Decides whether a server certificate chain is trusted.

    Holds only read-only state: the default policy and the trusted roots,
    either a fixed ``TrustedRootSet`` or a ``TrustStoreHolder`` that may be
    reloaded while evaluations are running.
    """

    def __init__(
        self,
        roots: Union[TrustedRootSet, TrustStoreHolder, None] = None,
        policy: Union[PolicySet, None] = None,
        audit_observer: Union[AuditObserver, None] = None,
    ) -> None:
        if roots is not None and not isinstance(
            roots, (TrustedRootSet, TrustStoreHolder)
        ):
            raise TypeError(
                f"provided an invalid type {type(roots)} for roots, expected TrustedRootSet"
            )
        if policy is not None and not isinstance(policy, PolicySet):
            raise TypeError(
                f"provided an invalid type {type(policy)} for policy, expected PolicySet"
            )
        if audit_observer is not None and not callable(audit_observer):
            raise TypeError(
                f"provided an invalid type {type(audit_observer)} for audit_observer, expected callable"
            )
        self._roots = roots
        self.policy = policy or PolicySet()
        self.audit_observer = audit_observer

    @property
    def roots(self) -> Union[TrustedRootSet, None]:
        if isinstance(self._roots, TrustStoreHolder):
            return self._roots.snapshot
        return self._roots

    def evaluate(
        self,
        chain: list,
        target: str,
        policy: Union[PolicySet, None] = None,
        reference_instant: Union[datetime, None] = None,
    ) -> EvaluationResult:
        if not isinstance(target, str):
            raise TypeError(
                f"provided an invalid type {type(target)} for target, expected str"
            )
        if not target:
            raise ValueError("provided an empty target hostname")
        if policy is not None and not isinstance(policy, PolicySet):
            raise TypeError(
                f"provided an invalid type {type(policy)} for policy, expected PolicySet"
            )
        if reference_instant is not None and not isinstance(
            reference_instant, datetime
        ):
            raise TypeError(
                f"provided an invalid type {type(reference_instant)} for reference_instant, expected datetime"
            )
        certificates: list[PeerCertificate] = load_chain(chain)
        policy = policy or self.policy
        if policy.verify_root and self._roots is None:
            raise ValueError("verify_root is enabled but no trusted roots were provided")

        context = CheckContext(
            chain=certificates,
            target=target,
            peer_identity=peer_identity(certificates[0]),
            policy=policy,
            reference_instant=util.as_utc(reference_instant or util.utcnow()),
            roots=self.roots,
            audit_observer=self.audit_observer,
        )
        result = EvaluationResult(
            trusted=False,
            target=target,
            peer_identity=context.peer_identity,
            reference_instant=context.reference_instant,
        )
        for check in CHECKS:
            if not getattr(policy, check.name.value):
                continue
            result.checks.append(check.name)
            try:
                check.evaluate(context)
            except TrustError as err:
                result.error = err
                logger.warning(
                    f"{target} rejected by {check.name.value}: {type(err).__name__}"
                )
                return result

        result.trusted = True
        logger.info(
            f"{target} trusted peer {context.peer_identity} after {','.join(c.value for c in result.checks) or 'no checks'}"
        )
        return result

    def check_server_trusted(
        self,
        chain: list,
        target: str,
        policy: Union[PolicySet, None] = None,
        reference_instant: Union[datetime, None] = None,
    ) -> EvaluationResult:
        result = self.evaluate(chain, target, policy, reference_instant)
        if result.error is not None:
            raise result.error
        return result
