from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Union

from ..certificate import PeerCertificate
from ..models import CheckName, PolicySet
from ..truststore import TrustedRootSet

AuditObserver = Callable[[str], None]


@dataclass(frozen=True)
class CheckContext:
    chain: list[PeerCertificate]
    target: str
    peer_identity: str
    policy: PolicySet
    reference_instant: datetime
    roots: Union[TrustedRootSet, None] = None
    audit_observer: Union[AuditObserver, None] = field(default=None, compare=False)

    @property
    def leaf(self) -> PeerCertificate:
        return self.chain[0]

    @property
    def root(self) -> PeerCertificate:
        return self.chain[-1]


class BaseCheck:
    name: CheckName

    def evaluate(self, context: CheckContext) -> None:
        raise NotImplementedError
