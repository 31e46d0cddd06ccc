import logging

from .. import audit
from ..exceptions import RootNotTrustedError
from ..models import CheckName
from . import BaseCheck, CheckContext

logger = logging.getLogger(__name__)


class RootTrustChecker(BaseCheck):
    name = CheckName.ROOT

    def evaluate(self, context: CheckContext) -> None:
        chain_length = len(context.chain)
        if context.roots is not None and context.root in context.roots:
            logger.debug(
                f"{context.target} root {context.root.sha256_fingerprint} is a trusted anchor"
            )
            return
        if chain_length == 1 and context.policy.accept_self_signed:
            audit.self_signed_accepted(
                context.peer_identity, context.target, context.audit_observer
            )
            return
        logger.warning(
            f"{context.target} root {context.root.subject} ({context.root.sha256_fingerprint}) not found in trusted roots"
        )
        raise RootNotTrustedError(
            context.peer_identity, context.target, chain_length=chain_length
        )
