import logging

from ..exceptions import ChainLinkageError, SignatureVerificationError
from ..models import CheckName
from . import BaseCheck, CheckContext

logger = logging.getLogger(__name__)


class ChainVerifier(BaseCheck):
    name = CheckName.CHAIN

    def evaluate(self, context: CheckContext) -> None:
        # root-most first, each step needs its issuer established by the previous one
        issuer = None
        for depth in range(len(context.chain) - 1, -1, -1):
            certificate = context.chain[depth]
            if issuer is not None:
                if not certificate.issued_by(issuer):
                    logger.warning(
                        f"{context.target} depth {depth} issuer {certificate.issuer} does not match subject {issuer.subject}"
                    )
                    raise ChainLinkageError(context.peer_identity, context.target)
                if not certificate.signed_by(issuer):
                    logger.warning(
                        f"{context.target} depth {depth} signature does not verify against {issuer.subject}"
                    )
                    raise SignatureVerificationError(
                        context.peer_identity, context.target
                    )
            issuer = certificate
        logger.debug(f"{context.target} chain of {len(context.chain)} linked and signed")
