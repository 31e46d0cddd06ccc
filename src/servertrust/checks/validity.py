import logging

from ..exceptions import ExpiredCertificateError
from ..models import CheckName
from ..util import date_diff
from . import BaseCheck, CheckContext

logger = logging.getLogger(__name__)


class ValidityChecker(BaseCheck):
    name = CheckName.VALIDITY

    def evaluate(self, context: CheckContext) -> None:
        for depth, certificate in enumerate(context.chain):
            if certificate.valid_at(context.reference_instant):
                continue
            not_yet_valid = context.reference_instant < certificate.not_before
            logger.warning(
                f"{context.target} depth {depth} {certificate.subject} "
                + (
                    f"not valid before {certificate.not_before.isoformat()}"
                    if not_yet_valid
                    else date_diff(certificate.not_after, context.reference_instant)
                )
            )
            raise ExpiredCertificateError(
                context.target,
                not_yet_valid=not_yet_valid,
                peer_identity=context.peer_identity,
            )
