import logging

from ..certificate import PeerCertificate
from ..exceptions import IdentityMismatchError
from ..models import CheckName
from . import BaseCheck, CheckContext

logger = logging.getLogger(__name__)

WILDCARD_MARKER = "*."
COMMON_NAME_PREFIX = "CN="


def peer_identity(certificate: PeerCertificate) -> str:
    """Identity the remote server claims in its certificate.

    The id-on-xmppAddr subjectAltName takes precedence, then the subject
    common name. A subject without a common name yields the whole subject.
    """
    xmpp_addrs = certificate.xmpp_addrs
    if xmpp_addrs:
        return xmpp_addrs[0]
    common_name = certificate.subject_common_name
    if common_name is not None:
        return common_name
    name = certificate.subject
    if name.startswith(COMMON_NAME_PREFIX):
        name = name[len(COMMON_NAME_PREFIX) :]  # noqa: E203
    return name


def identity_matches(identity: str, target: str) -> bool:
    # suffix match, "*.example.com" also accepts "evil-example.com"
    if identity.startswith(WILDCARD_MARKER):
        return target.endswith(identity[len(WILDCARD_MARKER) :])  # noqa: E203
    return target == identity


class IdentityMatcher(BaseCheck):
    name = CheckName.IDENTITY

    def evaluate(self, context: CheckContext) -> None:
        if not identity_matches(context.peer_identity, context.target):
            logger.warning(
                f"{context.target} does not match certificate identity {context.peer_identity}"
            )
            raise IdentityMismatchError(context.peer_identity, context.target)
        logger.debug(f"{context.target} matches identity {context.peer_identity}")
