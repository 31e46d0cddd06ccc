import logging
from typing import Callable, Union

__module__ = "servertrust.audit"

logger = logging.getLogger(__name__)

AUDIT_SELF_SIGNED_ACCEPTED = "Accepting self-signed certificate of remote server: {peer_identity}"


def self_signed_accepted(
    peer_identity: str,
    target: str = None,
    observer: Union[Callable[[str], None], None] = None,
) -> None:
    logger.warning(
        AUDIT_SELF_SIGNED_ACCEPTED.format(peer_identity=peer_identity),
        extra={
            "audit_event": "self_signed_accepted",
            "peer_identity": peer_identity,
            "target": target,
        },
    )
    if observer is not None:
        observer(peer_identity)
