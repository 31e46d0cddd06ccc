import sys
import logging
from datetime import datetime
from typing import Union

from . import exceptions
from .certificate import PeerCertificate
from .config import build_evaluator, get_config, load_config, to_configuration
from .evaluator import EvaluationResult, TrustEvaluator
from .models import Configuration, PolicySet, TrustStoreConfig, TruststoreType
from .transport import ServerTrustManager
from .truststore import TrustedRootSet, TrustStoreHolder

__version__ = "servertrust==1.0.0"
__module__ = "servertrust"

assert sys.version_info >= (3, 9), "Requires Python 3.9 or newer"
logger = logging.getLogger(__name__)


def evaluate(
    chain: list,
    hostname: str,
    config: Union[Configuration, dict, None] = None,
    policy: Union[PolicySet, None] = None,
    reference_instant: Union[datetime, None] = None,
    audit_observer=None,
) -> tuple[bool, EvaluationResult]:
    if not isinstance(hostname, str):
        raise TypeError(
            f"provided an invalid type {type(hostname)} for hostname, expected str"
        )
    if not isinstance(chain, (list, tuple)):
        raise TypeError(
            f"provided an invalid type {type(chain)} for chain, expected list"
        )
    if config is not None and not isinstance(config, (Configuration, dict)):
        raise TypeError(
            f"provided an invalid type {type(config)} for config, expected Configuration"
        )
    if policy is not None and not isinstance(policy, PolicySet):
        raise TypeError(
            f"provided an invalid type {type(policy)} for policy, expected PolicySet"
        )

    evaluator = build_evaluator(config, audit_observer=audit_observer)
    result = evaluator.evaluate(
        chain, hostname, policy=policy, reference_instant=reference_instant
    )
    return result.trusted, result
