import logging
from os import path
from copy import deepcopy
from pathlib import Path
from typing import Union

import yaml
from pydantic import ValidationError

from .checks import AuditObserver
from .evaluator import TrustEvaluator
from .exceptions import TrustStoreLoadError
from .models import Configuration, OnLoadError
from .truststore import TrustStoreHolder

__module__ = "servertrust.config"

logger = logging.getLogger(__name__)
DEFAULT_CONFIG = ".servertrust-config.yaml"
CONFIG_PATH = f"{path.expanduser('~')}/.config/servertrust"

DEFAULT_VALUES = b"""
---
hostname:

policy:
  verify_chain: True
  verify_root: True
  check_domain_match: True
  check_expiry: True
  accept_self_signed: False

truststore:
  path:
  type: PEM
  password:
  on_load_error: raise
"""


def _deep_merge(*args) -> dict:
    assert len(args) >= 2, "_deep_merge requires at least two dicts to merge"
    result = deepcopy(args[0])
    if not isinstance(result, dict):
        raise AttributeError(
            f"_deep_merge only takes dict arguments, got {type(result)} {result}"
        )
    for merge_dict in args[1:]:
        if not isinstance(merge_dict, dict):
            raise AttributeError(
                f"_deep_merge only takes dict arguments, got {type(merge_dict)} {merge_dict}"
            )
        for key, merge_val in merge_dict.items():
            result_val = result.get(key)
            if isinstance(result_val, dict) and isinstance(merge_val, dict):
                result[key] = _deep_merge(result_val, merge_val)
            else:
                result[key] = deepcopy(merge_val)
    return result


def default_config() -> dict:
    return yaml.safe_load(DEFAULT_VALUES)


def load_config(filename: str = DEFAULT_CONFIG) -> dict:
    config_path = Path(filename)
    if config_path.is_file():
        logger.debug(config_path.absolute())
        return yaml.safe_load(config_path.read_text(encoding="utf8")) or {}
    return {}


def combine_configs(user_conf: dict, custom_conf: dict) -> dict:
    return _deep_merge(default_config(), user_conf or {}, custom_conf or {})


def get_config(custom_values: Union[dict, None] = None) -> dict:
    user_config = load_config(path.join(CONFIG_PATH, DEFAULT_CONFIG))
    return combine_configs(user_config, custom_values or {})


def to_configuration(config: dict) -> Configuration:
    if not isinstance(config, dict):
        raise TypeError(
            f"provided an invalid type {type(config)} for config, expected dict"
        )
    try:
        return Configuration.model_validate(config)
    except ValidationError as err:
        raise AttributeError(f"invalid servertrust configuration: {err}") from err


def build_evaluator(
    config: Union[Configuration, dict, None] = None,
    audit_observer: Union[AuditObserver, None] = None,
) -> TrustEvaluator:
    if config is None:
        config = get_config(custom_values=load_config())
    if isinstance(config, dict):
        config = to_configuration(config)
    if not isinstance(config, Configuration):
        raise TypeError(
            f"provided an invalid type {type(config)} for config, expected Configuration"
        )
    policy = config.policy
    roots = None
    if policy.verify_root:
        try:
            roots = TrustStoreHolder.from_config(config.truststore)
        except TrustStoreLoadError as err:
            if config.truststore.on_load_error != OnLoadError.DISABLE_ROOT_CHECK:
                raise
            logger.warning(
                f"{err}; root certificate checking is DISABLED because truststore.on_load_error is {OnLoadError.DISABLE_ROOT_CHECK.value}"
            )
            policy = policy.model_copy(update={"verify_root": False})
    return TrustEvaluator(roots=roots, policy=policy, audit_observer=audit_observer)
