from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field


class TruststoreType(str, Enum):
    PEM = "PEM"
    DER = "DER"
    PKCS12 = "PKCS12"


class OnLoadError(str, Enum):
    RAISE = "raise"
    DISABLE_ROOT_CHECK = "disable_root_check"


class CheckName(str, Enum):
    CHAIN = "verify_chain"
    ROOT = "verify_root"
    IDENTITY = "check_domain_match"
    VALIDITY = "check_expiry"


class PolicySet(BaseModel):
    model_config = ConfigDict(frozen=True)

    verify_chain: bool = Field(default=True)
    verify_root: bool = Field(default=True)
    check_domain_match: bool = Field(default=True)
    check_expiry: bool = Field(default=True)
    accept_self_signed: bool = Field(
        default=False,
        description="Trust a lone untrusted certificate, only applies when verify_root is enabled",
    )

    @classmethod
    def disabled(cls) -> "PolicySet":
        return cls(
            verify_chain=False,
            verify_root=False,
            check_domain_match=False,
            check_expiry=False,
        )


class TrustStoreConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: Union[str, None] = Field(
        default=None, description="Defaults to the certifi CA bundle"
    )
    type: TruststoreType = Field(default=TruststoreType.PEM)
    password: Union[str, None] = Field(default=None)
    on_load_error: OnLoadError = Field(default=OnLoadError.RAISE)


class Configuration(BaseModel):
    model_config = ConfigDict(frozen=True)

    hostname: Union[str, None] = Field(default=None)
    policy: PolicySet = Field(default_factory=PolicySet)
    truststore: TrustStoreConfig = Field(default_factory=TrustStoreConfig)
