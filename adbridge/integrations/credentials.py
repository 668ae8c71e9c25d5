"""Per-call platform credentials.

Distributors take these by value on every call; nothing here is cached.
The ``load_*`` helpers read ``ADBRIDGE_<PLATFORM>_*`` env vars for the CLI.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional, Union


@dataclass(frozen=True)
class MetaCredentials:
    access_token: str
    ad_account_id: str
    page_id: str = ""

    @property
    def account_path(self) -> str:
        return self.ad_account_id if self.ad_account_id.startswith("act_") else f"act_{self.ad_account_id}"

    def missing(self) -> List[str]:
        out = []
        if not self.access_token:
            out.append("access_token")
        if not self.ad_account_id:
            out.append("ad_account_id")
        if not self.page_id:
            out.append("page_id")
        return out


@dataclass(frozen=True)
class GoogleCredentials:
    access_token: str
    customer_id: str
    developer_token: str
    login_customer_id: Optional[str] = None
    business_name: str = ""

    @property
    def normalized_customer_id(self) -> str:
        return self.customer_id.replace("-", "").strip()

    def missing(self) -> List[str]:
        out = []
        if not self.access_token:
            out.append("access_token")
        if not self.customer_id:
            out.append("customer_id")
        if not self.developer_token:
            out.append("developer_token")
        return out


@dataclass(frozen=True)
class TikTokCredentials:
    access_token: str
    advertiser_id: str
    identity_id: Optional[str] = None
    display_name: str = ""

    def missing(self) -> List[str]:
        out = []
        if not self.access_token:
            out.append("access_token")
        if not self.advertiser_id:
            out.append("advertiser_id")
        return out


@dataclass(frozen=True)
class LinkedInCredentials:
    access_token: str
    ad_account_id: str
    organization_urn: str = ""

    @property
    def account_urn(self) -> str:
        if self.ad_account_id.startswith("urn:li:sponsoredAccount:"):
            return self.ad_account_id
        return f"urn:li:sponsoredAccount:{self.ad_account_id}"

    def missing(self) -> List[str]:
        out = []
        if not self.access_token:
            out.append("access_token")
        if not self.ad_account_id:
            out.append("ad_account_id")
        return out


Credentials = Union[MetaCredentials, GoogleCredentials, TikTokCredentials, LinkedInCredentials]


def _env(name: str) -> str:
    return os.getenv(name, "").strip()


def load_meta_credentials() -> MetaCredentials:
    return MetaCredentials(
        access_token=_env("ADBRIDGE_META_ACCESS_TOKEN"),
        ad_account_id=_env("ADBRIDGE_META_AD_ACCOUNT_ID"),
        page_id=_env("ADBRIDGE_META_PAGE_ID"),
    )


def load_google_credentials() -> GoogleCredentials:
    return GoogleCredentials(
        access_token=_env("ADBRIDGE_GOOGLE_ACCESS_TOKEN"),
        customer_id=_env("ADBRIDGE_GOOGLE_CUSTOMER_ID"),
        developer_token=_env("ADBRIDGE_GOOGLE_DEVELOPER_TOKEN"),
        login_customer_id=_env("ADBRIDGE_GOOGLE_LOGIN_CUSTOMER_ID") or None,
        business_name=_env("ADBRIDGE_GOOGLE_BUSINESS_NAME"),
    )


def load_tiktok_credentials() -> TikTokCredentials:
    return TikTokCredentials(
        access_token=_env("ADBRIDGE_TIKTOK_ACCESS_TOKEN"),
        advertiser_id=_env("ADBRIDGE_TIKTOK_ADVERTISER_ID"),
        identity_id=_env("ADBRIDGE_TIKTOK_IDENTITY_ID") or None,
        display_name=_env("ADBRIDGE_TIKTOK_DISPLAY_NAME"),
    )


def load_linkedin_credentials() -> LinkedInCredentials:
    return LinkedInCredentials(
        access_token=_env("ADBRIDGE_LINKEDIN_ACCESS_TOKEN"),
        ad_account_id=_env("ADBRIDGE_LINKEDIN_AD_ACCOUNT_ID"),
        organization_urn=_env("ADBRIDGE_LINKEDIN_ORGANIZATION_URN"),
    )
