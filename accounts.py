import json
import logging
import re
from types import MappingProxyType
from typing import Mapping, Optional
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, ValidationError

logger = logging.getLogger(__name__)

# https://res.cloudinary.com/<cloud>/<image|video>/<type>/v123/...
RESOURCE_URL_RE = re.compile(r"^/([^/]+)/(image|video)/([^/]+)/")


class Account(BaseModel):
    model_config = ConfigDict(frozen=True)

    cloud_name: Optional[str] = None
    api_key: Optional[str] = None
    api_secret: Optional[str] = None

    @property
    def is_usable(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)


class AccountCredentials(BaseModel):
    api_key: str
    api_secret: str


def parse_resource_locator(secure_url) -> dict:
    """
    Extracts cloud_name, resource_type and type from a delivery URL.
    Returns {} when the URL doesn't look like one.
    """
    if not isinstance(secure_url, str):
        return {}

    # matched on the path only, the host is never the cloud name
    m = RESOURCE_URL_RE.match(urlsplit(secure_url).path)
    if not m:
        return {}

    cloud_name, resource_type, upload_type = m.groups()
    return {"cloud_name": cloud_name, "resource_type": resource_type, "type": upload_type}


def load_accounts(raw_json: str) -> dict:
    """
    Parses CLOUDINARY_ACCOUNTS_JSON: {"<cloud_name>": {"api_key": ..., "api_secret": ...}}
    A table that can't be parsed gives an empty table, bad entries are skipped.
    """
    try:
        data = json.loads(raw_json or "{}")
    except ValueError as e:
        logger.error("Failed to parse CLOUDINARY_ACCOUNTS_JSON: %s", e)
        return {}

    if not isinstance(data, dict):
        logger.error("CLOUDINARY_ACCOUNTS_JSON must be a JSON object, got %s", type(data).__name__)
        return {}

    accounts = {}
    for cloud_name, entry in data.items():
        try:
            creds = AccountCredentials.model_validate(entry)
        except ValidationError:
            logger.warning("Skipping account %r: api_key and api_secret are required", cloud_name)
            continue
        accounts[cloud_name] = Account(cloud_name=cloud_name, **creds.model_dump())

    return accounts


class AccountResolver:
    def __init__(self, accounts: Mapping[str, Account] = None, default: Account = None):
        self.accounts = MappingProxyType(dict(accounts or {}))
        self.default = default
        # first hit wins
        self._lookups = (self._from_table, self._from_default)

    @classmethod
    def from_settings(cls, settings):
        accounts = load_accounts(settings.accounts_json)
        default = None
        if settings.cloud_name or settings.api_key or settings.api_secret:
            default = Account(
                cloud_name=settings.cloud_name,
                api_key=settings.api_key,
                api_secret=settings.api_secret,
            )

        logger.info(
            "Loaded %d Cloudinary account(s), default account %s",
            len(accounts),
            "configured" if default is not None else "not configured",
        )
        return cls(accounts, default)

    def _from_table(self, cloud_name: str) -> Optional[Account]:
        return self.accounts.get(cloud_name)

    def _from_default(self, cloud_name: str) -> Optional[Account]:
        if self.default is not None and self.default.cloud_name == cloud_name:
            return self.default
        return None

    def resolve(self, cloud_name: Optional[str]) -> Optional[Account]:
        """
        Exact, case-sensitive lookup: account table first, then the default account.
        """
        if not cloud_name:
            return None

        for lookup in self._lookups:
            account = lookup(cloud_name)
            if account is not None:
                return account
        return None
