import logging

import cloudinary.api

from accounts import Account, AccountResolver, parse_resource_locator
from exceptions import CredentialsUnavailable, InvalidRequest, UpstreamError

logger = logging.getLogger(__name__)


def delete_resources(account: Account, public_id: str, resource_type: str = "image",
                     type: str = "upload", invalidate: bool = True):
    """
    Deletes one asset from the given Cloudinary account.
    resource_type can be: image / video / raw
    """
    # credentials go per call, the global cloudinary.config() is never touched
    res = cloudinary.api.delete_resources(
        [public_id],
        resource_type=resource_type,
        type=type,
        invalidate=invalidate,
        cloud_name=account.cloud_name,
        api_key=account.api_key,
        api_secret=account.api_secret,
    )
    return dict(res)


def _credentials(resolver: AccountResolver, cloud_name):
    chain = (
        lambda: resolver.resolve(cloud_name),
        lambda: resolver.default if resolver.default and resolver.default.cloud_name else None,
    )
    for step in chain:
        account = step()
        if account is not None:
            return account
    return None


def delete_media(req, resolver: AccountResolver, deleter=delete_resources) -> dict:
    if req.public_id is None or isinstance(req.public_id, (bool, dict, list)):
        raise InvalidRequest()
    public_id = str(req.public_id).strip()
    if not public_id:
        raise InvalidRequest()

    cloud_name = req.cloud_name
    resource_type = req.resource_type
    upload_type = req.type

    # explicit fields win over whatever the URL says
    if (not cloud_name or not resource_type or not upload_type) and req.secure_url:
        parsed = parse_resource_locator(req.secure_url)
        cloud_name = cloud_name or parsed.get("cloud_name")
        resource_type = resource_type or parsed.get("resource_type")
        upload_type = upload_type or parsed.get("type")

    resource_type = resource_type or "image"
    upload_type = upload_type or "upload"
    invalidate = req.invalidate is not False

    account = _credentials(resolver, cloud_name)
    if account is None or not account.is_usable:
        raise CredentialsUnavailable()

    try:
        return deleter(account, public_id, resource_type, upload_type, invalidate)
    except Exception as e:
        logger.error(
            "Error deleting media %s from %s/%s/%s: %s",
            public_id, account.cloud_name, resource_type, upload_type, e,
        )
        raise UpstreamError() from e
