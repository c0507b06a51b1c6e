"""Asset materialization: decode embedded data URLs into the public asset store"""

import base64
import binascii
import logging
from pathlib import Path, PurePosixPath

from draftpub.core.context import PublishContext
from draftpub.core.errors import AssetPayloadError, PublishError
from draftpub.core.models import Asset, ResolvedAsset
from draftpub.core.utils.slug import slugify


logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".png"


def is_public_path(data_url: str, assets_url: str) -> bool:
    """True when the payload already points into the public asset store."""
    prefix = assets_url.strip("/") + "/"
    return data_url.startswith("/" + prefix) or data_url.startswith(prefix)


def asset_filename(filename: str, fallback: str) -> str:
    """Slugified base name plus the source file's lowercased extension."""
    name = PurePosixPath(filename.replace("\\", "/")).name if filename else ""
    suffix = PurePosixPath(name).suffix
    ext = suffix.lower() or DEFAULT_EXTENSION
    stem = name[: -len(suffix)] if suffix else (name or fallback)
    return f"{slugify(stem) or fallback}{ext}"


def decode_data_url(data_url: str) -> bytes:
    """Return the bytes of a base64 data URL; raises AssetPayloadError when malformed."""
    if "," not in data_url:
        raise AssetPayloadError("payload has no base64 data separator")
    _, _, payload = data_url.partition(",")
    if not payload.strip():
        raise AssetPayloadError("payload is empty")
    try:
        return base64.b64decode(payload)
    except (binascii.Error, ValueError) as e:
        raise AssetPayloadError(f"payload is not valid base64: {e}") from e


def materialize_asset(asset: Asset, article_id: str, ctx: PublishContext, fallback_name: str) -> ResolvedAsset:
    """Reuse an already-public asset or write its decoded payload under assets_dir/article_id."""
    alt = asset.alt or ""
    if is_public_path(asset.data_url, ctx.assets_url):
        path = asset.data_url if asset.data_url.startswith("/") else f"/{asset.data_url}"
        logger.info("Reusing existing asset: %s", path)
        return ResolvedAsset(path=path, alt=alt, filename=path.rsplit("/", 1)[-1] or asset.filename)

    file_name = asset_filename(asset.filename, fallback_name)
    try:
        data = decode_data_url(asset.data_url)
    except AssetPayloadError as e:
        raise AssetPayloadError(f"{file_name}: {e}") from e

    target_dir: Path = ctx.assets_dir / article_id
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        (target_dir / file_name).write_bytes(data)
    except OSError as e:
        raise PublishError(f"Cannot write asset {target_dir / file_name}: {e}") from e

    return ResolvedAsset(path=f"{ctx.assets_url}/{article_id}/{file_name}", alt=alt, filename=file_name)
