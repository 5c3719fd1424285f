# storefront/services/image_service.py
"""
Relay product photos to Sirv: exchange the client credentials for a bearer
token, upload the raw bytes under /Products/, hand back the public URL.
"""
import logging

import requests
from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from storefront.core import config
from storefront.core.exceptions import UpstreamError, ValidationError

logger = logging.getLogger(__name__)

SIRV_FOLDER = "Products"
MAX_UPLOAD_BYTES = 10 << 20  # 10MB


def clean_file_name(name: str) -> str:
    return (name or "").strip().replace(" ", "_")


def get_sirv_token() -> str:
    try:
        resp = requests.post(
            f"{config.SIRV_API_URL}/token",
            json={"clientId": config.SIRV_CLIENT_ID, "clientSecret": config.SIRV_CLIENT_SECRET},
            timeout=config.SIRV_TIMEOUT_SECONDS,
        )
    except requests.RequestException as e:
        raise UpstreamError(f"Sirv token request failed: {e}")

    if resp.status_code != 200:
        logger.error("Sirv token request returned %s: %s", resp.status_code, resp.text)
        raise UpstreamError(f"Sirv API HTTP error: Status {resp.status_code}")

    try:
        token = resp.json().get("token")
    except ValueError:
        raise UpstreamError("Failed to parse Sirv token response")
    if not token:
        raise UpstreamError("Sirv token is empty in the response")
    return token


def upload_to_sirv(content: bytes, file_name: str, token: str) -> None:
    logger.info("Uploading %s (%s bytes) to Sirv", file_name, len(content))
    try:
        resp = requests.post(
            f"{config.SIRV_API_URL}/files/upload",
            params={"filename": f"/{SIRV_FOLDER}/{file_name}"},
            data=content,
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/octet-stream",
            },
            timeout=config.SIRV_TIMEOUT_SECONDS,
        )
    except requests.RequestException as e:
        raise UpstreamError(f"Sirv upload request failed: {e}")

    if resp.status_code != 200:
        logger.error("Sirv upload of %s returned %s: %s", file_name, resp.status_code, resp.text)
        raise UpstreamError(f"Sirv upload failed with status {resp.status_code}")


def public_url(file_name: str) -> str:
    return f"{config.SIRV_BASE_URL.rstrip('/')}/{SIRV_FOLDER}/{file_name}"


async def upload_image(file: UploadFile) -> dict:
    file_name = clean_file_name(file.filename)
    if not file_name:
        raise ValidationError("Error retrieving file")

    content = await file.read()
    if not content:
        raise ValidationError("Uploaded file is empty")
    if len(content) > MAX_UPLOAD_BYTES:
        raise ValidationError("File exceeds the 10MB limit")

    token = await run_in_threadpool(get_sirv_token)
    await run_in_threadpool(upload_to_sirv, content, file_name, token)

    url = public_url(file_name)
    logger.info("Image uploaded successfully: %s", url)
    return {"url": url}
