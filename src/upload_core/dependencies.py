"""Dependency wiring from environment configuration."""

from functools import lru_cache
import os
from urllib.parse import urlparse

from upload_core.infrastructure.adapters.s3_adapter import S3Adapter
from upload_core.infrastructure.aws.s3_storage_provider import S3StorageProvider
from upload_core.infrastructure.openai.openai_vision_service import OpenAIVisionService
from upload_core.services.upload_service import UploadService
from upload_core.utils.constants import ENV_AI_ALLOWED_IMAGE_DOMAIN


@lru_cache
def get_s3_adapter() -> S3Adapter:
    return S3Adapter()


@lru_cache
def get_storage_provider() -> S3StorageProvider:
    return S3StorageProvider(get_s3_adapter())


@lru_cache
def get_ai_service() -> OpenAIVisionService:
    """AI service restricted to images served from the storage domain."""
    domain = os.getenv(ENV_AI_ALLOWED_IMAGE_DOMAIN) or urlparse(get_s3_adapter().public_base_url).netloc
    return OpenAIVisionService(allowed_domain=domain)


@lru_cache
def get_upload_service() -> UploadService:
    return UploadService(get_storage_provider(), get_ai_service())
