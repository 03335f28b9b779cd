import re
from dataclasses import dataclass
from typing import Optional

import cloudinary
import cloudinary.api
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.utils.logging_utils import get_logger

logger = get_logger('media_storage')

# .../<resource_type>/upload/[v123/]<public_id>.<ext>
_PUBLIC_ID_PATTERN = re.compile(r'/upload/(?:v\d+/)?(.+?)(?:\.[A-Za-z0-9]+)?$')


@dataclass
class UploadedMedia:
    url: str
    public_id: str
    resource_type: str = 'image'
    duration: float = 0.0

    @classmethod
    def from_response(cls, response: dict) -> 'UploadedMedia':
        return cls(
            url=response.get('secure_url') or response['url'],
            public_id=response.get('public_id', ''),
            resource_type=response.get('resource_type', 'image'),
            duration=float(response.get('duration') or 0.0)
        )


def extract_public_id(url: str) -> Optional[str]:
    if not url:
        return None
    match = _PUBLIC_ID_PATTERN.search(url)
    return match.group(1) if match else None


class CloudinaryMediaStorage:
    """Cloudinary 업로드/삭제를 감싼 미디어 저장소. create_app에서 생성되어 주입된다."""

    def __init__(self, cloud_name, api_key, api_secret, folder=None):
        cloudinary.config(
            cloud_name=cloud_name,
            api_key=api_key,
            api_secret=api_secret,
            secure=True
        )
        self.folder = folder

    def upload(self, file_storage) -> UploadedMedia:
        if file_storage is None:
            raise BusinessError(APIError.MISSING_FIELD, "File is required")

        options = {'resource_type': 'auto'}
        if self.folder:
            options['folder'] = self.folder

        try:
            response = cloudinary.uploader.upload(file_storage.stream, **options)
        except CloudinaryError as e:
            logger.error(f"Cloudinary upload failed ({file_storage.filename}): {e}")
            raise BusinessError(APIError.MEDIA_UPLOAD_FAILED)

        media = UploadedMedia.from_response(response)
        logger.info(f"Uploaded {media.resource_type} {media.public_id}")
        return media

    def delete(self, url: str, resource_type: str = 'image'):
        public_id = extract_public_id(url)
        if not public_id:
            raise BusinessError(APIError.MEDIA_DELETE_FAILED, f"Cannot resolve media id from url: {url}")

        try:
            result = cloudinary.api.delete_resources([public_id], resource_type=resource_type)
        except CloudinaryError as e:
            logger.error(f"Cloudinary delete failed ({public_id}): {e}")
            raise BusinessError(APIError.MEDIA_DELETE_FAILED)

        if result.get('deleted', {}).get(public_id) not in ('deleted', 'not_found'):
            logger.error(f"Cloudinary delete rejected ({public_id}): {result}")
            raise BusinessError(APIError.MEDIA_DELETE_FAILED)

        return result

    def delete_quietly(self, url: str, resource_type: str = 'image') -> bool:
        """교체된 이전 이미지 정리용. 실패해도 요청은 계속 진행한다."""
        if not url:
            return False
        try:
            self.delete(url, resource_type)
            return True
        except BusinessError as e:
            logger.warning(f"Old media was not removed ({url}): {e.message}")
            return False
