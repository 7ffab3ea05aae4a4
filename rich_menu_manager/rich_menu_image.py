# rich_menu_manager/rich_menu_image.py
"""
判斷上傳的 Rich Menu 圖片類型。
LINE API 上傳圖片時要求在 `Content-Type` 標頭指定 `image/png` 或 `image/jpeg`，這裡根據副檔名決定。
只看檔名、不檢查檔案內容，檔名與實際格式不符的圖片會以錯誤的類型上傳。
"""

from utils.errors import InvalidRequest

IMAGE_CONTENT_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
}

def resolve_image_content_type(filename: str | None) -> str:
    lowered = (filename or "").lower()
    for suffix, content_type in IMAGE_CONTENT_TYPES.items():
        if lowered.endswith(suffix):
            return content_type
    raise InvalidRequest("image file must be jpeg or png")
