# handlers/richmenu_handler.py
"""
處理 `/richmenus` 底下的所有請求：列出、查詢、創建、更新、刪除 Rich Menu，以及上傳與下載圖片。
每個函式都由 `main.py` 的路由呼叫，並接收一個已綁定呼叫端憑證的 `RichMenuGateway`。
這裡只負責把請求內容交給對應的元件，錯誤一律往上拋，由 `utils/response_mapper.py` 統一轉換。
"""
import logging
from flask import Response
from werkzeug.datastructures import FileStorage

from rich_menu_manager.rich_menu_api_client import RichMenuGateway
from rich_menu_manager.rich_menu_builder import build_rich_menu_request_from_body, read_delete_old_flag
from rich_menu_manager.rich_menu_image import resolve_image_content_type
from utils.errors import InvalidRequest
from utils.response_mapper import success_response

logger = logging.getLogger(__name__)

# 下載圖片時一律標示為 JPEG，LINE API 的回應沒有被用來判斷實際格式
RICH_MENU_IMAGE_MIMETYPE = "image/jpeg"

def list_rich_menus(gateway: RichMenuGateway):
    response = gateway.get_rich_menu_list()
    richmenus = [rich_menu.to_dict() for rich_menu in (response.richmenus or [])]
    return success_response({"richmenus": richmenus})

def get_rich_menu(gateway: RichMenuGateway, rich_menu_id: str):
    rich_menu = gateway.get_rich_menu(rich_menu_id)
    return success_response(rich_menu.to_dict())

def create_rich_menu(gateway: RichMenuGateway, body: bytes):
    rich_menu_request = build_rich_menu_request_from_body(body)
    result = gateway.create_rich_menu(rich_menu_request)
    return success_response({"richMenuId": result.rich_menu_id}, 201)

def update_rich_menu(gateway: RichMenuGateway, rich_menu_id: str, body: bytes):
    """
    LINE 平台不支援直接修改 Rich Menu，所以「更新」其實是用新內容創建一個新的 Rich Menu。
    如果內容帶有 `"deleteOld": true`，創建成功後再刪除舊的那一個。
    舊 Rich Menu 刪除失敗只記錄日誌，不影響回應：新的 Rich Menu 已經建立，呼叫端需要拿到它的 ID。
    """
    rich_menu_request = build_rich_menu_request_from_body(body)
    delete_old = read_delete_old_flag(body)

    result = gateway.create_rich_menu(rich_menu_request)

    if delete_old:
        try:
            gateway.delete_rich_menu(rich_menu_id)
        except Exception as e:
            logger.error(f"更新 Rich Menu 時刪除舊的 Rich Menu {rich_menu_id} 失敗: {e}", exc_info=True)

    return success_response({"richMenuId": result.rich_menu_id, "oldRichMenuId": rich_menu_id})

def delete_rich_menu(gateway: RichMenuGateway, rich_menu_id: str):
    gateway.delete_rich_menu(rich_menu_id)
    return success_response({"success": True})

def upload_rich_menu_image(gateway: RichMenuGateway, rich_menu_id: str, image: FileStorage | None):
    """
    接收 multipart 表單中名為 `image` 的檔案。
    先根據檔名判斷圖片類型，不支援的格式在呼叫 LINE API 之前就直接拒絕。
    """
    if image is None:
        raise InvalidRequest("No image file provided")

    content_type = resolve_image_content_type(image.filename)
    gateway.set_rich_menu_image(rich_menu_id, content_type, image.read())
    return success_response({"success": True})

def get_rich_menu_image(gateway: RichMenuGateway, rich_menu_id: str) -> Response:
    image_bytes = gateway.get_rich_menu_image(rich_menu_id)
    return Response(image_bytes, status=200, mimetype=RICH_MENU_IMAGE_MIMETYPE)
