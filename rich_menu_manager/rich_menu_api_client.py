# rich_menu_manager/rich_menu_api_client.py
"""
作為一個封裝層，專門處理與 LINE Rich Menu API 的所有底層互動。
每個請求都用呼叫端自己的 Channel Access Token 建立一個新的 `RichMenuGateway`，請求結束就關閉，不會在請求之間共用任何客戶端實例。
提供的操作：
1. 列出、查詢、創建、刪除 Rich Menu。
2. 上傳與下載 Rich Menu 圖片。
3. 查詢、綁定、解除綁定用戶的 Rich Menu。
4. 設定與取消所有用戶共用的預設 Rich Menu。

每個操作只呼叫 LINE API 一次，不重試、不快取。
LINE API 回傳的錯誤 (ApiException) 會原封不動的往上拋，由 `utils/response_mapper.py` 決定回應的狀態碼。
"""
import logging

from linebot.v3.messaging import (
    ApiClient, Configuration, MessagingApi, MessagingApiBlob, RichMenuRequest
)
from linebot.v3.messaging.models import (
    RichMenuIdResponse, RichMenuListResponse, RichMenuResponse
)

from config import LINE_API_HOST

logger = logging.getLogger(__name__)

class RichMenuGateway:
    """
    綁定單一 Channel Access Token 的 LINE API 客戶端。
    搭配 `with` 使用，離開區塊時會關閉底層的 ApiClient 連線池。
    """

    def __init__(self, channel_access_token: str, host: str = LINE_API_HOST):
        configuration = Configuration(access_token=channel_access_token, host=host)
        self._api_client = ApiClient(configuration)
        # MessagingApi 處理 JSON API；MessagingApiBlob 處理圖片等二進位內容
        self._messaging_api = MessagingApi(self._api_client)
        self._messaging_api_blob = MessagingApiBlob(self._api_client)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def close(self) -> None:
        self._api_client.close()

    # --- Rich Menu 本體 ---
    def get_rich_menu_list(self) -> RichMenuListResponse:
        return self._messaging_api.get_rich_menu_list()

    def get_rich_menu(self, rich_menu_id: str) -> RichMenuResponse:
        return self._messaging_api.get_rich_menu(rich_menu_id)

    def create_rich_menu(self, rich_menu_request: RichMenuRequest) -> RichMenuIdResponse:
        response = self._messaging_api.create_rich_menu(rich_menu_request)
        logger.info(f"Rich Menu 創建成功, ID: {response.rich_menu_id}")
        return response

    def delete_rich_menu(self, rich_menu_id: str) -> None:
        self._messaging_api.delete_rich_menu(rich_menu_id)
        logger.info(f"已刪除 Rich Menu: {rich_menu_id}")

    # --- Rich Menu 圖片 ---
    def set_rich_menu_image(self, rich_menu_id: str, content_type: str, data: bytes) -> None:
        """
        LINE API 要求在 `Content-Type` 標頭指定圖片類型，類型由 `rich_menu_image.resolve_image_content_type` 事先決定。
        """
        logger.debug(f"上傳 Rich Menu 圖片, rich_menu_id={rich_menu_id}, content_type={content_type}, img_bytes_len={len(data)}")
        self._messaging_api_blob.set_rich_menu_image(
            rich_menu_id=rich_menu_id,
            body=bytearray(data),
            _headers={"Content-Type": content_type}
        )
        logger.info(f"Rich Menu {rich_menu_id} 圖片上傳成功。")

    def get_rich_menu_image(self, rich_menu_id: str) -> bytes:
        return bytes(self._messaging_api_blob.get_rich_menu_image(rich_menu_id))

    # --- 用戶與 Rich Menu 的綁定 ---
    def get_rich_menu_id_of_user(self, user_id: str) -> RichMenuIdResponse:
        return self._messaging_api.get_rich_menu_id_of_user(user_id)

    def link_rich_menu_id_to_user(self, user_id: str, rich_menu_id: str) -> None:
        self._messaging_api.link_rich_menu_id_to_user(user_id, rich_menu_id)
        logger.info(f"用戶 {user_id} 已綁定 Rich Menu: {rich_menu_id}")

    def unlink_rich_menu_id_from_user(self, user_id: str) -> None:
        self._messaging_api.unlink_rich_menu_id_from_user(user_id)
        logger.info(f"用戶 {user_id} 已解除綁定 Rich Menu。")

    # --- 預設 Rich Menu ---
    def set_default_rich_menu(self, rich_menu_id: str) -> None:
        self._messaging_api.set_default_rich_menu(rich_menu_id)
        logger.info(f"Rich Menu ID: {rich_menu_id} 已設為預設。")

    def cancel_default_rich_menu(self) -> None:
        self._messaging_api.cancel_default_rich_menu()
        logger.info("已取消預設 Rich Menu。")
