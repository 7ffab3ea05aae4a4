# utils/errors.py
"""
Rich Menu 管理後端使用的錯誤類別。
每個類別都帶有對應的 HTTP 狀態碼，由 `utils/response_mapper.py` 在 Flask 的錯誤處理邊界統一轉換成 `{"error": ...}` 的回應格式。
"""


class RichMenuManagerError(Exception):
    """所有自訂錯誤的基底類別。"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthenticated(RichMenuManagerError):
    """缺少 Authorization 標頭，或格式不是 `Bearer <token>`。"""

    status_code = 401


class InvalidRequest(RichMenuManagerError):
    """
    呼叫端送來的資料有問題：空的請求內容、JSON 格式錯誤、不支援的圖片格式等。
    `body` 會原封不動的附在錯誤回應中，方便前端排查是哪一份內容出了問題。
    """

    status_code = 400

    def __init__(self, message: str, body: str | None = None):
        super().__init__(message)
        self.body = body


class NotFound(RichMenuManagerError):
    """LINE 平台回報找不到指定的資源。"""

    status_code = 404


class UpstreamFailure(RichMenuManagerError):
    """LINE 平台回傳的其他錯誤。"""

    status_code = 500


class InternalFailure(RichMenuManagerError):
    """後端本身的序列化或 I/O 錯誤。"""

    status_code = 500
