# utils/response_mapper.py
"""
把每個請求的結果統一包裝成 JSON 回應。
- 成功：直接回傳該操作的自然內容 (例如 `{"richMenuId": ...}`)，狀態碼 200 或 201。
- 失敗：`{"error": <訊息>}`，狀態碼依錯誤種類決定：
  401 缺少或格式錯誤的憑證、400 呼叫端的資料有誤、404 LINE 平台找不到資源、500 其他錯誤。

錯誤處理函式在 `register_error_handlers()` 中註冊到 Flask，所有路由拋出的例外都會在這裡被轉換，不會以未處理的錯誤離開應用程式。
"""
import json
import logging

from flask import Flask, jsonify
from linebot.v3.messaging import ApiException
from werkzeug.exceptions import HTTPException

from utils.errors import (
    InternalFailure, InvalidRequest, NotFound, RichMenuManagerError, UpstreamFailure
)

logger = logging.getLogger(__name__)

def success_response(payload: dict, status: int = 200):
    return jsonify(payload), status

def error_response(error: RichMenuManagerError):
    payload = {"error": error.message}
    if isinstance(error, InvalidRequest) and error.body is not None:
        payload["body"] = error.body
    return jsonify(payload), error.status_code

def _upstream_message(e: ApiException) -> str:
    """
    LINE API 的錯誤內容通常是 `{"message": "...", "details": [...]}`，優先取出其中的 message。
    """
    body = e.body
    if isinstance(body, (bytes, bytearray)):
        body = body.decode("utf-8", errors="replace")
    if body:
        try:
            message = json.loads(body).get("message")
        except (ValueError, AttributeError):
            message = None
        return message or body
    return f"({e.status}) {e.reason}"

def map_upstream_error(e: ApiException) -> RichMenuManagerError:
    if e.status == 404:
        return NotFound(_upstream_message(e))
    return UpstreamFailure(_upstream_message(e))

def register_error_handlers(app: Flask) -> None:
    """在 Flask 應用程式上註冊所有錯誤處理函式。"""

    @app.errorhandler(RichMenuManagerError)
    def handle_rich_menu_manager_error(e: RichMenuManagerError):
        return error_response(e)

    @app.errorhandler(ApiException)
    def handle_api_exception(e: ApiException):
        logger.error(f"LINE API 回傳錯誤 (HTTP Status: {e.status}, Body: {e.body})")
        return error_response(map_upstream_error(e))

    @app.errorhandler(HTTPException)
    def handle_http_exception(e: HTTPException):
        # 不存在的路徑、不支援的方法等，保留原本的狀態碼
        return jsonify({"error": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e: Exception):
        logger.error(f"處理請求時發生未預期的錯誤: {e}", exc_info=True)
        return error_response(InternalFailure(str(e)))
