# utils/auth.py
"""
從請求的 Authorization 標頭取出呼叫端的 Channel Access Token。
這個後端不保存任何憑證：每個請求各自帶著自己的 token，用完即丟。
token 是否有效不在這裡判斷，而是交給後續呼叫 LINE API 的結果決定。
"""
import logging
from functools import wraps

from flask import g, request

from utils.errors import Unauthenticated

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

def extract_bearer_token(header_value: str | None) -> str:
    """
    標頭必須以 `Bearer ` (區分大小寫，一個空白) 開頭，回傳去掉前綴後的字串。
    其他情況一律拋出 Unauthenticated。
    """
    if not header_value or not header_value.startswith(BEARER_PREFIX):
        raise Unauthenticated("Missing or invalid authorization header")
    return header_value[len(BEARER_PREFIX):]

def require_channel_token(view):
    """
    Flask 路由的裝飾器，在執行路由本體前先檢查 Authorization 標頭。
    成功時把 token 存到 `flask.g.channel_access_token`，只在這個請求的生命週期內有效。
    """
    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            g.channel_access_token = extract_bearer_token(request.headers.get("Authorization"))
        except Unauthenticated:
            logger.warning(f"拒絕未授權的請求: {request.method} {request.path}")
            raise
        return view(*args, **kwargs)
    return wrapper
