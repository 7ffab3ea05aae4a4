# rich_menu_manager/rich_menu_builder.py
import json
import logging
from linebot.v3.messaging import RichMenuRequest

from rich_menu_manager.rich_menu_normalizer import normalize_rich_menu_numbers
from utils.errors import InvalidRequest

logger = logging.getLogger(__name__)

def _decode_body_text(body: bytes) -> str:
    return body.decode("utf-8", errors="replace")

def _load_json_object(body: bytes) -> dict:
    """
    寬鬆解析：先把請求內容解成一般的 dict，讓後面的正規化可以自由讀寫。
    最外層必須是 JSON 物件。
    """
    try:
        document = json.loads(body)
    except ValueError as e: # JSONDecodeError 和 UnicodeDecodeError 都是 ValueError
        logger.warning(f"請求內容不是合法的 JSON: {e}\nBody: {_decode_body_text(body)}")
        raise InvalidRequest(f"invalid JSON: {e}", body=_decode_body_text(body))

    if not isinstance(document, dict):
        logger.warning(f"請求內容的最外層不是 JSON 物件: {type(document).__name__}")
        raise InvalidRequest("invalid JSON: request body must be a JSON object", body=_decode_body_text(body))
    return document

def build_rich_menu_request_from_body(body: bytes) -> RichMenuRequest:
    """
    把前端送來的原始內容轉成 LINE SDK 的 RichMenuRequest 物件。
    分兩段解析：先寬鬆解析並把小數座標四捨五入，再重新序列化後交給 SDK 的嚴格模型。
    嚴格模型不接受小數，所以正規化一定要在它之前完成。
    任何一段失敗都會拋出 InvalidRequest，並附上出問題的那份內容。
    """
    if not body:
        raise InvalidRequest("empty request body")

    document = normalize_rich_menu_numbers(_load_json_object(body))
    normalized_body = json.dumps(document, ensure_ascii=False)

    try:
        rich_menu_request = RichMenuRequest.from_json(normalized_body)
    except (ValueError, TypeError, KeyError) as e: # ValidationError 是 ValueError；action 缺少 type 時 SDK 拋出 KeyError
        logger.warning(f"正規化後仍無法轉成 RichMenuRequest: {e}\nBody: {normalized_body}")
        raise InvalidRequest(f"invalid JSON after normalization: {e}", body=normalized_body)

    logger.debug(f"RichMenuRequest 解析成功: name={rich_menu_request.name}, areas={len(rich_menu_request.areas or [])}")
    return rich_menu_request

def read_delete_old_flag(body: bytes) -> bool:
    """
    讀取更新請求中的 `deleteOld` 旗標，只有 JSON 的 `true` 才算數。
    呼叫前請先用 build_rich_menu_request_from_body 確認內容合法。
    """
    return _load_json_object(body).get("deleteOld") is True
