# handlers/user_handler.py
"""
處理用戶與 Rich Menu 之間的綁定，以及所有用戶共用的預設 Rich Menu。
綁定關係只存在 LINE 平台上，這裡每次都直接查詢或修改，不做任何快取。
"""
import logging
from linebot.v3.messaging import ApiException

from rich_menu_manager.rich_menu_api_client import RichMenuGateway
from utils.response_mapper import success_response

logger = logging.getLogger(__name__)

def get_user_rich_menu(gateway: RichMenuGateway, user_id: str):
    """
    查詢用戶目前綁定的 Rich Menu。
    用戶沒有綁定任何 Rich Menu 時，LINE API 會回傳 404；這不是錯誤，回傳空物件即可。
    """
    try:
        response = gateway.get_rich_menu_id_of_user(user_id)
    except ApiException as e:
        if e.status == 404:
            logger.info(f"用戶 {user_id} 目前沒有綁定 Rich Menu。")
            return success_response({})
        raise
    return success_response({"richMenuId": response.rich_menu_id})

def link_user_rich_menu(gateway: RichMenuGateway, user_id: str, rich_menu_id: str):
    gateway.link_rich_menu_id_to_user(user_id, rich_menu_id)
    return success_response({"success": True})

def unlink_user_rich_menu(gateway: RichMenuGateway, user_id: str):
    gateway.unlink_rich_menu_id_from_user(user_id)
    return success_response({"success": True})

def set_default_rich_menu(gateway: RichMenuGateway, rich_menu_id: str):
    gateway.set_default_rich_menu(rich_menu_id)
    return success_response({"success": True})

def cancel_default_rich_menu(gateway: RichMenuGateway):
    gateway.cancel_default_rich_menu()
    return success_response({"success": True})
