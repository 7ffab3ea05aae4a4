# rich_menu_manager/rich_menu_deployer.py
"""
這個檔案是 Rich Menu 的部署腳本，把 `rich_menu_configs.py` 中列出的 Rich Menu 透過管理後端的 REST API 部署到 LINE 平台上。
*** 在專案根目錄執行：python -m rich_menu_manager.rich_menu_deployer
執行流程：
1. 遍歷 `ALL_RICH_MENU_CONFIGS` 列表中的每一個配置：
   - 讀取 Rich Menu 結構的 JSON 檔案，`POST /richmenus` 創建 (或 `PUT /richmenus/<id>` 取代舊的 Rich Menu)。
   - `POST /richmenus/<id>/content` 上傳圖片。
   - 需要時 `POST /user/all/richmenu/<id>` 設為預設 Rich Menu。
2. 回傳定義檔路徑與新 Rich Menu ID 的對照表。

與直接呼叫 LINE API 不同，這個腳本走的是管理後端，所以小數座標的正規化、圖片格式檢查都和網頁編輯器使用相同的邏輯。
"""
import os
import json
import logging
import requests

from config import RICH_MENU_BACKEND_URL, LINE_CHANNEL_ACCESS_TOKEN, DEPLOY_DELETE_OLD
from rich_menu_manager.rich_menu_configs import ALL_RICH_MENU_CONFIGS
from rich_menu_manager.rich_menu_image import resolve_image_content_type
from utils.errors import InvalidRequest

logger = logging.getLogger(__name__)

def _error_message(response: requests.Response) -> str:
    try:
        return response.json().get("error", response.text)
    except ValueError:
        return response.text

def _request(session: requests.Session, method: str, url: str, **kwargs) -> dict:
    """
    送出請求並回傳 JSON 內容；狀態碼不是 2xx 時記錄後端回傳的錯誤訊息，再拋出 HTTPError。
    """
    response = session.request(method, url, **kwargs)
    if not response.ok:
        logger.error(f"{method} {url} 失敗 (HTTP Status: {response.status_code}, Error: {_error_message(response)})")
    response.raise_for_status()
    return response.json()

def deploy_rich_menu(session: requests.Session, base_url: str, config: dict, delete_old: bool) -> str:
    """
    部署單一 Rich Menu，回傳新的 Rich Menu ID。
    任何一個步驟失敗都會拋出例外，由呼叫端決定是否繼續處理下一個配置。
    """
    with open(config['definition_path'], 'rb') as f:
        definition = json.load(f)

    replaces = config.get('replaces')
    if replaces:
        definition['deleteOld'] = delete_old
        result = _request(session, "PUT", f"{base_url}/richmenus/{replaces}", json=definition)
        logger.info(f"Rich Menu {replaces} 已被取代，新的 ID: {result['richMenuId']}")
    else:
        result = _request(session, "POST", f"{base_url}/richmenus", json=definition)
        logger.info(f"Rich Menu 創建成功, ID: {result['richMenuId']}")
    rich_menu_id = result['richMenuId']

    image_path = config['image_path']
    content_type = resolve_image_content_type(image_path)
    with open(image_path, 'rb') as image:
        files = {'image': (os.path.basename(image_path), image, content_type)}
        _request(session, "POST", f"{base_url}/richmenus/{rich_menu_id}/content", files=files)
    logger.info(f"Rich Menu 圖片 {image_path} 上傳成功。")

    if config.get('set_default'):
        _request(session, "POST", f"{base_url}/user/all/richmenu/{rich_menu_id}")
        logger.info(f"Rich Menu ID: {rich_menu_id} 已設為預設。")

    return rich_menu_id

def setup_all_rich_menus(
    session: requests.Session, base_url: str, channel_access_token: str,
    all_rich_menu_configs: list, delete_old: bool = True
) -> dict:
    """
    Rich Menu 部署的入口點，依序處理每一個配置。
    某個 Rich Menu 的檔案缺失或部署失敗時只記錄錯誤並跳過，不影響其他 Rich Menu 的部署。
    """
    logger.info("正在啟動 Rich Menu 部署流程...")
    session.headers['Authorization'] = f"Bearer {channel_access_token}"
    base_url = base_url.rstrip('/')

    deployed_rich_menu_ids = {}
    for config in all_rich_menu_configs:
        definition_path = config['definition_path']

        # 檢查定義檔與圖片檔案是否存在
        missing = [path for path in (definition_path, config['image_path']) if not os.path.exists(path)]
        if missing:
            logger.error(f"Rich Menu 檔案缺失！請確保 {', '.join(missing)} 存在。跳過 '{definition_path}'。")
            continue

        try:
            deployed_rich_menu_ids[definition_path] = deploy_rich_menu(session, base_url, config, delete_old)
        except (requests.RequestException, InvalidRequest, KeyError, ValueError, OSError) as e:
            logger.error(f"部署 Rich Menu '{definition_path}' 失敗: {e}")

    logger.info("Rich Menu 部署流程完成。")
    return deployed_rich_menu_ids

# --- 當有變更 Rich Menu 時，執行以下區塊 ---
if __name__ == "__main__":
    if not LINE_CHANNEL_ACCESS_TOKEN:
        logger.error("環境變數 LINE_CHANNEL_ACCESS_TOKEN 未設定。請確認已設定並重新執行。")
        raise SystemExit(1)

    with requests.Session() as session:
        result = setup_all_rich_menus(
            session=session,
            base_url=RICH_MENU_BACKEND_URL,
            channel_access_token=LINE_CHANNEL_ACCESS_TOKEN,
            all_rich_menu_configs=ALL_RICH_MENU_CONFIGS,
            delete_old=DEPLOY_DELETE_OLD
        )

    logger.info(f"部署結果: {json.dumps(result, ensure_ascii=False)}")
