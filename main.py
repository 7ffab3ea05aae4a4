# main.py
"""
LINE Rich Menu 管理後端的主入口檔案。
使用 Flask 框架建立一個 Web 伺服器，把 Rich Menu 的各種操作轉發給 LINE Messaging API。
主要職責：
1. 建立 Flask 應用程式並註冊統一的錯誤處理。
2. 設定所有路由，每個請求都先檢查 Authorization 標頭，再用呼叫端的憑證建立專屬的 `RichMenuGateway`。
3. 提供健康檢查端點，供雲端服務確認應用程式是否正常運行。
"""
import logging
from flask import Flask, current_app, g, request

from config import IS_DEBUG_MODE, PORT
from handlers import richmenu_handler, user_handler
from rich_menu_manager.rich_menu_api_client import RichMenuGateway
from utils.auth import require_channel_token
from utils.response_mapper import register_error_handlers

logger = logging.getLogger(__name__)

def _open_gateway() -> RichMenuGateway:
    """
    用這個請求的憑證建立一個新的 Gateway，不會在請求之間共用。
    工廠函式可以透過 `RICH_MENU_GATEWAY_FACTORY` 設定替換，測試時用來注入假的 LINE API。
    """
    factory = current_app.config["RICH_MENU_GATEWAY_FACTORY"]
    return factory(g.channel_access_token)

def create_app(config_override: dict | None = None) -> Flask:
    app = Flask(__name__)
    app.config["RICH_MENU_GATEWAY_FACTORY"] = RichMenuGateway
    if config_override:
        app.config.update(config_override)

    register_error_handlers(app)

    # --- 健康檢查路由 ---
    # 雲端服務 (例如 Cloud Run) 會定期呼叫這個端點確認服務是否健康，不需要憑證
    @app.route("/health")
    def health_check():
        return "OK", 200

    # --- Rich Menu 路由 ---
    @app.route("/richmenus", methods=["GET"])
    @require_channel_token
    def list_rich_menus():
        with _open_gateway() as gateway:
            return richmenu_handler.list_rich_menus(gateway)

    @app.route("/richmenus", methods=["POST"])
    @require_channel_token
    def create_rich_menu():
        with _open_gateway() as gateway:
            return richmenu_handler.create_rich_menu(gateway, request.get_data())

    @app.route("/richmenus/<rich_menu_id>", methods=["GET"])
    @require_channel_token
    def get_rich_menu(rich_menu_id):
        with _open_gateway() as gateway:
            return richmenu_handler.get_rich_menu(gateway, rich_menu_id)

    @app.route("/richmenus/<rich_menu_id>", methods=["PUT"])
    @require_channel_token
    def update_rich_menu(rich_menu_id):
        with _open_gateway() as gateway:
            return richmenu_handler.update_rich_menu(gateway, rich_menu_id, request.get_data())

    @app.route("/richmenus/<rich_menu_id>", methods=["DELETE"])
    @require_channel_token
    def delete_rich_menu(rich_menu_id):
        with _open_gateway() as gateway:
            return richmenu_handler.delete_rich_menu(gateway, rich_menu_id)

    @app.route("/richmenus/<rich_menu_id>/content", methods=["POST"])
    @require_channel_token
    def upload_rich_menu_image(rich_menu_id):
        with _open_gateway() as gateway:
            return richmenu_handler.upload_rich_menu_image(gateway, rich_menu_id, request.files.get("image"))

    @app.route("/richmenus/<rich_menu_id>/content", methods=["GET"])
    @require_channel_token
    def get_rich_menu_image(rich_menu_id):
        with _open_gateway() as gateway:
            return richmenu_handler.get_rich_menu_image(gateway, rich_menu_id)

    # --- 用戶 Rich Menu 路由 ---
    @app.route("/users/<user_id>/richmenu", methods=["GET"])
    @require_channel_token
    def get_user_rich_menu(user_id):
        with _open_gateway() as gateway:
            return user_handler.get_user_rich_menu(gateway, user_id)

    @app.route("/users/<user_id>/richmenu/<rich_menu_id>", methods=["POST"])
    @require_channel_token
    def link_user_rich_menu(user_id, rich_menu_id):
        with _open_gateway() as gateway:
            return user_handler.link_user_rich_menu(gateway, user_id, rich_menu_id)

    @app.route("/users/<user_id>/richmenu", methods=["DELETE"])
    @require_channel_token
    def unlink_user_rich_menu(user_id):
        with _open_gateway() as gateway:
            return user_handler.unlink_user_rich_menu(gateway, user_id)

    # --- 預設 Rich Menu 路由 ---
    @app.route("/user/all/richmenu/<rich_menu_id>", methods=["POST"])
    @require_channel_token
    def set_default_rich_menu(rich_menu_id):
        with _open_gateway() as gateway:
            return user_handler.set_default_rich_menu(gateway, rich_menu_id)

    @app.route("/user/all/richmenu", methods=["DELETE"])
    @require_channel_token
    def cancel_default_rich_menu():
        with _open_gateway() as gateway:
            return user_handler.cancel_default_rich_menu(gateway)

    logger.info("Flask App 實例化成功，路由已註冊。")
    return app

# gunicorn 以 `main:app` 啟動
app = create_app()

# --- 啟動 Flask ---
# 本機測試才用 Flask 內建伺服器，部署到雲端用 gunicorn
if __name__ == "__main__":
    app.run(host="0.0.0.0", port=PORT, debug=IS_DEBUG_MODE)
