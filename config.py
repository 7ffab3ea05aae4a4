# config.py
"""
集中處理所有配置：
1. 環境變數的讀取，包括 LINE Messaging API 的主機位址與部署工具使用的後端網址。
2. 全局日誌 (logging) 系統的設定，確保所有日誌都有統一的格式和輸出目的地。

這個後端不保存任何 Channel Access Token，每個請求的憑證都由呼叫端透過 Authorization 標頭提供。
"""
import os # 操作作業系統環境變數
import sys
import logging
from dotenv import load_dotenv # 載入 .env 檔案中的環境變數
from logging.handlers import TimedRotatingFileHandler

# --- 載入 .env 檔案中的環境變數 ---
# load_dotenv() 會搜尋並讀取同層或父層的 .env，將其轉為系統環境變數，之後可用 os.getenv() 取得
load_dotenv()

# --- 環境變數設定 ---
# 控制 log 顯示的詳細程度
LOG_LEVEL_NAME = os.getenv("LOG_LEVEL", "INFO").upper()
# 指定 log 儲存的檔名
LOG_FILE = os.getenv("LOG_FILE", "main.log")

# 把字串轉成 logging 模組用的數字等級；如果字串無效，就退回 INFO 等級
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)

# 是否啟用 debug 模式，部署到雲端時預設是 False
IS_DEBUG_MODE = os.getenv("IS_DEBUG_MODE", "False").lower() == "true"

# 本機啟動 Flask 時監聽的埠號，雲端由 gunicorn 決定
PORT = int(os.getenv("PORT", "8080"))

# --- 建立全域 Logger 設定函式 ---
def setup_logging() -> None:
    """
    配置根日誌器，並添加處理器：一個輸出到終端機，另一個 (選用) 輸出到 log 檔案。
    整個專案共享相同的設定，各模組只需要 `logging.getLogger(__name__)`。
    """
    root = logging.getLogger()

    # 移除並關閉所有 handler，避免重複設定日誌
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()

    root.setLevel(LOG_LEVEL)

    # 共用的格式：時間 - logger 名稱 - 等級 - 檔案名稱:行號 - 訊息
    fmt = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
    )

    # console handler: 雲端環境 (Cloud Run) 會收集 stdout 的內容
    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(LOG_LEVEL)
    ch.setFormatter(fmt)
    root.addHandler(ch)

    # rotating file handler: 只有在 ENABLE_FILE_LOG 設定為 "true" 時才會啟用
    if os.getenv("ENABLE_FILE_LOG", "False").lower() == "true":
        # 每天午夜輪換檔案，保留 7 個備份
        fh = TimedRotatingFileHandler(LOG_FILE, when="midnight", interval=1, backupCount=7, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(fmt)
        root.addHandler(fh)

setup_logging()
logger = logging.getLogger(__name__)

# --- LINE Messaging API 主機位址 ---
"""
一般情況下使用 LINE 官方的預設值即可。
可以改指向本機的模擬伺服器，方便在不動到正式帳號的情況下測試整個流程。
圖片上傳與下載的主機 (api-data.line.me) 由 SDK 的 MessagingApiBlob 自行決定。
"""
LINE_API_HOST = os.getenv("LINE_API_HOST", "https://api.line.me")

# --- 部署工具 (rich_menu_deployer.py) 使用的設定 ---
# Rich Menu 管理後端的網址
RICH_MENU_BACKEND_URL = os.getenv("RICH_MENU_BACKEND_URL", f"http://localhost:{PORT}")
# 部署時使用的 Channel Access Token；後端本身不會讀取這個值
LINE_CHANNEL_ACCESS_TOKEN = os.getenv("LINE_CHANNEL_ACCESS_TOKEN")
# 部署時是否刪除被取代的舊 Rich Menu
DEPLOY_DELETE_OLD = os.getenv("DEPLOY_DELETE_OLD", "True").lower() == "true"
