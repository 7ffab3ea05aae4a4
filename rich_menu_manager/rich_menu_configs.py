# rich_menu_manager/rich_menu_configs.py
"""
部署工具 (`rich_menu_deployer.py`) 使用的 Rich Menu 清單。
每個字典代表一個要部署的 Rich Menu：
- `definition_path`：Rich Menu 結構的 JSON 檔案，格式與 `POST /richmenus` 的請求內容相同，座標可以是小數。
- `image_path`：該 Rich Menu 的圖片 (JPEG 或 PNG)。
- `set_default`：部署後是否設為所有用戶的預設 Rich Menu。
- `replaces`：(選填) 被這個 Rich Menu 取代的舊 Rich Menu ID；有值時改用 `PUT /richmenus/<id>` 部署。

新增、修改或刪除 Rich Menu 時只需要更新這個清單與對應的檔案。
"""
MAIN_MENU_DEFINITION = "rich_menu_manager/rich_menus/main_menu.json"

ALL_RICH_MENU_CONFIGS = [
    {
        'definition_path' : MAIN_MENU_DEFINITION,
        'image_path'      : 'rich_menu_manager/rich_menus/main_menu_image.png',
        'set_default'     : True,
        'replaces'        : None
    }
]
