# rich_menu_manager/rich_menu_normalizer.py
"""
把前端送來的 Rich Menu JSON 中「應該是整數」的欄位轉成整數。
瀏覽器端的版面編輯工具在拖拉區域時，常常會算出像 `833.3333` 這樣的小數，
但 LINE SDK 的 `RichMenuSize` 與 `RichMenuBounds` 都是嚴格整數欄位，直接解析會失敗。

這裡只處理已知的幾何欄位：
- `size.width`、`size.height`
- `areas[*].bounds.x`、`y`、`width`、`height`
其他欄位一律不碰；型別不是數字的值也不轉換、不報錯，交給後面的嚴格解析決定。
"""
import math
import logging
from decimal import Decimal, ROUND_HALF_UP

logger = logging.getLogger(__name__)

SIZE_KEYS = ("width", "height")
BOUNDS_KEYS = ("x", "y", "width", "height")

def round_half_away_from_zero(value: float) -> int:
    """
    四捨五入到最接近的整數，剛好在 .5 時往遠離 0 的方向進位 (10.5 → 11、-10.5 → -11)。
    Python 內建的 round() 是銀行家捨入 (10.5 → 10)，所以不能直接用。
    Decimal(value) 會保留 float 的精確值，避免 0.49999999999999994 這類數字被誤進位。
    """
    if value.is_integer():
        # 超過 Decimal 預設精度的大數也走這裡，quantize 會拋出 InvalidOperation
        return int(value)
    return int(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))

def _to_int(value):
    # bool 是 int 的子類別，JSON 的 true/false 不是幾何數值
    if isinstance(value, bool):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return round_half_away_from_zero(value)
    return value

def _normalize_keys(mapping: dict, keys: tuple) -> None:
    for key in keys:
        if key in mapping:
            mapping[key] = _to_int(mapping[key])

def normalize_rich_menu_numbers(document: dict) -> dict:
    """
    直接修改傳入的字典，並回傳同一個物件方便串接。
    `areas` 的順序完全不變，後面的區域可能覆蓋前面的區域，順序對 LINE 平台有意義。
    """
    size = document.get("size")
    if isinstance(size, dict):
        _normalize_keys(size, SIZE_KEYS)

    areas = document.get("areas")
    if isinstance(areas, list):
        for area in areas:
            if not isinstance(area, dict):
                continue
            bounds = area.get("bounds")
            if isinstance(bounds, dict):
                _normalize_keys(bounds, BOUNDS_KEYS)

    return document
