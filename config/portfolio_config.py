import os
from dotenv import load_dotenv

load_dotenv()

# Account label given to holdings typed in by hand rather than imported.
MANUAL_ACCOUNT = os.getenv("PORTFOLIO_MANUAL_ACCOUNT", "手入力")
MANUAL_ID_PREFIX = os.getenv("PORTFOLIO_MANUAL_ID_PREFIX", "manual")

# Rank for asset types missing from ASSET_TYPE_ORDER: after listed
# securities, before cash and crypto.
DEFAULT_TYPE_RANK = int(os.getenv("PORTFOLIO_DEFAULT_TYPE_RANK", "90"))

ASSET_TYPE_ORDER = {
    "国内株式": 1,
    "米国株式": 2,
    "中国株式": 3,
    "アセアン株式": 4,
    "投資信託": 5,
    "金・プラチナ": 6,
    "国内債券": 7,
    "外国債券": 8,
    "現金": 98,
    "仮想通貨": 99,
}
