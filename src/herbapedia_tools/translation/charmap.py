"""Traditional to Simplified Chinese glyph conversion for medical vocabulary."""

from __future__ import annotations

# Pairs are (traditional, simplified); glyphs identical in both scripts are omitted.
_PAIRS = (
    "藥药 醫医 學学 蔘参 氣气 補补 養养 實实 虛虚 熱热 證证 脈脉 驚惊 體体 "
    "腎肾 膽胆 腸肠 腦脑 陰阴 陽阳 經经 絡络 臟脏 膚肤 髮发 顏颜 額额 頭头 "
    "劑剂 療疗 驗验 礙碍 鎮镇 靜静 奮奋 關关 節节 變变 膠胶 顆颗 貼贴 飲饮 "
    "湯汤 衝冲 質质 種种 類类 屬属 漿浆 濃浓 備备 製制 葉叶 後后 乾干 濕湿 "
    "澀涩 鹹咸 鬱郁 積积 穩稳 動动 細细 軟软 緩缓 銳锐 潤润 歷历 紀纪 記记 "
    "載载 錄录 傳传 統统 說说 調调 強强 壯壮 興兴 華华 國国 東东 區区 專专 "
    "業业 書书 據据 結结 構构 機机 樣样 這这 麼么 時时 們们 個个 為为 與与 "
    "將将 於于 來来 長长 開开 進进 過过 運运 還还 應应 譯译 內内 "
    "輕轻 風风 稱称 參参 蟲虫 淺浅 護护 腫肿 癥症 嚴严 險险 懷怀 婦妇 "
    "兒儿 議议 無无 減减 壓压 導导 瀉泻"
)

CHAR_MAP: dict[str, str] = {
    pair[0]: pair[1] for pair in _PAIRS.split() if len(pair) == 2 and pair[0] != pair[1]
}

_TABLE = str.maketrans(CHAR_MAP)


def to_simplified(text: str) -> str:
    """Convert known traditional glyphs; unknown glyphs pass through unchanged."""
    if not text:
        return text
    return text.translate(_TABLE)
