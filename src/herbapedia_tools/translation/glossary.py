"""Curated Chinese renderings of Ayurveda terminology."""

from __future__ import annotations

from typing import Any

from .charmap import to_simplified

# English label -> Traditional Chinese label and optional description.
_TERMS: dict[str, tuple[str, str | None]] = {
    # Doshas
    "Vata": ("風型（瓦塔）", "主司運動、呼吸、循環及神經系統功能，由風與以太元素組成"),
    "Pitta": ("火型（皮塔）", "主司消化、代謝、轉化及體溫，由火與水元素組成"),
    "Kapha": ("水型（卡法）", "主司結構、穩定、潤滑及免疫功能，由土與水元素組成"),
    # Gunas
    "Guru": ("重", None),
    "Laghu": ("輕", None),
    "Sheeta": ("寒", None),
    "Ushna": ("熱", None),
    "Snigdha": ("油潤", None),
    "Ruksha": ("乾燥", None),
    "Manda": ("緩", None),
    "Tikshna": ("銳", None),
    "Shlakshna": ("滑", None),
    "Khara": ("糙", None),
    "Sandra": ("稠", None),
    "Drava": ("液", None),
    "Mrudu": ("軟", None),
    "Kathina": ("硬", None),
    "Sthira": ("穩", None),
    "Chala": ("動", None),
    "Sukshma": ("細", None),
    "Sthula": ("粗", None),
    "Picchila": ("黏", None),
    "Vishada": ("清", None),
    # Rasas
    "Madhura": ("甘味", None),
    "Amla": ("酸味", None),
    "Lavana": ("鹹味", None),
    "Katu": ("辛味", None),
    "Tikta": ("苦味", None),
    "Kashaya": ("澀味", None),
    # Vipakas
    "Madhura Vipaka": ("甘味後味", None),
    "Amla Vipaka": ("酸味後味", None),
    "Katu Vipaka": ("辛味後味", None),
    # Viryas
    "Ushna Virya": ("熱性", None),
    "Sheeta Virya": ("寒性", None),
}


def lookup_term(label: Any) -> dict[str, str] | None:
    """Return ``zh-Hant``/``zh-Hans`` labels (and descriptions when curated) for an English term."""
    if not isinstance(label, str):
        return None
    entry = _TERMS.get(label.strip())
    if entry is None:
        return None
    traditional, description = entry
    result = {"zh-Hant": traditional, "zh-Hans": to_simplified(traditional)}
    if description:
        result["description.zh-Hant"] = description
        result["description.zh-Hans"] = to_simplified(description)
    return result
