from __future__ import annotations

import copy

from conftest import plant_payload, tcm_payload

from herbapedia_tools.core.models import DocumentRole
from herbapedia_tools.translation import PLACEHOLDER_MARKER, fill_translations, is_placeholder, to_simplified
from herbapedia_tools.translation.filler import field_words, fill_language_map


def _leaf_values(value, path=""):
    if isinstance(value, dict):
        for key, item in value.items():
            yield from _leaf_values(item, f"{path}.{key}")
    elif isinstance(value, list):
        for position, item in enumerate(value):
            yield from _leaf_values(item, f"{path}[{position}]")
    else:
        yield path, value


def test_simplified_is_derived_from_traditional() -> None:
    language_map = {"en": "Tonifies qi", "zh-Hant": "補氣養血"}
    changes = fill_language_map(language_map, "tcmFunctions", subject_zh="人參", subject_en="Ginseng")
    assert language_map["zh-Hans"] == "补气养血"
    assert [(item.language, item.action) for item in changes] == [("zh-Hans", "derived")]


def test_traditional_is_copied_from_simplified() -> None:
    language_map = {"en": "Tonic", "zh-Hans": "补气"}
    fill_language_map(language_map, "dosage", subject_zh="人参", subject_en="Ginseng")
    assert language_map["zh-Hant"] == "补气"


def test_english_only_value_gets_marked_chinese_placeholders() -> None:
    language_map = {"en": "Used for fatigue"}
    changes = fill_language_map(language_map, "tcmTraditionalUsage", subject_zh="人參", subject_en="Ginseng")
    assert language_map["zh-Hant"] == f"{PLACEHOLDER_MARKER}【人參】Traditional Usage內容待翻譯補充。"
    assert language_map["zh-Hans"] == to_simplified(language_map["zh-Hant"])
    assert {item.action for item in changes} == {"placeholder"}
    assert is_placeholder(language_map["zh-Hans"])


def test_chinese_only_value_gets_marked_english_placeholder() -> None:
    language_map = {"zh-Hant": "熱"}
    fill_language_map(language_map, "tcmHistory", subject_zh="人參", subject_en="Ginseng")
    assert language_map["en"] == f"{PLACEHOLDER_MARKER} [History information for Ginseng - translation needed]"
    assert language_map["zh-Hans"] == "热"



def test_non_text_values_are_kept_as_authored() -> None:
    document = plant_payload("ginseng", description={"en": "Root of Panax ginseng", "zh-Hant": ["人參"]})
    updated, changes = fill_translations(document, DocumentRole.PLANT, "ginseng")
    assert updated["description"]["zh-Hant"] == ["人參"]
    assert [(item.language, item.action) for item in changes if item.field == "description"] == [
        ("zh-Hans", "placeholder")
    ]


def test_blank_value_is_filled() -> None:
    language_map = {"en": "Tonic", "zh-Hant": "補氣", "zh-Hans": "  "}
    fill_language_map(language_map, "dosage", subject_zh="人參", subject_en="Ginseng")
    assert language_map["zh-Hans"] == "补气"


def test_field_words_drop_system_prefix() -> None:
    assert field_words("tcmSafetyConsideration") == "Safety Consideration"
    assert field_words("dosage") == "Dosage"
    assert field_words("nature/warm.description") == "Description"


def test_filling_only_adds_keys_and_is_idempotent() -> None:
    document = tcm_payload(
        "ren-shen",
        "ginseng",
        tcmFunctions={"en": "Tonifies qi"},
        tcmHistory={"zh-Hant": "神農本草經記載"},
        dosage={"en": "3-9 g", "zh-Hant": "三至九克", "zh-Hans": "三至九克"},
    )
    original = copy.deepcopy(document)
    filled, changes = fill_translations(document, DocumentRole.TCM_PROFILE, "ren-shen")

    assert document == original
    assert changes
    original_leaves = dict(_leaf_values(original))
    filled_leaves = dict(_leaf_values(filled))
    for path, value in original_leaves.items():
        assert filled_leaves[path] == value
    assert filled["dosage"] == original["dosage"]

    again, more = fill_translations(filled, DocumentRole.TCM_PROFILE, "ren-shen")
    assert more == []
    assert again == filled


def test_name_is_never_synthesised() -> None:
    document = plant_payload("ginseng", name={"en": "Ginseng"})
    filled, changes = fill_translations(document, DocumentRole.PLANT, "ginseng")
    assert filled["name"] == {"en": "Ginseng"}
    assert not [item for item in changes if item.field == "name"]


def test_plant_common_name_copies_chinese_from_name() -> None:
    document = plant_payload("ginseng", commonName={"en": "Asian ginseng"})
    filled, changes = fill_translations(document, DocumentRole.PLANT, "ginseng")
    assert filled["commonName"]["zh-Hant"] == "人參"
    assert filled["commonName"]["zh-Hans"] == "人参"
    assert [item.action for item in changes if item.field == "commonName"] == ["copied", "copied"]


def test_reference_concepts_use_glossary_before_placeholders() -> None:
    dataset = {
        "@graph": [
            {"@id": "ayurveda/dosha/vata", "prefLabel": {"en": "Vata"}, "description": {"en": "Air and ether"}},
            {"@id": "ayurveda/guna/unknown", "prefLabel": {"en": "Unlisted"}},
        ]
    }
    filled, changes = fill_translations(dataset, DocumentRole.REFERENCE_DATASET)
    vata, unknown = filled["@graph"]
    assert vata["prefLabel"]["zh-Hant"] == "風型（瓦塔）"
    assert vata["prefLabel"]["zh-Hans"] == "风型（瓦塔）"
    assert not is_placeholder(vata["description"]["zh-Hant"])
    assert is_placeholder(unknown["prefLabel"]["zh-Hant"])
    assert {item.action for item in changes} == {"glossary", "placeholder"}
