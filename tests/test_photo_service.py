"""Tests for photo analysis."""

import asyncio

import pytest

from food_diary.domain.vision import LabelPrediction
from food_diary.services.label_mapper import LabelMapper
from food_diary.services.photo import PhotoAnalysisService, recalculate_macros
from tests.conftest import FakeClassifier, make_food


def _service(catalog_service, classifier) -> PhotoAnalysisService:
    return PhotoAnalysisService(
        classifier=classifier, label_mapper=LabelMapper(catalog_service)
    )


def test_analyze_maps_top_label_and_computes_macros(catalog_service) -> None:
    classifier = FakeClassifier(
        predictions=[
            LabelPrediction(label="Apple", confidence=0.9),
            LabelPrediction(label="banana", confidence=0.1),
        ]
    )
    service = _service(catalog_service, classifier)

    result = asyncio.run(service.analyze(b"\xff\xd8\xffimage", owner_id="u1"))

    assert result.detected_label == "apple"
    assert result.confidence == 0.9
    assert result.food is not None
    assert result.food.name == "Яблоко"
    assert result.estimated_weight_g == 146
    assert result.calories == 76
    assert result.protein_g == 0.4
    assert result.carbs_g == 20.4
    assert result.portion.kind == "fruit"


def test_classifier_failure_uses_fallback_label(catalog_service) -> None:
    service = _service(catalog_service, FakeClassifier(fail=True))

    result = asyncio.run(service.analyze(b"image"))

    assert result.detected_label == "food"
    assert result.confidence == 0.5
    assert result.estimated_weight_g == 175
    assert result.food is None
    assert result.calories == 0


def test_empty_predictions_and_missing_classifier(catalog_service) -> None:
    empty = _service(catalog_service, FakeClassifier(predictions=[]))
    missing = _service(catalog_service, None)

    assert asyncio.run(empty.analyze(b"image")).detected_label == "food"
    assert asyncio.run(missing.analyze(b"image")).detected_label == "food"


def test_empty_image_is_rejected(catalog_service) -> None:
    classifier = FakeClassifier()
    service = _service(catalog_service, classifier)

    with pytest.raises(ValueError):
        asyncio.run(service.analyze(b""))
    assert classifier.calls == 0


def test_recalculate_macros() -> None:
    food = make_food("f1", "Rice", calories=130, protein_g=2.7, fat_g=0.3, carbs_g=28)

    macros = recalculate_macros(food, 250)

    assert macros.calories == 325
    assert macros.protein_g == 6.8
    assert macros.carbs_g == 70
    assert recalculate_macros(None, 100).calories == 0
    assert recalculate_macros(food, 0).calories == 0
