import pytest

from normalize import (
    DEFAULT_CONFIDENCE,
    normalize_confidence,
    normalize_diagnosis,
    normalize_identification,
    normalize_severity,
)


@pytest.mark.parametrize("raw, expected", [
    ("low", "Mild"),
    ("Mild", "Mild"),
    ("MEDIUM", "Moderate"),
    ("moderate", "Moderate"),
    ("High", "Severe"),
    ("severe", "Severe"),
    ("  severe ", "Severe"),
    ("None", "None"),
    ("critical", "None"),
    ("", "None"),
    (None, "None"),
    (3, "None"),
])
def test_normalize_severity(raw, expected):
    assert normalize_severity(raw) == expected


@pytest.mark.parametrize("raw, expected", [
    (72, 72),
    (0, 0),
    (100, 100),
    (0.92, 92),
    (88.6, 89),
    ("95", 95),
    ("87%", 87),
    (150, 100),
    (-5, 0),
    ("very sure", DEFAULT_CONFIDENCE),
    (None, DEFAULT_CONFIDENCE),
    (True, DEFAULT_CONFIDENCE),
    ([90], DEFAULT_CONFIDENCE),
    (float("nan"), DEFAULT_CONFIDENCE),
    (float("inf"), DEFAULT_CONFIDENCE),
    (float("-inf"), DEFAULT_CONFIDENCE),
    ("1e999", DEFAULT_CONFIDENCE),
    (10 ** 400, 100),
])
def test_normalize_confidence(raw, expected):
    assert normalize_confidence(raw) == expected


class TestNormalizeDiagnosis:
    def test_empty_object_is_fully_defaulted(self):
        result = normalize_diagnosis({})
        assert result.model_dump() == {
            "diseaseName": "Unknown",
            "plantName": "Unknown",
            "severity": "None",
            "symptoms": "No symptoms provided",
            "treatment": "Treatment not specified",
            "prevention": "No prevention info provided",
            "confidence": 85,
        }

    @pytest.mark.parametrize("blank", [None, "", "   ", []])
    def test_blank_values_are_defaulted(self, blank):
        result = normalize_diagnosis({"diseaseName": blank, "treatment": blank})
        assert result.diseaseName == "Unknown"
        assert result.treatment == "Treatment not specified"

    def test_description_stands_in_for_symptoms(self):
        result = normalize_diagnosis({"symptoms": "", "description": "Yellow halos"})
        assert result.symptoms == "Yellow halos"

    def test_list_values_are_joined(self):
        result = normalize_diagnosis({"treatment": ["Prune", "Spray neem oil"]})
        assert result.treatment == "Prune; Spray neem oil"


class TestNormalizeIdentification:
    def test_values_pass_through(self):
        data = {
            "plantName": "Snake Plant",
            "scientificName": "Dracaena trifasciata",
            "plantType": "Succulent",
            "suitableEnvironment": "Low to bright light",
            "careInstructions": "Water sparingly",
            "confidence": 91,
        }
        assert normalize_identification(data).model_dump() == data

    def test_missing_values_are_defaulted(self):
        result = normalize_identification({"plantName": "Aloe"})
        assert result.model_dump() == {
            "plantName": "Aloe",
            "scientificName": "Unknown",
            "plantType": "Unknown",
            "suitableEnvironment": "Not specified",
            "careInstructions": "No care instructions provided",
            "confidence": 85,
        }
